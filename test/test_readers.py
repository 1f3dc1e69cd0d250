"""
Readers module behavioral tests (per-key consumption state machine).

Scope
- Validate fixed-arity completion and the ordering check done by next_key().
- Validate open-ended readers never finish on their own.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from flagstaff.readers import ReadStatus, Reader
from flagstaff.storage import Single, Multi
from flagstaff.utils import UNBOUNDED


class TestReader(TestCase):
    def testScalarFinishesAfterOneValue(self):
        value = Single.of("localhost")
        reader = Reader(value, 1)
        self.assertIs(reader.next_key(), ReadStatus.PROCESSING)
        self.assertIs(reader.process("foo"), ReadStatus.FINISH)
        self.assertEqual(value.texts(), ("foo",))
        self.assertTrue(reader.finished)

    def testFixedSequenceFillsInOrder(self):
        value = Multi.of("libmath", "../third")
        reader = Reader(value, 2)
        self.assertIs(reader.process("x"), ReadStatus.PROCESSING)
        self.assertIs(reader.next_key(), ReadStatus.PROCESSING)
        self.assertIs(reader.process("y"), ReadStatus.FINISH)
        self.assertIs(reader.next_key(), ReadStatus.FINISH)
        self.assertEqual(value.texts(), ("x", "y"))

    def testFixedSequenceLongerThanDefaultsAppends(self):
        value = Multi.of("a")
        reader = Reader(value, 3)
        reader.process("x")
        reader.process("y")
        self.assertIs(reader.process("z"), ReadStatus.FINISH)
        self.assertEqual(value.texts(), ("x", "y", "z"))

    def testOpenEndedNeverFinishes(self):
        value = Multi.of("a", "b", "c")
        reader = Reader(value, UNBOUNDED)
        self.assertIs(reader.next_key(), ReadStatus.FINISH)
        for token in ("1", "2", "3", "4"):
            self.assertIs(reader.process(token), ReadStatus.PROCESSING)
        self.assertIs(reader.next_key(), ReadStatus.FINISH)
        self.assertEqual(value.texts(), ("1", "2", "3", "4"))

    def testOpenEndedKeepsUnfilledDefaults(self):
        value = Multi.of("a", "b", "c")
        reader = Reader(value, UNBOUNDED)
        reader.process("x")
        self.assertEqual(value.texts(), ("x", "b", "c"))

    def testZeroArityIsSatisfiedImmediately(self):
        reader = Reader(Multi(), 0)
        self.assertIs(reader.next_key(), ReadStatus.FINISH)

    def testIndexAdvances(self):
        reader = Reader(Multi.of("a", "b"), 2)
        reader.process("x")
        self.assertEqual(reader.index, 1)
        self.assertIn("index=1", repr(reader))


if __name__ == "__main__":
    unittest.main()
