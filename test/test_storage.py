"""
Storage module behavioral tests (cells, option values, slot arena).

Scope
- Validate cell identity: shared writes, clones sharing cells but not containers.
- Validate Multi positional writes (overwrite in place, append at the tail only).
- Validate seed() conversion of registration defaults.
- Validate the single-writer discipline of Storage slots.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from flagstaff.storage import Cell, Single, Multi, Storage, seed


class TestCell(TestCase):
    def testSharedWritesAreVisibleToEveryHolder(self):
        cell = Cell("a")
        first, second = Single(cell), Single(cell)
        first.write(0, "b")
        self.assertEqual(second.cell.text, "b")

    def testCellRejectsNonString(self):
        with self.assertRaises(TypeError):
            Cell(1)

    def testStrAndRepr(self):
        self.assertEqual(str(Cell("x")), "x")
        self.assertEqual(repr(Cell("x")), "Cell('x')")


class TestOptionValue(TestCase):
    def testSingleHoldsExactlyOneCell(self):
        value = Single.of("localhost")
        value.write(0, "a")
        value.write(3, "b")
        self.assertEqual(len(value), 1)
        self.assertEqual(value.texts(), ("b",))

    def testMultiOverwritesInPlace(self):
        value = Multi.of("a", "b", "c")
        cells = value.cells()
        value.write(1, "z")
        self.assertIs(value.cells()[1], cells[1])
        self.assertEqual(value.texts(), ("a", "z", "c"))

    def testMultiAppendsAtTail(self):
        value = Multi.of("a")
        value.write(1, "b")
        self.assertEqual(value.texts(), ("a", "b"))

    def testMultiRejectsGaps(self):
        value = Multi.of("a")
        with self.assertRaises(IndexError):
            value.write(2, "c")

    def testCloneSharesCellsButNotContainer(self):
        value = Multi.of("a", "b")
        clone = value.clone()
        self.assertIsNot(clone, value)
        self.assertEqual([id(cell) for cell in clone.cells()], [id(cell) for cell in value.cells()])

        clone.write(0, "x")
        clone.write(2, "y")
        self.assertEqual(value.texts(), ("x", "b"))
        self.assertEqual(clone.texts(), ("x", "b", "y"))

    def testSingleCloneSharesCell(self):
        value = Single.of("a")
        self.assertIs(value.clone().cell, value.cell)

    def testRendering(self):
        self.assertEqual(str(Single.of("localhost")), "localhost")
        self.assertEqual(str(Multi.of("a", "b", "c")), "a b c")
        self.assertEqual(str(Multi()), "")


class TestSeed(TestCase):
    def testStringSeedsSingle(self):
        value = seed("localhost")
        self.assertIsInstance(value, Single)
        self.assertEqual(value.texts(), ("localhost",))

    def testIntegerSeedsDecimalString(self):
        self.assertEqual(seed(80).texts(), ("80",))

    def testNegativeIntegerRejected(self):
        with self.assertRaises(ValueError):
            seed(-1)

    def testBooleanRejected(self):
        with self.assertRaises(TypeError):
            seed(True)

    def testIterableSeedsMulti(self):
        value = seed(["libmath", "../third"])
        self.assertIsInstance(value, Multi)
        self.assertEqual(value.texts(), ("libmath", "../third"))

    def testIterableOfNonStringsRejected(self):
        with self.assertRaises(TypeError):
            seed(["a", 1])

    def testUnsupportedTypeRejected(self):
        with self.assertRaises(TypeError):
            seed(1.5)


class TestStorage(TestCase):
    def setUp(self):
        self.storage = Storage()
        self.slot = self.storage.allocate(Multi.of("a", "b"))

    def testSlotsHaveStableIndices(self):
        other = self.storage.allocate(Single.of("x"))
        self.assertEqual((self.slot, other), (0, 1))
        self.assertEqual(len(self.storage), 2)
        self.assertEqual(self.storage.view(other).texts(), ("x",))

    def testAllocateRejectsPlainValues(self):
        with self.assertRaises(TypeError):
            self.storage.allocate("x")

    def testWriterYieldsLiveValue(self):
        with self.storage.writer(self.slot) as value:
            value.write(2, "c")
        self.assertEqual(self.storage.view(self.slot).texts(), ("a", "b", "c"))
        self.assertFalse(self.storage.leased(self.slot))

    def testSecondWriterRejected(self):
        self.storage.acquire(self.slot)
        with self.assertRaises(RuntimeError):
            self.storage.acquire(self.slot)
        self.storage.release(self.slot)
        self.storage.acquire(self.slot)

    def testReleaseWithoutLeaseRejected(self):
        with self.assertRaises(RuntimeError):
            self.storage.release(self.slot)

    def testWriterReleasesOnError(self):
        with self.assertRaises(KeyError):
            with self.storage.writer(self.slot):
                raise KeyError("boom")
        self.assertFalse(self.storage.leased(self.slot))


if __name__ == "__main__":
    unittest.main()
