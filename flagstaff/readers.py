"""
Flagstaff consumption readers.

A Reader is the transient state machine created every time a key token is
matched. It walks an index through the key's option value as the following
non-key tokens arrive and reports whether the key's arity is satisfied.

Arity
- arity >= 0: fixed; the reader finishes once `arity` values were written.
- arity < 0: open-ended; the reader never finishes by itself and is only
  superseded by the next key or by the end of input.
"""
from enum import Enum


class ReadStatus(Enum):
    PROCESSING = "processing"
    FINISH = "finish"


class Reader:
    """
    Per-key consumption state: {value, arity, index}.
    """
    __slots__ = ("value", "arity", "index")

    def __init__(self, value, arity, /):
        self.value = value
        self.arity = arity
        self.index = 0

    def process(self, token, /):
        """
        Write `token` at the current position and advance.

        Single values overwrite their one cell; Multi values overwrite the cell at
        the current position or append a new one at the tail.
        """
        self.value.write(self.index, token)
        self.index += 1
        if self.arity >= 0 and self.index == self.arity:
            return ReadStatus.FINISH
        return ReadStatus.PROCESSING

    def next_key(self):
        """
        Report whether a new key may interrupt this reader.

        PROCESSING means the fixed arity is not satisfied yet, which the caller
        treats as an ordering fault.
        """
        if self.arity < 0 or self.index == self.arity:
            return ReadStatus.FINISH
        return ReadStatus.PROCESSING

    @property
    def finished(self):
        return self.next_key() is ReadStatus.FINISH

    def __repr__(self):
        return f"Reader(value={self.value!r}, arity={self.arity}, index={self.index})"


__all__ = (
    "ReadStatus",
    "Reader",
)
