"""
Flagstaff storage: value cells, option values and the slot arena.

Overview
- Cell
  • One mutable string shared by every holder. Identity matters: two holders of
    the same cell observe each other's writes.

- Single / Multi (OptionValue)
  • Single: exactly one cell.
  • Multi: an ordered sequence of cells (zero or more values).
  • clone() copies the container only; the cells are the same objects.

- Storage
  • Arena of option slots addressed by stable integer index.
  • Slots are written under a lease: acquire(index) hands out the live value and
    refuses a second writer until release(index).

Invariants
- A Single always holds exactly one cell.
- A Multi only grows by appending at the tail; existing positions are
  overwritten in place, never reordered.

Quick example
    >>> storage = Storage()
    >>> slot = storage.allocate(Multi.of("a", "b"))
    >>> with storage.writer(slot) as value:
    ...     value.write(1, "z")
    >>> storage.view(slot).texts()
    ('a', 'z')
"""
from collections.abc import Iterable
from contextlib import contextmanager

from rich.text import Text


class Cell:
    """
    Shared, mutable storage for one string.
    """
    __slots__ = ("text",)

    def __init__(self, text="", /):
        if not isinstance(text, str):
            raise TypeError("cell text must be a string")
        self.text = text

    def get(self):
        return self.text

    def set(self, text, /):
        self.text = text

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"Cell({self.text!r})"


class OptionValue:
    """
    Tagged union base for Single and Multi.

    Subclasses implement write(index, text), cells() and clone(); rendering and
    text extraction are shared.
    """
    __slots__ = ()

    def cells(self):
        raise NotImplementedError

    def write(self, index, text, /):
        raise NotImplementedError

    def clone(self):
        raise NotImplementedError

    def texts(self):
        """
        Snapshot of the current strings, in positional order.
        """
        return tuple(cell.text for cell in self.cells())

    def __len__(self):
        return len(self.cells())

    def __str__(self):
        return " ".join(self.texts())

    def __rich__(self):
        return Text(str(self))


class Single(OptionValue):
    """
    Exactly one value cell.
    """
    __slots__ = ("cell",)

    def __init__(self, cell, /):
        if not isinstance(cell, Cell):
            raise TypeError("Single() argument must be a cell")
        self.cell = cell

    @classmethod
    def of(cls, text, /):
        return cls(Cell(text))

    def cells(self):
        return (self.cell,)

    def write(self, index, text, /):
        # A scalar has one position; every write lands on it.
        self.cell.set(text)

    def clone(self):
        return Single(self.cell)

    def __repr__(self):
        return f"Single({self.cell.text!r})"


class Multi(OptionValue):
    """
    Ordered sequence of value cells.
    """
    __slots__ = ("items",)

    def __init__(self, cells=(), /):
        self.items = list(cells)
        if not all(isinstance(cell, Cell) for cell in self.items):
            raise TypeError("Multi() argument must be an iterable of cells")

    @classmethod
    def of(cls, *texts):
        return cls(map(Cell, texts))

    def cells(self):
        return tuple(self.items)

    def write(self, index, text, /):
        """
        Overwrite position `index` in place, or append when it is the tail.
        """
        if index < len(self.items):
            self.items[index].set(text)
        elif index == len(self.items):
            self.items.append(Cell(text))
        else:
            raise IndexError(f"cannot write position {index} of a {len(self.items)}-value sequence")

    def clone(self):
        return Multi(self.items)

    def __repr__(self):
        return f"Multi({list(self.texts())!r})"


def seed(default, /):
    """
    Build an OptionValue from a registration default.

    - str → Single
    - int (non-negative, not bool) → Single holding its decimal string
    - any other iterable of str → Multi
    """
    match default:
        case bool():
            raise TypeError("option default cannot be a boolean")
        case str():
            return Single.of(default)
        case int():
            if default < 0:
                raise ValueError("numeric option default must be non-negative")
            return Single.of(str(default))
        case Iterable():
            texts = tuple(default)
            if not all(isinstance(text, str) for text in texts):
                raise TypeError("sequence option default must contain only strings")
            return Multi.of(*texts)
    raise TypeError("option default must be a string, an integer or an iterable of strings")


class Storage:
    """
    Arena of option values addressed by stable slot index.

    Slots are never freed; re-registering a key allocates a new slot, so handles
    bound to the old slot keep reading the old value.
    """

    def __init__(self):
        self._slots = []
        self._leased = set()

    def allocate(self, value, /):
        if not isinstance(value, OptionValue):
            raise TypeError("allocate() argument must be an option value")
        self._slots.append(value)
        return len(self._slots) - 1

    def view(self, index, /):
        return self._slots[index]

    def acquire(self, index, /):
        """
        Lease the live value of a slot for writing.

        Raises RuntimeError when the slot already has a writer.
        """
        value = self._slots[index]
        if index in self._leased:
            raise RuntimeError(f"slot {index} is already being written")
        self._leased.add(index)
        return value

    def release(self, index, /):
        try:
            self._leased.remove(index)
        except KeyError:
            raise RuntimeError(f"slot {index} is not being written") from None

    def leased(self, index, /):
        return index in self._leased

    @contextmanager
    def writer(self, index, /):
        value = self.acquire(index)
        try:
            yield value
        finally:
            self.release(index)

    def __len__(self):
        return len(self._slots)

    def __repr__(self):
        return f"Storage({self._slots!r})"


__all__ = (
    "Cell",
    "OptionValue",
    "Single",
    "Multi",
    "Storage",
    "seed",
)
