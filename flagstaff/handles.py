"""
Flagstaff value handles.

A Handle is what register() gives back to the caller: a read view bound to the
storage slot allocated for the option. It is meant to be read after parsing.

Reading
- read(type=str): scalar read, converted with `type` (int, float, unsigned, ...).
- read_vector(): the cells of a sequence, in positional order.
- read_list(type=str): every value of a sequence, converted.
- read_item(cell, type=str): convert one cell obtained from read_vector().

Faults
- ShapeError: scalar read of a sequence, or sequence read of a scalar.
- ConversionError: the converter rejected the stored string. The message names
  the calling file and line, the option key and the target type.

Quick example
    port = registry.register_unsigned("-p", 80, "port")
    registry.parse(["prog", "-p", "8080"])
    port.read(int)  # 8080
"""
import sys

from .faults import ConversionError, ShapeError, trigger
from .storage import Single, Multi
from .utils import typename


class Handle:
    """
    Read view over one storage slot.
    """
    __slots__ = ("key", "slot", "_storage", "_options")

    def __init__(self, key, slot, storage, options, /):
        self.key = key
        self.slot = slot
        self._storage = storage
        self._options = options

    @property
    def value(self):
        return self._storage.view(self.slot)

    def read(self, type=str, /):
        """
        Read a scalar option converted by `type`.
        """
        if not isinstance(value := self.value, Single):
            return trigger(ShapeError(f"option {self.key!r} holds a sequence, not a single value"), **self._options)
        return self._convert(value.cell.text, type)

    def read_vector(self):
        """
        Return the cells of a sequence option.
        """
        if not isinstance(value := self.value, Multi):
            return trigger(ShapeError(f"option {self.key!r} holds a single value, not a sequence"), **self._options)
        return value.cells()

    def read_list(self, type=str, /):
        values = []
        for cell in self.read_vector():
            values.append(self._convert(cell.text, type))
        return values

    def read_item(self, cell, type=str, /):
        return self._convert(cell.text, type)

    def _convert(self, text, type, /):
        if type is str:
            return text
        try:
            return type(text)
        except (ValueError, TypeError):
            # Point at the caller of the public read method, not at this helper.
            frame = sys._getframe(2)
            return trigger(ConversionError(
                f"file: {frame.f_code.co_filename}, line: {frame.f_lineno}, "
                f"option {self.key!r}: {text!r} to {typename(type)} error"
            ), **self._options)

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f"Handle(key={self.key!r}, slot={self.slot}, value={self.value!r})"


__all__ = (
    "Handle",
)
