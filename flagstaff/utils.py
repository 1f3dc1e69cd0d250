"""
Flagstaff utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- unsigned(text)
  • Converter for non-negative decimal integers, used with Handle.read(...).

- UNBOUNDED
  • Arity marker for open-ended sequences (consume values until the next key).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> unsigned("8080")
    8080
"""
import functools
from typing import final


UNBOUNDED = -1


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __ror__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.
    """
    return object if object is not Unset else default


def unsigned(text, /):
    """
    Convert a decimal string into a non-negative int.

    Raises ValueError for anything int() rejects and for negative numbers, so it
    plugs into Handle.read(...) exactly like int or float.
    """
    if (value := int(text)) < 0:
        raise ValueError(f"invalid literal for unsigned(): {text!r}")
    return value


def typename(type, /):
    """
    Human-readable name of a converter (class or plain callable) for messages.
    """
    return getattr(type, "__name__", None) or repr(type)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "unsigned",
    "typename",

    # Types
    "UnsetType",

    # Constants
    "Unset",
    "UNBOUNDED",
)
