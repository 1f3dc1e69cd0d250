"""
Flagstaff faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- FlagException / FlagWarning: base types that carry a message plus options and
  know how to render themselves with rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful/exitcode).

Behavior
- Outside shell mode, errors are raised and warnings go through warnings.warn,
  so callers can catch, filter and assert them.
- In shell mode, faults are printed to stderr; errors then exit the process with
  the configured exit code (0 unless the host chooses otherwise).
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parsing errors (211xx): ORDERING
    - reading errors (212xx): CONVERSION, SHAPE
    - warnings (22xxx): DUPLICATE_KEY, DROPPED_TOKEN
    """
    # --- parsing errors ---
    ORDERING      = 21101

    # --- reading errors ---
    CONVERSION    = 21201
    SHAPE         = 21202

    # --- warnings ---
    DUPLICATE_KEY = 22101
    DROPPED_TOKEN = 22102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, kind, palette, /):
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = text(getattr(main, "__prog__", fault.options.get("name", "flagstaff")), "prog-name")
    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(type(fault).code.normalize(), "code"),
        " | ",
        text(type(fault).title.title(), f"{kind}-title"),
        " ]"
    )
    message = text(fault.message, f"{kind}-message")
    renders = [message]
    if hint := fault.options.get("hint", type(fault).hint):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class FlagException(Exception):
    code = Unset
    title = "error"
    hint = ""

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "error", {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(self.options.get("exitcode", 0))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OrderingError(FlagException):
    code = FaultCode.ORDERING
    title = "parameters not matched"
    hint = "give every fixed-length option all of its values before the next option"


class ConversionError(FlagException):
    code = FaultCode.CONVERSION
    title = "conversion failed"
    hint = "check the value given on the command line"


class ShapeError(FlagException):
    code = FaultCode.SHAPE
    title = "shape mismatch"
    hint = "read scalar options with read() and sequences with read_vector()"


class FlagWarning(Warning):
    code = Unset
    title = "warning"
    hint = ""

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "warning", {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateKeyWarning(FlagWarning):
    code = FaultCode.DUPLICATE_KEY
    title = "duplicate key"
    hint = "the previous registration and its handle are no longer parsed"


class DroppedTokenWarning(FlagWarning):
    code = FaultCode.DROPPED_TOKEN
    title = "dropped token"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, errors are
      raised and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "FlagException",
    "OrderingError",
    "ConversionError",
    "ShapeError",
    "FlagWarning",
    "DuplicateKeyWarning",
    "DroppedTokenWarning",
    "trigger",
)
