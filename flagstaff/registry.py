"""
Flagstaff registry: register options, parse the token stream, render help.

What this module provides
- Registry: owns every registered option and drives parsing.
  • register(...) and the typed helpers hand back a Handle bound to the option's
    storage slot.
  • parse(tokens) walks the tokens once, alternating between seeking a key and
    feeding the active Reader, and writes values into storage in place.
  • print_help() renders every key with its current value and description.
- Option: the registered record (slot, descr, arity, supplied).
- Status: outcome of parse() (PARSED, or HELP when the help sentinel stopped it).

Parsing rules
- Token 0 is conventionally the program path; it matches no key and is dropped.
- The help sentinel (default "--help") renders help and stops parsing, even in
  the middle of an option's values. In shell mode the process exits with status 0.
- A key interrupting a fixed-arity option that has not received all of its values
  is an OrderingError: "the parameters before the <key> parameter are not matched".
- Keys are matched by exact string equality. Each match starts a fresh window;
  values are written from position 0 again.
- Tokens seen while no option is consuming are dropped (with a warning when the
  warning channel is on).

Configuration
- help: help sentinel token.
- warning: enables the warning channel (duplicate keys, dropped tokens).
- shell: print faults and exit instead of raising/warning.
- fancy / colorful: rich rendering chrome for help and faults.
- exitcode: exit status used by faults in shell mode (0 keeps the historic
  "always succeed" behavior).
- detach: readers work on a copy of the sequence container, so values appended
  past the registered default length are not kept (legacy behavior).

Quick start
    from flagstaff import Registry

    registry = Registry()
    host = registry.register_string("-h", "localhost", "host")
    port = registry.register_unsigned("-p", 80, "port")
    packages = registry.register_fixed("-packages", ["libmath", "../third"], "packages")
    registry.parse()
    print(host.read(), port.read(int), packages.read_list())
"""
import os.path
import sys
from collections import defaultdict
from collections.abc import Iterable
from enum import Enum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .handles import Handle
from .readers import ReadStatus, Reader
from .storage import Multi, Storage, seed
from .utils import *


class Status(Enum):
    PARSED = "parsed"
    HELP = "help"


class Option:
    """
    A registered option: its storage slot plus description, arity and whether it
    was matched during parsing.
    """
    __slots__ = ("key", "slot", "descr", "arity", "supplied")

    def __init__(self, key, slot, descr, arity, /):
        self.key = key
        self.slot = slot
        self.descr = descr
        self.arity = arity
        self.supplied = False

    def __repr__(self):
        return (
            f"Option(key={self.key!r}, slot={self.slot}, descr={self.descr!r}, "
            f"arity={self.arity}, supplied={self.supplied})"
        )


class Registry:
    def __init__(
            self,
            help="--help",
            *,
            warning=True,
            shell=False,
            fancy=False,
            colorful=True,
            exitcode=0,
            detach=False,
            name=Unset,
    ):
        if not isinstance(help, str) or not help:
            raise TypeError("registry 'help' must be a non-empty string")
        if not isinstance(exitcode, int):
            raise TypeError("registry 'exitcode' must be an integer")
        if not isinstance(name, str | Unset):
            raise TypeError("registry 'name' must be a string")
        self.help = help
        self.warning = bool(warning)
        self.detach = bool(detach)
        self._storage = Storage()
        self._options = {}
        # Shared with every handle, so later changes reach reads too.
        self._faults = {
            "shell": bool(shell),
            "fancy": bool(fancy),
            "colorful": bool(colorful),
            "exitcode": exitcode,
            "name": coalesce(name, os.path.basename(sys.argv[0]) or "flagstaff"),
        }

    @property
    def name(self):
        return self._faults["name"]

    @property
    def shell(self):
        return self._faults["shell"]

    @property
    def storage(self):
        return self._storage

    # --- registration ---------------------------------------------------------

    def register(self, key, default, arity=Unset, descr=""):
        """
        Register `key` with a default value and arity, and return its Handle.

        Defaults
        - str or non-negative int: scalar, arity 1 unless given.
        - iterable of str: sequence, arity len(default) unless given.
        - arity < 0 (UNBOUNDED): open-ended sequence.

        A key registered again replaces the previous option; the previous handle
        keeps reading its own, no longer parsed, slot.
        """
        if not isinstance(key, str) or not key:
            raise TypeError("option key must be a non-empty string")
        if not isinstance(descr, str):
            raise TypeError("option 'descr' must be a string")
        value = seed(default)
        arity = coalesce(arity, 1 if not isinstance(value, Multi) else len(value))
        if not isinstance(arity, int) or isinstance(arity, bool):
            raise TypeError("option 'arity' must be an integer")
        if isinstance(value, Multi) and 0 <= arity < len(value):
            raise ValueError(f"option 'arity' {arity} is shorter than its {len(value)} default values")

        if key in self._options:
            self.warn(DuplicateKeyWarning(f"option {key!r} was registered again and replaces the previous one"))

        slot = self._storage.allocate(value)
        self._options[key] = Option(key, slot, descr, arity)
        return Handle(key, slot, self._storage, self._faults)

    def register_string(self, key, default, descr=""):
        if not isinstance(default, str):
            raise TypeError("string option default must be a string")
        return self.register(key, default, 1, descr)

    def register_unsigned(self, key, default, descr=""):
        if not isinstance(default, int) or isinstance(default, bool):
            raise TypeError("unsigned option default must be an integer")
        return self.register(key, default, 1, descr)

    def register_fixed(self, key, defaults, descr=""):
        if isinstance(defaults, str) or not isinstance(defaults, Iterable):
            raise TypeError("fixed option defaults must be an iterable of strings")
        defaults = tuple(defaults)
        return self.register(key, defaults, len(defaults), descr)

    def register_open(self, key, defaults=(), descr=""):
        if isinstance(defaults, str) or not isinstance(defaults, Iterable):
            raise TypeError("open option defaults must be an iterable of strings")
        return self.register(key, defaults, UNBOUNDED, descr)

    def register_switch(self, key, descr=""):
        return self.register(key, (), 0, descr)

    # --- configuration --------------------------------------------------------

    def set_help(self, token, /):
        if not isinstance(token, str) or not token:
            raise TypeError("help token must be a non-empty string")
        self.help = token

    def set_warning(self):
        self.warning = True

    def set_nowarning(self):
        self.warning = False

    def warn(self, fault, /):
        if self.warning:
            trigger(fault, **self._faults)

    # --- queries --------------------------------------------------------------

    def has(self, key, /):
        try:
            return self._options[key].supplied
        except KeyError:
            return False

    def keys(self):
        return tuple(self._options)

    def __getitem__(self, key):
        return self._options[key]

    def __contains__(self, key):
        return key in self._options

    def __len__(self):
        return len(self._options)

    # --- parsing --------------------------------------------------------------

    def parse(self, tokens=Unset, /):
        """
        Consume `tokens` (sys.argv when omitted) and write values into storage.

        Returns Status.PARSED, or Status.HELP when the help sentinel stopped
        parsing outside shell mode. Faults are triggered with the registry options:
        raised/warned outside shell mode, printed (and fatal for errors) in it.
        """
        tokens = coalesce(tokens, sys.argv)
        if isinstance(tokens, str):
            raise TypeError("parse() argument must be an iterable of strings, not a string")

        reader = None
        lease = None
        try:
            for index, token in enumerate(tokens):
                if token == self.help:
                    self.print_help()
                    if self.shell:
                        sys.exit(0)
                    return Status.HELP

                if (option := self._options.get(token)) is not None:
                    if reader is not None and not reader.finished:
                        trigger(OrderingError(
                            f"the parameters before the {token} parameter are not matched"
                        ), **self._faults)
                    if lease is not None:
                        self._storage.release(lease)
                        lease = reader = None
                    option.supplied = True
                    if option.arity == 0:
                        continue
                    value = self._storage.acquire(lease := option.slot)
                    reader = Reader(value.clone() if self.detach else value, option.arity)
                    continue

                if reader is not None:
                    if reader.process(token) is ReadStatus.FINISH:
                        self._storage.release(lease)
                        lease = reader = None
                elif index:
                    self.warn(DroppedTokenWarning(f"token {token!r} at position {index} matches no option and was dropped"))
        finally:
            if lease is not None:
                self._storage.release(lease)
        return Status.PARSED

    # --- help -----------------------------------------------------------------

    def print_help(self, console=Unset):
        """
        Render every key with its current value and description.

        Palette keys: help-label, key, field-label, default, description, panel-title.
        Define a mapping named __styles__ in __main__ to override any entry.
        """
        console = coalesce(console, Console())
        colorful = self._faults["colorful"]
        styles = defaultdict(str, {
            "help-label": "bold #FFFFFF",
            "key": "bold #00E6FF",
            "field-label": "#737373",
            "default": "bold #FFD600",
            "description": "#9CA3AF",
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        body = Text()
        body.append(text("help", "help-label")).append(":")
        for key, option in self._options.items():
            body.append("\n\t").append(text(key, "key"))
            body.append("\n\t\t").append(text("default:", "field-label")).append(" ")
            body.append(text(self._storage.view(option.slot), "default"))
            body.append("\n\t\t").append(text("desc:", "field-label")).append(" ")
            body.append(text(option.descr, "description"))

        renderable = Group(body)
        if self._faults["fancy"]:
            renderable = Panel(
                renderable,
                title=text(f"[ {self.name} HELP ]".upper(), "panel-title"),
                title_align="left",
            )
        console.print(renderable)

    def __repr__(self):
        return f"Registry(help={self.help!r}, options={list(self._options.values())!r})"


__all__ = (
    "Status",
    "Option",
    "Registry",
)
