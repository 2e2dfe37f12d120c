"""
Helmsman faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Propagation
- configuration faults are raised while the registry is frozen (assembly time).
- resolution faults are rendered by the runner and turned into a failed outcome.
- execution faults wrap whatever a command body raised; they travel inside the
  failed outcome instead of crashing the runner.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
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
    canonical fault codes used across helmsman (stable identifiers).

    grouping (by high-level domain)
    - configuration (2110x)
      • UNKNOWN_DEFAULT_COMMAND, UNKNOWN_COMMAND, INVALID_BINDING
    - resolution (2210x)
      • MALFORMED_TOKEN, AMBIGUOUS_COMMAND, NO_COMMAND_RESOLVED
    - execution (2310x)
      • COMMAND_FAILED, INVALID_OUTCOME
    - warnings (2410x)
      • DEFAULT_REPLACED, SHORT_OPTION_CONFLICT
    """
    # --- configuration errors (21xxx) ---
    UNKNOWN_DEFAULT_COMMAND     = 21101
    UNKNOWN_COMMAND             = 21102
    INVALID_BINDING             = 21103

    # --- resolution errors (22xxx) ---
    MALFORMED_TOKEN             = 22101
    AMBIGUOUS_COMMAND           = 22102
    NO_COMMAND_RESOLVED         = 22103

    # --- execution errors (23xxx) ---
    COMMAND_FAILED              = 23101
    INVALID_OUTCOME             = 23102

    # --- warnings (24xxx) ---
    DEFAULT_REPLACED            = 24101
    SHORT_OPTION_CONFLICT       = 24102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    build the rich renderable shared by exceptions and warnings.

    palette keys: prog-name, code, title, message, hint-arrow, hint.
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", False)
    fancy = fault.options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", fault.options.get("prog", "helmsman")), styler("prog-name"))
    code = fault.options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code else "", styler("code")),
        " | ",
        text(str(fault.options.get("title", "fault")).title(), styler("title")),
        " ]"
    )
    message = text(fault.message or "", styler("message"))
    parts = [message]
    if hint := fault.options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class CommandException(Exception):
    """
    base class of every helmsman error.

    carries a lowercase one-sentence message and a read-only options mapping
    (code, title, hint, plus any context such as candidates or cause).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = None if message is Unset else message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(*(() if self.message is None else (self.message,)), **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class ConfigurationError(CommandException):
    """invalid registry setup (e.g. a default pointing to an unknown command)."""


class MalformedTokenError(CommandException):
    """a raw argument token could not be read as an option."""


class AmbiguousCommandError(CommandException):
    """more than one command option was present in the same invocation."""

    @property
    def candidates(self):
        return tuple(self.options.get("candidates", ()))


class NoCommandResolvedError(CommandException):
    """neither an explicit, a default nor a help command could be resolved."""


class CommandExecutionError(CommandException):
    """a selected command body failed; carried by the failed outcome."""


class CommandWarning(ABC, Warning):
    """base class of every helmsman warning."""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = None if message is Unset else message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(*(() if self.message is None else (self.message,)), **{**self.options, **overrides})


class DefaultCommandReplacedWarning(CommandWarning): ...


class ShortOptionConflictWarning(CommandWarning):
    """two bound commands answer to the same short option."""


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, exceptions are
      raised and warnings go through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "ConfigurationError",
    "MalformedTokenError",
    "AmbiguousCommandError",
    "NoCommandResolvedError",
    "CommandExecutionError",
    "CommandWarning",
    "DefaultCommandReplacedWarning",
    "ShortOptionConflictWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
