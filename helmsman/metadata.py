"""
Command metadata: the immutable descriptor that identifies a command slot.

Identity
- Two descriptors with the same name are the same logical command slot, no matter
  how they were built. Equality and hashing only look at the name, so a module can
  rebind a slot by reusing (or re-creating) the descriptor of the command it replaces.

Derivation
- CommandMetadata.of(cls) builds a descriptor from a command class name:
  strip a trailing "Command", split CamelCase with hyphens, lowercase.
  XCommand → "x", XHelpCommand → "x-help", HelpCommand → "help".
- The short option defaults to the first letter of the name; pass short=None to
  disable it.

Example
    >>> meta = CommandMetadata("deploy", descr="deploy the current build")
    >>> meta.short, meta.longopt
    ('d', '--deploy')
"""
import re

from rich.text import Text

from .utils import Unset, coalesce, hyphenate


class CommandMetadata:
    """
    immutable descriptor of one command: name, short option, description and flags.

    fields
    - name: str, non-empty, made of letters, digits and inner hyphens.
    - short: str | None, a single letter or digit.
    - descr: str | Text | None, one-line help text.
    - always_on: bool, survives no_module_commands() suppression.
    - hidden: bool, resolvable but left out of the help listing.
    """
    __slots__ = ("_name", "_short", "_descr", "_always_on", "_hidden")

    def __init__(self, name, /, short=Unset, descr=Unset, *, always_on=False, hidden=False):
        if not isinstance(name, str):
            raise TypeError("command-metadata 'name' must be a string")
        elif not re.fullmatch(r"[^\W_](-?[^\W_]+)*", name := name.strip()):
            raise ValueError(f"command-metadata 'name' {name!r} is not a valid option name")

        short = coalesce(short, name[0])
        if short is not None and (not isinstance(short, str) or not re.fullmatch(r"[^\W_]", short)):
            raise ValueError("command-metadata 'short' must be a single letter or digit")

        if not isinstance(descr := coalesce(descr), str | Text | None):
            raise TypeError("command-metadata 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("command-metadata 'descr' cannot be empty")

        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_short", short)
        object.__setattr__(self, "_descr", descr)
        object.__setattr__(self, "_always_on", bool(always_on))
        object.__setattr__(self, "_hidden", bool(hidden))

    @classmethod
    def of(cls, source, /, **overrides):
        """
        Derive metadata from a command class (or instance) name.

        Keyword overrides (short, descr, always_on, hidden, name) win over the
        derived values.
        """
        if not isinstance(source, type):
            source = type(source)
        name = re.sub(r"Command$", "", source.__name__) or source.__name__
        return cls(
            overrides.pop("name", hyphenate(name)),
            overrides.pop("short", Unset),
            overrides.pop("descr", Unset),
            **overrides,
        )

    name = property(lambda self: self._name)
    short = property(lambda self: self._short)
    descr = property(lambda self: self._descr)
    always_on = property(lambda self: self._always_on)
    hidden = property(lambda self: self._hidden)

    @property
    def longopt(self):
        return "--" + self.name

    @property
    def shortopt(self):
        return None if self.short is None else "-" + self.short

    @property
    def options(self):
        """Option names (without dashes) that select this command."""
        return (self.name,) if self.short is None else (self.name, self.short)

    def replace(self, **changes):
        """Return a copy with some fields changed; the name stays the identity key."""
        return type(self)(
            changes.pop("name", self.name),
            changes.pop("short", self.short),
            changes.pop("descr", self.descr) or Unset,
            always_on=changes.pop("always_on", self.always_on),
            hidden=changes.pop("hidden", self.hidden),
        )

    __replace__ = replace

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __eq__(self, other):
        if not isinstance(other, CommandMetadata):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash((CommandMetadata, self.name))

    def __repr__(self):
        return f"command-metadata(name={self.name!r}, short={self.short!r}, always_on={self.always_on!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "short", self.short
        yield "descr", self.descr
        yield "always_on", self.always_on
        yield "hidden", self.hidden


__all__ = (
    "CommandMetadata",
)
