"""
Command registry: the merge point of every module-contributed command.

Lifecycle
- Assembly: modules receive the CommandRegistry (their "binder") and contribute
  through extend(binder), which returns a fluent CommandExtender:

      extend(binder).add_command(XCommand).set_default_command("x")

- Freezing: CommandRegistry.snapshot() validates the configuration and returns an
  immutable CommandSnapshot. The resolver, the runner and the help command only
  ever see snapshots.

Merge policy
- Bindings are keyed by CommandMetadata.name and kept in registration order.
- Registering a name again overrides the command but keeps the slot's original
  position; the last registration wins.
- suppress_module_commands() is a view filter: bindings stay, but only always-on
  commands and the current help binding remain visible to the fallbacks and the
  help listing. Explicit options still reach every binding.
- set_default() twice keeps the last value and emits DefaultCommandReplacedWarning.
- always-on membership follows the bound descriptor (an override may drop it)
  plus every name passed to mark_always_on().
- snapshot() warns about short options shared by several bindings.

Threading
- A CommandRegistry is a plain mutable object and must not be shared between
  concurrent assemblies. Snapshots are independent copies and can be shared freely.
"""
import copy
from types import MappingProxyType

from .commands import Command
from .faults import ConfigurationError, DefaultCommandReplacedWarning, FaultCode, ShortOptionConflictWarning, trigger
from .metadata import CommandMetadata
from .utils import Unset, coalesce

HELP = "help"


class CommandSnapshot:
    """
    frozen, read-only view of a registry.

    attributes
    - bindings: mapping[name -> Command] in registration order
    - default: name of the default command or None
    - suppressed: whether module commands are hidden
    - help: name of the reserved help slot
    - always_on: frozenset of names immune to suppression
    """
    __slots__ = ("_bindings", "_default", "_suppressed", "_help", "_always_on")

    def __init__(self, bindings, default=None, suppressed=False, help=HELP, always_on=frozenset()):
        object.__setattr__(self, "_bindings", MappingProxyType(dict(bindings)))
        object.__setattr__(self, "_default", default)
        object.__setattr__(self, "_suppressed", bool(suppressed))
        object.__setattr__(self, "_help", help)
        object.__setattr__(self, "_always_on", frozenset(always_on))

    bindings = property(lambda self: self._bindings)
    default = property(lambda self: self._default)
    suppressed = property(lambda self: self._suppressed)
    help = property(lambda self: self._help)
    always_on = property(lambda self: self._always_on)

    def __setattr__(self, name, value, /):
        raise AttributeError("command-snapshot is read-only")

    def __len__(self):
        return len(self._bindings)

    def __contains__(self, name):
        return name in self._bindings

    def get(self, name, /):
        return self._bindings.get(name)

    def is_visible(self, name, /):
        """Whether a bound name survives the suppression filter."""
        if name not in self._bindings:
            return False
        return not self._suppressed or name in self._always_on or name == self._help

    def visible(self):
        """Visible commands, in registration order."""
        return tuple(command for name, command in self._bindings.items() if self.is_visible(name))

    def listing(self):
        """Commands shown by the help listing: visible and not hidden."""
        return tuple(command for command in self.visible() if not command.metadata.hidden)

    def __repr__(self):
        return (
            f"command-snapshot(bindings={list(self._bindings)!r}, default={self._default!r}, "
            f"suppressed={self._suppressed!r})"
        )


class CommandRegistry:
    """
    mutable builder of name → command bindings (assembly phase only).
    """

    def __init__(self, help=HELP):
        self._bindings = {}
        self._marked = set()
        self._default = None
        self._suppressed = False
        self._help = help

    @property
    def names(self):
        return tuple(self._bindings)

    def __contains__(self, name):
        return name in self._bindings

    def register(self, metadata, command, /):
        """
        Insert or override the binding for metadata.name.

        The command is bound under the given metadata; when it carries a different
        descriptor object, a shallow copy with the registered metadata is stored.
        """
        if not isinstance(metadata, CommandMetadata):
            raise TypeError("register() first argument must be a command-metadata")
        if not isinstance(command, Command):
            raise ConfigurationError(
                f"cannot bind {metadata.name!r} to {type(command).__name__!r}, it is not a command",
                code=FaultCode.INVALID_BINDING,
                title="invalid binding",
                hint="bind an instance of helmsman.Command",
                command=metadata.name,
            )
        if command.metadata is not metadata:
            command = copy.copy(command)
            command.metadata = metadata
        self._bindings[metadata.name] = command
        return self

    def mark_always_on(self, name, /):
        if name not in self._bindings:
            raise ConfigurationError(
                f"cannot mark {name!r} as always-on, no such command is registered",
                code=FaultCode.UNKNOWN_COMMAND,
                title="unknown command",
                hint="register the command before marking it",
                command=name,
            )
        self._marked.add(name)
        return self

    def suppress_module_commands(self):
        self._suppressed = True
        return self

    def set_default(self, name, /):
        """
        Record the fallback command name; unknown names are reported by snapshot().
        """
        if not isinstance(name, str):
            raise TypeError("set_default() argument must be a string")
        if self._default is not None and self._default != name:
            trigger(DefaultCommandReplacedWarning(
                f"default command {self._default!r} is replaced by {name!r}",
                code=FaultCode.DEFAULT_REPLACED,
                title="default replaced",
                hint="the last configured default command wins",
                previous=self._default,
                current=name,
            ))
        self._default = name
        return self

    def snapshot(self):
        """
        Validate and freeze the registry.

        Raises ConfigurationError when the default command is not registered and
        emits ShortOptionConflictWarning for every short option claimed by more
        than one binding (such an option is ambiguous at resolution time).
        """
        if self._default is not None and self._default not in self._bindings:
            raise ConfigurationError(
                f"default command {self._default!r} is not registered",
                code=FaultCode.UNKNOWN_DEFAULT_COMMAND,
                title="unknown default command",
                hint="add the command or use set_default_command() with the command itself",
                command=self._default,
            )

        claims = {}
        for name, command in self._bindings.items():
            if command.metadata.short is not None:
                claims.setdefault(command.metadata.short, []).append(name)
        for short, names in claims.items():
            if len(names) > 1:
                trigger(ShortOptionConflictWarning(
                    f"short option '-{short}' is shared by {', '.join(map(repr, names))}",
                    code=FaultCode.SHORT_OPTION_CONFLICT,
                    title="short option conflict",
                    hint="pass short=None or another letter to all but one of them",
                    short=short,
                    commands=names,
                ))

        return CommandSnapshot(
            self._bindings,
            default=self._default,
            suppressed=self._suppressed,
            help=self._help,
            always_on=self._marked | {
                name for name, command in self._bindings.items() if command.metadata.always_on
            },
        )


class CommandExtender:
    """
    fluent module-facing view of a registry, returned by extend(binder).
    """

    def __init__(self, registry):
        if not isinstance(registry, CommandRegistry):
            raise TypeError("extend() argument must be a command registry")
        self._registry = registry

    def _materialize(self, source, metadata):
        if isinstance(source, Command):
            return coalesce(metadata, source.metadata), source
        if isinstance(source, type) and issubclass(source, Command):
            return coalesce(metadata, source.metadata), source()
        if callable(source):
            if metadata is Unset:
                raise TypeError("add_command() factories other than command classes need explicit metadata")
            return metadata, source()
        raise TypeError("add_command() argument must be a command, a command class or a factory")

    def add_command(self, source, /, metadata=Unset):
        """
        Contribute a command.

        source is a Command instance, a Command subclass (instantiated without
        arguments) or any zero-argument factory combined with explicit metadata.
        """
        self._registry.register(*self._materialize(source, metadata))
        return self

    def set_default_command(self, source, /):
        """
        Configure the default command by name, or register a command and make it
        the default in one step.
        """
        if isinstance(source, str):
            self._registry.set_default(source)
            return self
        metadata, command = self._materialize(source, Unset)
        self._registry.register(metadata, command)
        self._registry.set_default(metadata.name)
        return self

    def mark_always_on(self, name, /):
        self._registry.mark_always_on(name)
        return self

    def no_module_commands(self):
        self._registry.suppress_module_commands()
        return self


def extend(binder, /):
    """Return the fluent command extender of a binder (a CommandRegistry)."""
    return CommandExtender(binder)


__all__ = (
    "HELP",
    "CommandSnapshot",
    "CommandRegistry",
    "CommandExtender",
    "extend",
)
