"""
Helmsman command layer: commands, their execution context and their outcome.

What this module provides
- CommandOutcome: the terminal result of one command run (success flag, exit code,
  optional message and cause).
- CommandContext: what a command body receives: the parsed Cli, the BootLogger
  sink, the frozen snapshot of registered commands, and delegate() for chaining.
- Command: base class of every command. A subclass gets its CommandMetadata
  derived from its class name unless it passes one explicitly:

      class XCommand(Command):
          def run(self, context):
              context.logger.stdout("x_was_run")

      class YCommand(Command, always_on=True): ...

      class XHelpCommand(Command, metadata=HelpCommand.metadata): ...

- command(...): wrap a plain function into a Command (callback or decorator mode).

Execution boundary
- Command.execute(context) is the only entry point used by the runner. It calls
  run(context) and always returns exactly one CommandOutcome:
  • None returned           → CommandOutcome.succeeded()
  • CommandOutcome returned → passed through
  • anything else returned  → failed outcome carrying CommandExecutionError
  • Exception raised        → failed outcome carrying CommandExecutionError
    (the original exception is kept as __cause__)
"""
import inspect
import re
from types import MappingProxyType

from .faults import CommandExecutionError, ConfigurationError, FaultCode
from .metadata import CommandMetadata
from .utils import Unset, coalesce


class CommandOutcome:
    """
    terminal success/failure value of one command execution.

    fields
    - is_success: bool
    - exit_code: int (0 on success, non-zero on failure)
    - message: str | None
    - cause: BaseException | None
    """
    __slots__ = ("_success", "_exit_code", "_message", "_cause")

    def __init__(self, success, exit_code, message=None, cause=None):
        if not isinstance(exit_code, int) or isinstance(exit_code, bool):
            raise TypeError("command-outcome 'exit_code' must be an integer")
        if success and exit_code != 0:
            raise ValueError("command-outcome successful outcomes must exit with 0")
        if not success and exit_code == 0:
            raise ValueError("command-outcome failed outcomes must exit with a non-zero code")
        self._success = bool(success)
        self._exit_code = exit_code
        self._message = message
        self._cause = cause

    @classmethod
    def succeeded(cls):
        return cls(True, 0)

    @classmethod
    def failed(cls, exit_code=1, message=None, *, cause=None):
        """
        Build a failed outcome.

        When only a cause is given, its string form becomes the message.
        """
        if message is None and cause is not None:
            message = str(cause) or type(cause).__name__
        return cls(False, exit_code, message, cause)

    is_success = property(lambda self: self._success)
    exit_code = property(lambda self: self._exit_code)
    message = property(lambda self: self._message)
    cause = property(lambda self: self._cause)

    def __bool__(self):
        return self._success

    def __repr__(self):
        if self._success:
            return "command-outcome(succeeded)"
        return f"command-outcome(failed, exit_code={self._exit_code!r}, message={self._message!r})"


class CommandContext:
    """
    per-invocation context handed to Command.execute().

    attributes
    - cli: the parsed Cli input
    - logger: the BootLogger sink (stdout/stderr lines)
    - snapshot: the frozen CommandSnapshot the command was resolved from
    - settings: read-only runtime settings (prog, descr, colorful, fancy)
    """

    def __init__(self, cli, logger, snapshot, settings=None):
        self.cli = cli
        self.logger = logger
        self.snapshot = snapshot
        self.settings = MappingProxyType(dict(settings or {}))

    @property
    def commands(self):
        return self.snapshot.bindings

    def delegate(self, name, /):
        """
        Run another command of the same snapshot and return its outcome.

        Chaining is a capability of command bodies; the runner itself never runs
        more than one top-level command.
        """
        try:
            command = self.snapshot.bindings[name]
        except KeyError:
            raise ConfigurationError(
                f"cannot delegate to {name!r}, no such command is registered",
                code=FaultCode.UNKNOWN_COMMAND,
                title="unknown command",
                hint="register the command before delegating to it",
            ) from None
        return command.execute(self)


def _describe(source):
    """First line of the object's own docstring, or Unset."""
    doc = source.__dict__.get("__doc__") if isinstance(source, type) else inspect.getdoc(source)
    if not doc or not (doc := inspect.cleandoc(doc)):
        return Unset
    return doc.splitlines()[0]


class Command:
    """
    base class of every command.

    subclasses implement run(context) and may return None (success) or a
    CommandOutcome. Class keywords configure the derived metadata:
    name, short, descr, always_on, hidden; or pass metadata= to borrow a
    descriptor (e.g. to override another command's slot).
    """
    metadata = None

    def __init_subclass__(cls, /, metadata=Unset, **options):
        super().__init_subclass__()
        if metadata is not Unset:
            if not isinstance(metadata, CommandMetadata):
                raise TypeError(f"{cls.__name__} 'metadata' must be a command-metadata")
            cls.metadata = metadata
        else:
            options.setdefault("descr", _describe(cls))
            cls.metadata = CommandMetadata.of(cls, **options)

    def __init__(self, metadata=Unset):
        if metadata is not Unset:
            if not isinstance(metadata, CommandMetadata):
                raise TypeError(f"{type(self).__name__} 'metadata' must be a command-metadata")
            self.metadata = metadata
        elif self.metadata is None:
            raise TypeError(f"{type(self).__name__} requires metadata")

    @property
    def name(self):
        return self.metadata.name

    def run(self, context):
        raise NotImplementedError(f"{type(self).__name__}.run() is not implemented")

    def execute(self, context):
        """
        Run the command body and convert whatever happens into one CommandOutcome.
        """
        try:
            outcome = self.run(context)
        except Exception as error:
            fault = CommandExecutionError(
                f"command {self.name!r} failed: {str(error) or type(error).__name__}",
                code=FaultCode.COMMAND_FAILED,
                title="command failed",
                hint=f"run '--{self.name}' again once the cause is fixed",
                command=self.name,
            )
            fault.__cause__ = error
            return CommandOutcome.failed(1, cause=fault)

        if outcome is None:
            return CommandOutcome.succeeded()
        if isinstance(outcome, CommandOutcome):
            return outcome

        fault = CommandExecutionError(
            f"command {self.name!r} returned {type(outcome).__name__!r} instead of an outcome",
            code=FaultCode.INVALID_OUTCOME,
            title="invalid outcome",
            hint="return None or a CommandOutcome from run()",
            command=self.name,
        )
        return CommandOutcome.failed(1, cause=fault)

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"


class FunctionCommand(Command):
    """command backed by a plain function taking the CommandContext."""

    def __init__(self, callback, metadata):
        if not callable(callback):
            raise TypeError("function-command 'callback' must be callable")
        super().__init__(metadata)
        self._callback = callback

    def run(self, context):
        return self._callback(context)


def command(source=Unset, /, name=Unset, short=Unset, descr=Unset, *, always_on=False, hidden=False, metadata=Unset):
    """
    Create a Command from a function or return a decorator to build it later.

    Invocation modes
    - Direct callback:
        cmd = command(func, name="x")
    - Decorator:
        @command(short="d", always_on=True)
        def deploy(context): ...

    The name defaults to the function name (underscores become hyphens) and the
    description to the first docstring line. metadata= borrows an existing
    descriptor and ignores the other metadata keywords.
    """
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        if metadata is not Unset:
            return FunctionCommand(source, metadata)
        label = re.sub(r"_+", "-", getattr(source, "__name__", "").strip("_").lower())
        return FunctionCommand(source, CommandMetadata(
            coalesce(name, label),
            short,
            coalesce(descr, _describe(source)),
            always_on=always_on,
            hidden=hidden,
        ))

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "CommandOutcome",
    "CommandContext",
    "Command",
    "FunctionCommand",
    "command",
)
