"""
Command resolution: pick the single command an invocation runs.

Precedence (first match wins)
1. explicit  every binding whose name or short option appears in the Cli is a
             candidate; the suppression filter does not apply. One candidate is
             selected, several distinct candidates are an AmbiguousCommandError.
2. default   the configured default command, when it is visible.
3. help      the help binding, when it is visible.
4. nothing   NoCommandResolvedError.

A default hidden by no_module_commands() falls through to help instead of
failing, so an application that suppresses module commands still explains itself.
"""
from .faults import AmbiguousCommandError, FaultCode, NoCommandResolvedError


def explicit_candidates(cli, snapshot, /):
    """Bindings selected by the options present in cli, in registration order."""
    return [
        command for command in snapshot.bindings.values()
        if any(cli.has_option(option) for option in command.metadata.options)
    ]


def resolve(cli, snapshot, /):
    """
    Return the command to run for cli against a frozen snapshot.

    Raises AmbiguousCommandError or NoCommandResolvedError.
    """
    match explicit_candidates(cli, snapshot):
        case [command]:
            return command
        case []:
            pass
        case candidates:
            names = sorted(command.name for command in candidates)
            raise AmbiguousCommandError(
                f"options {', '.join('--' + name for name in names)} select different commands",
                code=FaultCode.AMBIGUOUS_COMMAND,
                title="ambiguous command",
                hint="pass exactly one command option",
                candidates=names,
            )

    if snapshot.default is not None and snapshot.is_visible(snapshot.default):
        return snapshot.bindings[snapshot.default]

    if snapshot.is_visible(snapshot.help):
        return snapshot.bindings[snapshot.help]

    raise NoCommandResolvedError(
        "no command option was given and neither a default nor a help command is available",
        code=FaultCode.NO_COMMAND_RESOLVED,
        title="no command",
        hint="pass a command option or configure a default command",
        default=snapshot.default,
    )


class CommandResolver:
    """
    resolver bound to one snapshot, for callers that resolve repeatedly.
    """

    def __init__(self, snapshot):
        self.snapshot = snapshot

    def resolve(self, cli, /):
        return resolve(cli, self.snapshot)

    def __call__(self, cli, /):
        return resolve(cli, self.snapshot)


__all__ = (
    "explicit_candidates",
    "resolve",
    "CommandResolver",
)
