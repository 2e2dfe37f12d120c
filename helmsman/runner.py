"""
Runner: one resolve → execute → report cycle.

- resolution faults (ambiguous or missing command) are rendered to stderr and
  returned as a failed outcome; no command runs.
- otherwise exactly one command runs and its outcome is returned as-is. Command
  bodies cannot crash the runner: Command.execute() already turned their
  exceptions into failed outcomes, which the runner reports on stderr.
"""
import copy

from .commands import CommandContext, CommandOutcome
from .faults import CommandException
from .resolver import CommandResolver


class Runner:
    """
    drives commands of one frozen snapshot.

    settings (keyword-only) are handed to commands through CommandContext.settings
    and to the fault renderer: prog, descr, colorful, fancy.
    """

    def __init__(self, snapshot, logger, **settings):
        self.snapshot = snapshot
        self.logger = logger
        self.settings = settings
        self._resolver = CommandResolver(snapshot)

    def report(self, fault, /):
        """Write a rendered fault to stderr."""
        self.logger.stderr(copy.replace(
            fault,
            prog=self.settings.get("prog", "helmsman"),
            colorful=self.settings.get("colorful", False),
            fancy=self.settings.get("fancy", False),
        ))

    def fail(self, fault, /):
        self.report(fault)
        return CommandOutcome.failed(1, cause=fault)

    def run(self, cli, /):
        try:
            command = self._resolver(cli)
        except CommandException as fault:
            return self.fail(fault)

        self.logger.trace(lambda: f"running command {command.name!r}")
        outcome = command.execute(CommandContext(cli, self.logger, self.snapshot, self.settings))

        if outcome.is_success:
            return outcome
        if isinstance(outcome.cause, CommandException):
            self.report(outcome.cause)
        elif outcome.message:
            self.logger.stderr(outcome.message)
        return outcome


__all__ = (
    "Runner",
)
