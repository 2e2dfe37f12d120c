"""
Shared fixtures for the behavioral tests.

- capture(): a BootLogger whose consoles write into StringIO buffers.
- XCommand / X1Command / YCommand / XHelpCommand: the commands used across the
  invocation scenarios; each writes a "<name>_was_run" marker to stdout.
"""
import io

from rich.console import Console

from helmsman import BootLogger, Command, HelpCommand


def capture(verbose=False):
    """Return (logger, stdout buffer, stderr buffer)."""
    out, err = io.StringIO(), io.StringIO()

    def console(file):
        return Console(file=file, width=120, force_terminal=False, color_system=None)

    return BootLogger(verbose, stdout=console(out), stderr=console(err)), out, err


class XCommand(Command):
    """Runs x."""

    def run(self, context):
        context.logger.stdout("x_was_run")


class X1Command(Command, metadata=XCommand.metadata):
    """Replaces x, keeping its metadata."""

    def run(self, context):
        context.logger.stdout("x1_was_run")


class YCommand(Command, always_on=True):
    """Runs y."""

    def run(self, context):
        context.logger.stdout("y_was_run")


class XHelpCommand(Command, metadata=HelpCommand.metadata):
    """Replaces help, keeping its metadata."""

    def run(self, context):
        context.logger.stdout("xhelp_was_run")
