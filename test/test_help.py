"""
Help synthesis tests (listing content, order, suppression, override, chrome).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import (
    Cli,
    CommandContext,
    CommandMetadata,
    CommandRegistry,
    HelpCommand,
    command,
    extend,
    render_help,
)

from support import XCommand, X1Command, YCommand, capture


class TestHelp(TestCase):
    """Behavioral tests for render_help() and HelpCommand."""

    def setUp(self):
        self.logger, self.out, self.err = capture()

    def render(self, snapshot, **settings):
        self.logger.stdout(render_help(snapshot, self.logger.console("stdout"), **settings))
        return self.out.getvalue()

    def testEntriesShowShortAndLongOptions(self):
        binder = CommandRegistry()
        extend(binder).add_command(HelpCommand).add_command(XCommand)
        help = self.render(binder.snapshot(), prog="app")

        self.assertIn("usage: app", help)
        self.assertIn("-h, --help", help)
        self.assertIn("show this help message and exit", help)
        self.assertIn("-x, --x", help)
        self.assertIn("Runs x.", help)

    def testLongOnlyEntriesAreAligned(self):
        @command(name="verbose-mode", short=None, descr="talk a lot")
        def verbose(context):
            pass

        binder = CommandRegistry()
        extend(binder).add_command(HelpCommand).add_command(verbose)
        lines = self.render(binder.snapshot()).splitlines()

        entry = next(line for line in lines if "--verbose-mode" in line)
        help = next(line for line in lines if "--help" in line)
        self.assertEqual(entry.index("--verbose-mode"), help.index("--help"))
        self.assertNotIn("-v,", entry)

    def testRegistrationOrderAndOverridePosition(self):
        binder = CommandRegistry()
        extend(binder).add_command(XCommand).add_command(HelpCommand).add_command(YCommand).add_command(X1Command)
        help = self.render(binder.snapshot())

        self.assertLess(help.index("-x, --x"), help.index("-h, --help"))
        self.assertLess(help.index("-h, --help"), help.index("-y, --y"))
        # the override reused the descriptor, so the entry text is unchanged
        self.assertIn("Runs x.", help)

    def testSuppressedCommandsAreNotListed(self):
        binder = CommandRegistry()
        extend(binder).add_command(XCommand).add_command(YCommand).add_command(HelpCommand).no_module_commands()
        help = self.render(binder.snapshot())

        self.assertIn("-y, --y", help)
        self.assertIn("-h, --help", help)
        self.assertNotIn("--x", help)

    def testEmptyListing(self):
        help = self.render(CommandRegistry().snapshot())
        self.assertIn("commands:", help)
        self.assertIn("(none)", help)

    def testDescriptionAndPanel(self):
        binder = CommandRegistry()
        extend(binder).add_command(HelpCommand)
        help = self.render(binder.snapshot(), prog="app", descr="an application", fancy=True)

        self.assertIn("APP HELP", help)
        self.assertIn("an application", help)
        self.assertIn("-h, --help", help)

    def testColorfulRenderingKeepsText(self):
        binder = CommandRegistry()
        extend(binder).add_command(HelpCommand).add_command(XCommand)
        help = self.render(binder.snapshot(), colorful=True)

        self.assertIn("-h, --help", help)
        self.assertIn("-x, --x", help)

    def testLongDescriptionsWrap(self):
        metadata = CommandMetadata("long", None, " ".join(["word"] * 60))
        binder = CommandRegistry()
        extend(binder).add_command(lambda: XCommand(), metadata)
        lines = [line for line in self.render(binder.snapshot()).splitlines() if "word" in line]

        self.assertGreater(len(lines), 1)
        self.assertTrue(all(len(line) <= 120 for line in lines))

    def testHelpCommandUsesContextSettings(self):
        binder = CommandRegistry()
        extend(binder).add_command(HelpCommand)
        snapshot = binder.snapshot()
        context = CommandContext(Cli(), self.logger, snapshot, {"prog": "tool", "descr": "does things"})

        outcome = snapshot.bindings["help"].execute(context)

        self.assertTrue(outcome.is_success)
        self.assertIn("usage: tool", self.out.getvalue())
        self.assertIn("does things", self.out.getvalue())

    def testHelpMetadata(self):
        self.assertEqual(HelpCommand.metadata.name, "help")
        self.assertEqual(HelpCommand.metadata.short, "h")
        self.assertFalse(HelpCommand.metadata.always_on)


if __name__ == "__main__":
    unittest.main()
