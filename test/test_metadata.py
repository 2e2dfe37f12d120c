"""
CommandMetadata tests (derivation, identity, validation, immutability).
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from helmsman import Command, CommandMetadata, HelpCommand

from support import XCommand, X1Command, XHelpCommand, YCommand


class TestMetadata(TestCase):
    """Behavioral tests for CommandMetadata."""

    def testDerivedFromClassName(self):
        self.assertEqual(XCommand.metadata.name, "x")
        self.assertEqual(XCommand.metadata.short, "x")
        self.assertEqual(CommandMetadata.of(XHelpCommand).name, "x-help")

    def testDerivedDescriptionFromDocstring(self):
        self.assertEqual(XCommand.metadata.descr, "Runs x.")

    def testClassKeywords(self):
        self.assertTrue(YCommand.metadata.always_on)

        class DeployCommand(Command, short="D", descr="ship it", hidden=True):
            pass

        self.assertEqual(DeployCommand.metadata.name, "deploy")
        self.assertEqual(DeployCommand.metadata.short, "D")
        self.assertEqual(DeployCommand.metadata.descr, "ship it")
        self.assertTrue(DeployCommand.metadata.hidden)

    def testBorrowedMetadataIsSameSlot(self):
        self.assertIs(X1Command.metadata, XCommand.metadata)
        self.assertIs(XHelpCommand.metadata, HelpCommand.metadata)

    def testIdentityIsTheName(self):
        one = CommandMetadata("x", "x", "first")
        two = CommandMetadata("x", None, "second", always_on=True)
        self.assertEqual(one, two)
        self.assertEqual(hash(one), hash(two))
        self.assertNotEqual(one, CommandMetadata("y"))

    def testOptionSpellings(self):
        metadata = CommandMetadata("x-help")
        self.assertEqual(metadata.longopt, "--x-help")
        self.assertEqual(metadata.shortopt, "-x")
        self.assertEqual(metadata.options, ("x-help", "x"))

    def testShortOptionCanBeDisabled(self):
        metadata = CommandMetadata("verbose", None)
        self.assertIsNone(metadata.short)
        self.assertIsNone(metadata.shortopt)
        self.assertEqual(metadata.options, ("verbose",))

    def testInvalidNamesRejected(self):
        for name in ("", "  ", "-x", "x_y", "x--y", "x-"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    CommandMetadata(name)
        with self.assertRaises(TypeError):
            CommandMetadata(42)  # type: ignore[arg-type]

    def testInvalidShortRejected(self):
        for short in ("xy", "-", ""):
            with self.subTest(short=short):
                with self.assertRaises(ValueError):
                    CommandMetadata("x", short)

    def testEmptyDescriptionRejected(self):
        with self.assertRaises(ValueError):
            CommandMetadata("x", descr="   ")

    def testImmutable(self):
        metadata = CommandMetadata("x")
        with self.assertRaises(AttributeError):
            metadata.name = "y"  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            del metadata.short

    def testReplaceKeepsOtherFields(self):
        metadata = CommandMetadata("x", "q", "about x", always_on=True)
        replaced = copy.replace(metadata, descr="about x, again")
        self.assertEqual(replaced.short, "q")
        self.assertEqual(replaced.descr, "about x, again")
        self.assertTrue(replaced.always_on)
        self.assertEqual(replaced, metadata)


if __name__ == "__main__":
    unittest.main()
