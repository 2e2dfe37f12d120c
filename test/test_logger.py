"""
BootLogger tests (verbatim lines, stream selection, verbose tracing).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman import BootLogger

from support import capture


class TestBootLogger(TestCase):
    """Behavioral tests for BootLogger."""

    def testLongLinesAreNotWrapped(self):
        buffer = io.StringIO()
        logger = BootLogger(stdout=Console(file=buffer, width=80))
        line = "k" * 50 + " " + "v" * 60

        logger.stdout(line)

        self.assertEqual(buffer.getvalue(), line + "\n")

    def testMarkupIsWrittenAsIs(self):
        logger, out, _ = capture()
        logger.stdout("[bold]done[/bold] :smile:")
        self.assertEqual(out.getvalue(), "[bold]done[/bold] :smile:\n")

    def testStreamsAreSeparate(self):
        logger, out, err = capture()
        logger.write_line("stderr", "oops")
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(err.getvalue(), "oops\n")

    def testUnknownStream(self):
        logger, _, _ = capture()
        with self.assertRaises(ValueError):
            logger.write_line("stdlog", "lost")

    def testTraceIsLazyAndVerboseOnly(self):
        logger, _, err = capture()
        logger.trace(lambda: self.fail("evaluated while quiet"))
        self.assertEqual(err.getvalue(), "")

        logger.verbose = True
        logger.trace(lambda: "traced")
        self.assertEqual(err.getvalue(), "traced\n")


if __name__ == "__main__":
    unittest.main()
