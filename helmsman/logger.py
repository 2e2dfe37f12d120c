"""
Boot logger: the line sink command bodies write through.

BootLogger owns two rich consoles (stdout and stderr). Plain strings are printed
verbatim (markup, highlighting and wrapping disabled) so command output such as
"[done]" is never reinterpreted; rich renderables (Text, Group, Panel, faults
with __rich__) are printed as renderables.

Tests and embedders capture output by handing in consoles that write to a buffer:

    buffer = io.StringIO()
    logger = BootLogger(stdout=Console(file=buffer, width=120))
"""
from rich.console import Console


class BootLogger:
    """
    stdout/stderr line sink backed by rich consoles.

    - verbose: when False, trace() lines are dropped.
    """

    def __init__(self, verbose=False, *, stdout=None, stderr=None):
        self.verbose = bool(verbose)
        self._consoles = {
            "stdout": stdout if stdout is not None else Console(),
            "stderr": stderr if stderr is not None else Console(stderr=True),
        }

    def console(self, stream, /):
        try:
            return self._consoles[stream]
        except KeyError:
            raise ValueError(f"boot-logger unknown stream {stream!r}, expected 'stdout' or 'stderr'") from None

    def write_line(self, stream, text, /):
        console = self.console(stream)
        if isinstance(text, str):
            console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
        else:
            console.print(text)

    def stdout(self, text, /):
        self.write_line("stdout", text)

    def stderr(self, text, /):
        self.write_line("stderr", text)

    def trace(self, text, /):
        """Write to stderr only in verbose mode; callables are evaluated lazily."""
        if not self.verbose:
            return
        self.write_line("stderr", text() if callable(text) else text)


__all__ = (
    "BootLogger",
)
