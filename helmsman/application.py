"""
Application assembly: modules in, a runnable Runtime out.

    outcome = (
        Application("-x", prog="app")
        .module(lambda binder: extend(binder).add_command(XCommand))
        .logger(logger)
        .create_runtime()
        .run()
    )

Modules
- a module is a callable taking the binder, or an object (or class) exposing
  configure(binder). The binder is the CommandRegistry being assembled.
- modules run in the order they were added; that order is the order of the help
  listing for the commands they contribute.
- the built-in HelpCommand is registered before any module, so modules can
  override it, keep it, or leave it as the only visible command.

Faults
- configuration faults (e.g. an unknown default) raise from create_runtime().
- token and resolution faults are reported by Runtime.run() as failed outcomes.
"""
import os.path
import sys

from .cli import Cli
from .faults import CommandException
from .help import HelpCommand
from .logger import BootLogger
from .registry import CommandRegistry, extend
from .runner import Runner
from .utils import Unset, coalesce


class Runtime:
    """
    a frozen application ready to run: one runner, one set of raw arguments.
    """

    def __init__(self, runner, args=()):
        self.runner = runner
        self.args = tuple(args)

    @property
    def snapshot(self):
        return self.runner.snapshot

    def run(self):
        try:
            cli = Cli.parse(self.args)
        except CommandException as fault:
            return self.runner.fail(fault)
        return self.runner.run(cli)


class Application:
    """
    fluent builder collecting arguments, modules and the boot logger.

    settings
    - prog: program name shown in help and faults (defaults to __prog__ in
      __main__, then to the script name)
    - descr: application description shown under the usage line
    - colorful, fancy: rendering switches for help and faults
    - help: register the built-in HelpCommand (default True)
    """

    def __init__(self, *args, prog=Unset, descr=Unset, colorful=False, fancy=False, help=True):
        self._args = [*args]
        self._modules = []
        self._logger = Unset
        self._help = bool(help)
        self._settings = {
            "prog": coalesce(prog, getattr(
                __import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "helmsman"
            )),
            "descr": coalesce(descr),
            "colorful": bool(colorful),
            "fancy": bool(fancy),
        }

    def args(self, *args):
        self._args.extend(args)
        return self

    def module(self, module, /):
        if isinstance(module, type):
            module = module()
        if not callable(getattr(module, "configure", None)) and not callable(module):
            raise TypeError("module() argument must be callable or expose configure(binder)")
        self._modules.append(module)
        return self

    def logger(self, logger, /):
        if not isinstance(logger, BootLogger):
            raise TypeError("logger() argument must be a boot-logger")
        self._logger = logger
        return self

    def create_registry(self):
        """Run every module against a fresh registry (assembly phase)."""
        registry = CommandRegistry()
        if self._help:
            extend(registry).add_command(HelpCommand)
        for module in self._modules:
            if callable(configure := getattr(module, "configure", None)):
                configure(registry)
            else:
                module(registry)
        return registry

    def create_runtime(self):
        snapshot = self.create_registry().snapshot()
        logger = coalesce(self._logger) or BootLogger()
        return Runtime(Runner(snapshot, logger, **self._settings), self._args)


__all__ = (
    "Application",
    "Runtime",
)
