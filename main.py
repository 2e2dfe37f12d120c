import sys

from rich.pretty import pprint

from helmsman import *


@command(descr="greet whoever is named after the option")
def greet(context):
    for name in context.cli.arguments or ("world",):
        context.logger.stdout(f"hello, {name}")


@command(short=None, hidden=True)
def trace(context):
    """Dump the frozen command registry."""
    pprint(context.snapshot)


def module(binder):
    extend(binder).add_command(greet).add_command(trace).set_default_command("greet")


if __name__ == '__main__':
    outcome = (
        Application(*sys.argv[1:], descr="a small helmsman demo", colorful=True)
        .module(module)
        .create_runtime()
        .run()
    )
    pprint(outcome)
