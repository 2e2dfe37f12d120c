"""
Help synthesis: the listing of every command visible in a snapshot.

Layout (colorful=False, fancy=False)

    usage: app [command option] [arguments ...]

    an application description

    commands:
      -h, --help     show this help message and exit
      -x, --x        run x
          --verbose  long-only commands are aligned under the long names

Rules
- entries follow registration order, so module load order is part of the output.
- only commands visible under the suppression filter are listed; hidden ones are not.
- HelpCommand is an ordinary command bound to the reserved "help"/"h" metadata:
  modules may override or suppress it like any other command.

Palette keys
- usage-label, program-name, usage-section, description-section
- group-label, short-name, long-name, command-description, panel-title

Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .commands import Command

_padding = 2  # Leading spaces before the names column
_gutter = 2  # Spaces between the names column and descriptions
_widest = 30  # Names wider than this push their description to the next line


def render_help(snapshot, /, console, *, prog="helmsman", descr=None, colorful=False, fancy=False):
    """
    Build the rich renderable listing snapshot's visible commands.

    console is only used to measure the available width for wrapping.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE
        "description-section": "italic #A3A3A3",  # Neutral gray
        "group-label": "bold #FFFFFF",  # Pure white headers
        "short-name": "bold #22C55E",  # GREEN short options
        "long-name": "bold #00E6FF",  # CYAN long options
        "command-description": "#9CA3AF",  # Muted gray
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    def names(metadata):
        long = text(metadata.longopt, styler("long-name"))
        if metadata.short is None:
            return Text.assemble(" " * len("-x, "), long)
        return Text.assemble(text(metadata.shortopt, styler("short-name")), ", ", long)

    width = console.width - 4 * fancy
    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    usage.append(text(prog, styler("program-name"))).append(" ")
    usage.append(text("[command option] [arguments ...]", styler("usage-section")))
    renders.append(usage.append("\n"))

    if descr:
        renders.append(text(descr, styler("description-section")).append("\n"))

    entries = [(names(command.metadata), command.metadata.descr) for command in snapshot.listing()]
    section = Text()
    section.append(text("commands", styler("group-label"))).append(":")

    if entries:
        indent = _padding + min(max(len(label) for label, _ in entries), _widest) + _gutter
        for label, about in entries:
            line = Text("\n" + " " * _padding).append(label)
            if about := text(about, styler("command-description")):
                if len(label) + _padding + _gutter > indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - _padding - len(label)))
                wrapped = about.wrap(console, max(width - indent, 20))
                try:
                    line.append(wrapped.pop(0))
                except IndexError:
                    pass
                for fragment in wrapped:
                    line.append("\n").append(" " * indent).append(fragment)
            section.append(line)
    else:
        section.append("\n" + " " * _padding + "(none)")
    renders.append(section)

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{prog} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


class HelpCommand(Command, name="help", short="h", descr="show this help message and exit"):
    """Prints the list of available commands."""

    def run(self, context):
        settings = context.settings
        context.logger.stdout(render_help(
            context.snapshot,
            context.logger.console("stdout"),
            prog=settings.get("prog", "helmsman"),
            descr=settings.get("descr"),
            colorful=settings.get("colorful", False),
            fancy=settings.get("fancy", False),
        ))


__all__ = (
    "render_help",
    "HelpCommand",
)
