"""
gnuflag help rendering.

Layout (one section per group)

    General:

      -i, --int <NUMBER>      Set the int value. Default: 10
      -b, --bool              Enable the bool switch. Default: false
          --ostring[=STRING]  Set the optional string. Default: seen

- short form ("-x, ") or padding, long form, then the argument hint as
  " <HINT>" (required) or "[=HINT]" (optional); no hint for switches.
- help text in an aligned column, wrapped to the console width with a
  hanging indent, followed by "Default: <value>" when the value has one.

Palette keys
- group-label, option-name, metavar, argument-description, default-label, default-value

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.

Rendering never mutates the option model.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .flags import ArgFlags
from .options import CommandGroup
from .utils import *

_PADDING = 2  # leading spaces before the names column
_GUTTER = 2  # spaces between the names column and the description
_MAXIMUM_INDENT = 32  # names wider than this push the description to the next line


def format_help(groups, /, *, console=Unset, colorful=False):
    """
    Format the help for `groups` into a rich Text.

    Parameters
    - groups: Iterable[CommandGroup]
    - console: Unset | Console, used for its width when wrapping descriptions.
    - colorful: bool, apply the palette.

    Returns
    - Text: the whole help, without a trailing newline.
    """
    groups = tuple(groups)
    for group in groups:
        if not isinstance(group, CommandGroup):
            raise TypeError("format_help() argument must be an iterable of command-groups")

    console = coalesce(console, Console())

    styles = defaultdict(str, {
        "group-label": "bold #FFFFFF",  # white headers
        "option-name": "bold #00E6FF",  # cyan names
        "metavar": "bold #FFD600",  # amber hints
        "argument-description": "#9CA3AF",  # muted gray
        "default-label": "italic #737373",  # dim label
        "default-value": "#22C55E",  # green defaults
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    def names(option):
        column = Text(" " * _PADDING)
        if option.short_name:
            column.append_text(text("-" + option.short_name, "option-name"))
            if option.name:
                column.append(", ")
        else:
            column.append("    ")
        if option.name:
            column.append_text(text("--" + option.name, "option-name"))

        if (hint := option.value.hint) and option.arity != ArgFlags.NO_ARGUMENT:
            if option.arity == ArgFlags.OPTIONAL_ARGUMENT:
                column.append_text(Text.assemble("[=", text(hint, "metavar"), "]"))
            else:
                column.append_text(Text.assemble(" <", text(hint, "metavar"), ">"))
        return column

    def description(option):
        descr = text(option.help, "argument-description") if option.help else Text()
        if (default := option.value.default_value()) is not None:
            if descr:
                descr.append(" ")
            descr.append_text(text("Default:", "default-label"))
            descr.append(" ")
            descr.append_text(text(default, "default-value"))
        return descr

    rows = [[(names(option), description(option)) for option in group] for group in groups]
    widths = [len(column) for section in rows for column, _ in section]
    indent = min(max(widths, default=0) + _GUTTER, _MAXIMUM_INDENT)
    width = max(console.width - indent, 20)

    output = Text()
    for index, (group, section) in enumerate(zip(groups, rows)):
        output.append_text(text(group.name, "group-label")).append(":\n\n")

        for column, descr in section:
            line = Text()
            line.append_text(column)
            if descr:
                # Description flow: break the line when the names column is too wide
                if len(column) + _GUTTER > indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - len(column)))
                wrapped = descr.wrap(console, width)
                for position, segment in enumerate(wrapped):
                    if position:
                        line.append("\n").append(" " * indent)
                    line.append_text(segment)
            output.append_text(line).append("\n")

        output.append("\n" * (index < len(groups) - 1))

    output.rstrip()
    return output


def render_help(groups, /, *, console=Unset, colorful=True):
    """
    Print the help for `groups` to `console` (stdout by default).
    """
    console = coalesce(console, Console())
    console.print(format_help(groups, console=console, colorful=colorful), soft_wrap=True, highlight=False)


__all__ = (
    "format_help",
    "render_help",
)
