import sys
from types import SimpleNamespace

from rich.pretty import pprint

from gnuflag import *

settings = SimpleNamespace(
    string="I was untouched",
    optional="I'm optional",
    strings=[],
    flag=False,
    int=10,
)

groups = [
    CommandGroup("Default", [
        CommandOption("int", "i", ArgFlags.REQUIRED_ARGUMENT, int_type(settings, "int", settings.int), "Set the Int value."),
        CommandOption("bool", "b", ArgFlags.NO_ARGUMENT, bool_type(settings, "flag", StoreFlag.STORE_TRUE, settings.flag), "Enable the bool switch."),
    ]),
    CommandGroup("Extended", [
        CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, string_type(settings, "string", settings.string), "Set the String value."),
        CommandOption("ostring", "o", ArgFlags.OPTIONAL_ARGUMENT | ArgFlags.REPEATABLE, string_type(settings, "optional", "Seen, i was seen"), "Set the optional String value."),
        CommandOption("cstring", "c", ArgFlags.REQUIRED_ARGUMENT | ArgFlags.REPEATABLE, string_container_type(settings.strings), "Add value to list of strings."),
    ]),
]


if __name__ == '__main__':
    render_help(groups)
    index = parse_cli(sys.argv, groups)
    pprint(settings)
    pprint(sys.argv[index:])
