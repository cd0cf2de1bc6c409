r"""
gnuflag option model: static descriptors grouped for help output.

Overview
- CommandOption
  • Long name ("--name"), short name ("-x"), argument flags, bound Value, help text.
  • Read-only once constructed; only the embedded Value carries mutable state.
- CommandGroup
  • Named ordered sequence of CommandOption. Purely organizational: groups
    become help-section headers and do not affect parsing.

Validation highlights
- Arity: exactly one of NO_ARGUMENT, REQUIRED_ARGUMENT, OPTIONAL_ARGUMENT;
  REQUIRED and OPTIONAL together raise ConflictingArityError.
- At least one of name/short_name must be given for the option to be reachable.
- Long names match r"[^\s=-][^\s=]*" (no '=', no whitespace, no leading '-').
- Short names are a single printable character other than '-', ':' or '='.

Quick example:
    >>> from types import SimpleNamespace
    >>> settings = SimpleNamespace(jobs=1)
    >>> CommandGroup("General", [
    ...     CommandOption("jobs", "j", ArgFlags.REQUIRED_ARGUMENT, int_type(settings, "jobs", 1), "Parallel jobs."),
    ... ])
"""
import re

from .faults import ConflictingArityError
from .flags import ArgFlags
from .utils import *
from .values import Value

_KNOWN_FLAGS = int(ArgFlags.REQUIRED_ARGUMENT | ArgFlags.OPTIONAL_ARGUMENT | ArgFlags.REPEATABLE)


def check_arity(option, /):
    """
    Raise ConflictingArityError when an option asks for both a required and an
    optional argument.

    Shared by CommandOption construction and the parser table build.
    """
    if option.flags & ArgFlags.REQUIRED_ARGUMENT and option.flags & ArgFlags.OPTIONAL_ARGUMENT:
        raise ConflictingArityError(
            "option %r can either take a required or an optional argument" % option.switch,
            option=option,
        )


class CommandOption(metaclass=ModelType):
    """
    Named command-line switch bound to a Value.

    Properties
    - name: long name without dashes, "" when the option has no long form.
    - short_name: single character, "" when the option has no short form.
    - flags: ArgFlags (arity plus REPEATABLE).
    - value: the bound Value.
    - help: help text (may be empty).
    - switch: the preferred spelling for messages ("--name", else "-x").
    """

    __introspectable__ = (
        "name",
        "short_name",
        "flags",
        "value",
        "help",
    )

    def __init__(self, name=Unset, short_name=Unset, flags=ArgFlags.NO_ARGUMENT, value=Unset, help=""):
        """
        Construct a CommandOption.

        Parameters
        - name: Unset | str
          Long name, spelled without the leading "--".
        - short_name: Unset | str
          Single character, spelled without the leading "-".
        - flags: ArgFlags | int
          Arity and REPEATABLE bits.
        - value: Value
          Destination binding, usually built by a typed constructor.
        - help: str
          One-line description for the help output.

        Raises
        - TypeError: wrong types, missing value, or neither name given.
        - ValueError: malformed names or unknown flag bits.
        - ConflictingArityError: both REQUIRED_ARGUMENT and OPTIONAL_ARGUMENT.
        """
        typename = type(self).__typename__

        if not isinstance(name := coalesce(name, ""), str):
            raise TypeError(f"{typename} 'name' must be a string")
        elif name and not re.fullmatch(r"[^\s=-][^\s=]*", name):
            raise ValueError(f"{typename} 'name' must be a valid long option name (no '=', whitespace or leading '-')")

        if not isinstance(short_name := coalesce(short_name, ""), str):
            raise TypeError(f"{typename} 'short_name' must be a string")
        elif short_name and (len(short_name) != 1 or not short_name.isprintable() or short_name in " -:="):
            raise ValueError(f"{typename} 'short_name' must be a single character other than '-', ':' or '='")

        if not name and not short_name:
            raise TypeError(f"{typename} must specify at least a name or a short name")

        if not isinstance(flags, int) or isinstance(flags, bool):
            raise TypeError(f"{typename} 'flags' must be ArgFlags")
        elif flags & ~_KNOWN_FLAGS or flags < 0:
            raise ValueError(f"{typename} 'flags' contains unknown bits")

        if not isinstance(value, Value):
            raise TypeError(f"{typename} 'value' must be a Value")

        if not isinstance(help, str):
            raise TypeError(f"{typename} 'help' must be a string")

        self._name = name
        self._short_name = short_name
        self._flags = ArgFlags(flags)
        self._value = value
        self._help = help.strip()

        check_arity(self)

    @property
    def switch(self):
        return "--" + self._name if self._name else "-" + self._short_name

    @property
    def arity(self):
        return self._flags.arity()


class CommandGroup(metaclass=ModelType):
    """
    Named ordered sequence of options, rendered as one help section.

    Supports len(), iteration and indexing over its options.
    """

    __introspectable__ = (
        "name",
        "options",
    )

    def __init__(self, name, options=(), /):
        typename = type(self).__typename__

        if not isinstance(name, str):
            raise TypeError(f"{typename} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{typename} 'name' cannot be empty")

        options = tuple(options)
        for option in options:
            if not isinstance(option, CommandOption):
                raise TypeError(f"{typename} options must be command-options")

        self._name = name
        self._options = options

    def __len__(self):
        return len(self._options)

    def __iter__(self):
        return iter(self._options)

    def __getitem__(self, index):
        return self._options[index]


__all__ = (
    "ArgFlags",
    "CommandOption",
    "CommandGroup",
)
