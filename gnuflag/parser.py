"""
gnuflag parser: option tables, the argv scanning loop and dispatch to values.

Overview
- Parser(groups)
  • Flattens the groups into one ordered option list and builds the long-name
    and short-name lookup tables. Malformed tables raise before any scanning:
    ConflictingArityError, DuplicateLongOptionError, DuplicateShortOptionError.
- Parser.parse(argv)
  • Scans argv like a non-permuting GNU getopt_long ("+:" mode) and hands every
    recognized occurrence to option.value.set(). Returns the index of the first
    argument that was not consumed.
- parse_cli(argv, groups)
  • One-shot helper building a fresh Parser per call.

Grammar
- "--name", "--name=VALUE", "--name VALUE" (required argument only).
- Unique prefixes of long names are accepted ("--verb" for "--verbose").
- "-x", "-xVALUE", "-x VALUE" (required argument only), "-abc" clusters.
- "--" is consumed and stops scanning; "-" and any token not starting with '-'
  stop scanning without being consumed.

Faults
- Unknown, ambiguous, missing-argument and unexpected-argument conditions are
  reported as faults (printed to stderr unless deferred, and recorded in
  Parser.faults). They never abort the scan.

Concurrency
- The scanner keeps its cursor on the Parser instance; there is no global
  state. Use one Parser per thread (parse_cli does so implicitly).
"""
import difflib
import os.path
import shlex
import sys
from collections.abc import Iterable

from .faults import *
from .flags import ArgFlags
from .options import CommandGroup, check_arity
from .utils import *


class Parser(metaclass=ModelType):
    """
    Option tables plus the scanning loop for one set of option groups.

    Properties
    - groups: the groups as given.
    - options: flattened options in encounter order.
    - longs / shorts: long name / short character -> index into options.
    - faults: faults recorded by the last parse.
    - prog, colorful, deferred: runtime options merged into every fault.
    """

    __introspectable__ = (
        "groups",
        "options",
        "longs",
        "shorts",
        "faults",
        "prog",
        "colorful",
        "deferred",
    )
    __displayable__ = (
        "options",
        "prog",
        "colorful",
        "deferred",
    )

    def __init__(self, groups, /, *, prog=Unset, colorful=True, deferred=False):
        """
        Build the lookup tables for `groups`.

        Parameters
        - groups: Iterable[CommandGroup]
        - prog: Unset | str
          Program name used in fault headers; defaults to basename(argv[0]).
        - colorful: bool
          Style faults printed to stderr.
        - deferred: bool
          Record faults in Parser.faults without printing them.

        Raises
        - TypeError: groups is not an iterable of command-groups.
        - ConflictingArityError, DuplicateLongOptionError, DuplicateShortOptionError.
        """
        if not isinstance(groups, Iterable):
            raise TypeError("parser 'groups' must be an iterable of command-groups")
        groups = tuple(groups)
        for group in groups:
            if not isinstance(group, CommandGroup):
                raise TypeError("parser 'groups' must be an iterable of command-groups")

        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")

        options = []
        longs = {}
        shorts = {}

        for group in groups:
            for option in group:
                options.append(option)
                index = len(options) - 1

                check_arity(option)

                if option.name:
                    if option.name in longs:
                        raise DuplicateLongOptionError("duplicate long option %r" % ("--" + option.name), option=option)
                    longs[option.name] = index

                if option.short_name:
                    if option.short_name in shorts:
                        raise DuplicateShortOptionError("duplicate short option %r" % ("-" + option.short_name), option=option)
                    shorts[option.short_name] = index

        self._groups = groups
        self._options = tuple(options)
        self._longs = longs
        self._shorts = shorts
        self._faults = []
        self._prog = prog
        self._colorful = bool(colorful)
        self._deferred = bool(deferred)

        self._argv = ()
        self._index = 0
        self._position = 0

    def trigger(self, fault, /, **options):
        """
        Merge runtime options into `fault`, record it and surface it.
        """
        fault = trigger(fault, **(options | {
            "prog": coalesce(self._prog, os.path.basename(self._argv[0]) if self._argv and self._argv[0] else None),
            "index": self._position,
            "colorful": self._colorful,
            "deferred": self._deferred,
        }))
        self._faults.append(fault)
        return fault

    def parse(self, argv=Unset, /):
        """
        Scan `argv` and apply every recognized option to its Value.

        Parameters
        - argv: Unset | str | Iterable[str]
          • Unset: use sys.argv.
          • str: shell-like command line, split with shlex.split.
          • Iterable[str]: argument vector; argv[0] is the program name.

        Returns
        - int: index of the first unconsumed argument (len(argv) when every
          argument was consumed).
        """
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        elif not isinstance(argv, Iterable):
            raise TypeError("parse() argument must be a string or an iterable of strings")

        argv = tuple(argv)
        for token in argv:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")

        # every parse starts from a fresh table state
        self._faults.clear()
        for option in self._options:
            option.value.reset()

        self._argv = argv
        self._index = min(1, len(argv))  # argv[0] is the program name

        while self._index < len(argv):
            token = argv[self._index]

            if token == "--":
                self._index += 1
                break
            if not token.startswith("-") or token == "-":
                break

            self._position = self._index
            self._index += 1

            if token.startswith("--"):
                self._parse_long(token)
            else:
                self._parse_short(token)

        return self._index

    def _resolve_long(self, input):
        """
        resolve '--name' to an option index (exact name, then unique prefix).

        returns None after triggering the matching fault when nothing resolves.
        """
        name = input[2:]
        try:
            return self._longs[name]
        except KeyError:
            pass

        candidates = [key for key in self._longs if name and key.startswith(name)]
        if len(candidates) == 1:
            return self._longs[candidates[0]]

        if candidates:
            self.trigger(AmbiguousOptionFault(
                "option %r is ambiguous; possibilities: %s" % (input, ", ".join("--" + key for key in candidates)),
                title="ambiguous option",
                code=FaultCode.AMBIGUOUS_OPTION,
                input=input,
                candidates=tuple("--" + key for key in candidates),
                hint="spell out the full option name",
                docs=getdoc(FaultCode.AMBIGUOUS_OPTION),
            ))
            return None

        suggestions = difflib.get_close_matches(input, ["--" + key for key in self._longs], 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "remove it or check the help for available options"
        self.trigger(UnknownOptionFault(
            "unknown option %r" % input,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            input=input,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        ))
        return None

    def _parse_long(self, token):
        input, separator, value = token.partition("=")

        if (index := self._resolve_long(input)) is None:
            return
        option = self._options[index]

        if separator:
            if option.arity == ArgFlags.NO_ARGUMENT:
                self.trigger(UnexpectedArgumentFault(
                    "option %r doesn't allow an argument" % option.switch,
                    title="unexpected argument",
                    code=FaultCode.UNEXPECTED_ARGUMENT,
                    input=input,
                    option=option,
                    hint="remove everything from '=' (for example: %s)" % option.switch,
                    docs=getdoc(FaultCode.UNEXPECTED_ARGUMENT),
                ))
                return
            if not value and option.arity == ArgFlags.REQUIRED_ARGUMENT:
                self.trigger(EmptyArgumentFault(
                    "empty argument for option %r" % option.switch,
                    title="empty argument",
                    code=FaultCode.EMPTY_ARGUMENT,
                    input=input,
                    option=option,
                    hint="add a value after '=' (for example: %s=<value>)" % option.switch,
                    docs=getdoc(FaultCode.EMPTY_ARGUMENT),
                ))
            argument = value
        elif option.arity == ArgFlags.REQUIRED_ARGUMENT:
            if (argument := self._take()) is None:
                self._missing(input, option)
                return
        else:
            argument = None

        self._dispatch(option, argument)

    def _parse_short(self, token):
        cluster = token[1:]
        position = 0

        while position < len(cluster):
            char = cluster[position]
            position += 1
            input = "-" + char

            try:
                option = self._options[self._shorts[char]]
            except KeyError:
                self.trigger(UnknownOptionFault(
                    "unknown option %r" % input,
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    input=input,
                    token=token,
                    suggestions=[],
                    hint="remove it or check the help for available options",
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                ))
                continue

            if option.arity == ArgFlags.NO_ARGUMENT:
                self._dispatch(option, None)
                continue

            # the rest of the cluster is this option's argument
            argument = cluster[position:] or None
            if argument is None and option.arity == ArgFlags.REQUIRED_ARGUMENT:
                if (argument := self._take()) is None:
                    self._missing(input, option)
                    return

            self._dispatch(option, argument)
            return

    def _take(self):
        """
        consume the next argv element as a detached argument (None at the end).
        """
        if self._index >= len(self._argv):
            return None
        argument = self._argv[self._index]
        self._index += 1
        return argument

    def _missing(self, input, option):
        self.trigger(MissingArgumentFault(
            "missing argument for option %r" % input,
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            input=input,
            option=option,
            hint="pass a value (for example: %s <%s>)" % (input, option.value.hint or "VALUE"),
            docs=getdoc(FaultCode.MISSING_ARGUMENT),
        ))

    def _dispatch(self, option, argument):
        # empty arguments count as no argument at all
        return option.value.set(option, argument or None, trigger=self.trigger)


def parse_cli(argv, groups, /, **options):
    """
    Parse `argv` against `groups` with a freshly built Parser.

    Keyword options are forwarded to Parser (prog, colorful, deferred).

    Returns
    - int: the index of the first argument in argv that was not parsed.
    """
    return Parser(groups, **options).parse(argv)


__all__ = (
    "Parser",
    "parse_cli",
)
