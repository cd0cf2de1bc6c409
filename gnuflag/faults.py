"""
gnuflag faults (scan-time diagnostics and configuration errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every scan-time diagnostic.
- Fault: base type for recoverable diagnostics. A fault carries a message plus
  read-only options and knows how to render itself as a single stderr line.
- OptionTableError: base type for fatal configuration errors raised while an
  option table is being built (before any argv scanning).
- trigger(): central entry point to surface a fault.
- getdoc(): optional description lookup for a code from the host application.

Severity
- Configuration errors are programmer errors: they are raised and propagate.
- Faults never abort a parse. The parser records them, prints them (unless
  deferred), and moves on to the next token.

Integration
- Setters raise a Fault to fail with a diagnostic; Value.set() reports it.
- Parser.trigger() merges prog/colorful/deferred into the fault and records it.
"""
import copy
import os.path
import sys
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - scanning (101xx)
      • UNKNOWN_OPTION, MISSING_ARGUMENT, AMBIGUOUS_OPTION,
        UNEXPECTED_ARGUMENT, EMPTY_ARGUMENT
    - values (102xx)
      • REPEATED_OPTION, INVALID_NUMBER, NUMBER_OUT_OF_RANGE,
        UNCASTABLE_VALUE, DELEGATED_ERROR
    """
    # --- scanning (101xx) ---
    UNKNOWN_OPTION              = 10101
    MISSING_ARGUMENT            = 10102
    AMBIGUOUS_OPTION            = 10103
    UNEXPECTED_ARGUMENT         = 10104
    EMPTY_ARGUMENT              = 10105

    # --- values (102xx) ---
    REPEATED_OPTION             = 10201
    INVALID_NUMBER              = 10202
    NUMBER_OUT_OF_RANGE         = 10203
    UNCASTABLE_VALUE            = 10204
    DELEGATED_ERROR             = 10205

    def normalize(self):
        """
        code as printed in fault headers.

        a program may remap codes by defining __codes__ = {FaultCode.X: "label"}
        in __main__; unmapped codes print as their number.
        """
        codes = getattr(__import__("__main__"), "__codes__", {})
        return str(codes.get(self, self.value))


def _program():
    main = __import__("__main__")
    try:
        return main.__prog__
    except AttributeError:
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "gnuflag"


class Fault(ABC, Warning):
    """
    recoverable scan-time diagnostic.

    options (all optional, merged later by trigger()/Parser.trigger())
    - code: FaultCode
    - title: short headline
    - hint: one actionable sentence
    - prog: program name shown in the header
    - colorful: style the line (default True)
    - deferred: record without printing (default False)
    - input/option/...: any context a consumer may want to inspect
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code
            "fault-title": "bold #FFC2E0",  # soft pink title
            "fault-message": "#D6D6DE",  # light gray body
            "hint-arrow": "#B8EFAF dim",  # green arrow
            "hint": "italic #B8EFAF",  # green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog") or _program(), "prog-name"),
            " — ",
            text(code.normalize() if code else "-", "code"),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), "fault-title"),
            " ]",
        )
        line = Text.assemble(header, " ", text(str(self), "fault-message"))
        if hint := self.options.get("hint"):
            line.append_text(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return line

    def __trigger__(self):
        if self.options.get("deferred", False):
            return
        console.print(self, soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionFault(Fault): ...
class MissingArgumentFault(Fault): ...
class AmbiguousOptionFault(Fault): ...
class UnexpectedArgumentFault(Fault): ...
class EmptyArgumentFault(Fault): ...
class RepeatedOptionFault(Fault): ...
class InvalidNumberFault(Fault): ...
class NumberOutOfRangeFault(Fault): ...
class UncastableValueFault(Fault): ...
class DelegatedFault(Fault): ...


class OptionTableError(ValueError):
    """
    fatal configuration error in an option table.

    raised before any scanning begins; the caller owning the table must fix it.
    """

    def __init__(self, message, /, *, option=None):
        super().__init__(message)
        self.option = option


class ConflictingArityError(OptionTableError): ...
class DuplicateLongOptionError(OptionTableError): ...
class DuplicateShortOptionError(OptionTableError): ...


def trigger(fault, /, **options):
    """
    merge `options` into `fault` (copy.replace) and surface the result.

    any object implementing __replace__ and __trigger__ is accepted. the merged
    fault is returned; the given fault is left unchanged.
    """
    for method in ("__replace__", "__trigger__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    merged = copy.replace(fault, **options)
    merged.__trigger__()
    return merged


def getdoc(code, /):
    """
    documentation registered by the program for `code`, or None.

    looked up in an optional __docs__ mapping of __main__ keyed by FaultCode.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "Fault",
    "UnknownOptionFault",
    "MissingArgumentFault",
    "AmbiguousOptionFault",
    "UnexpectedArgumentFault",
    "EmptyArgumentFault",
    "RepeatedOptionFault",
    "InvalidNumberFault",
    "NumberOutOfRangeFault",
    "UncastableValueFault",
    "DelegatedFault",
    "OptionTableError",
    "ConflictingArityError",
    "DuplicateLongOptionError",
    "DuplicateShortOptionError",
    "trigger",
    "getdoc",
)
