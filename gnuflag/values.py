r"""
gnuflag values: the generic setter/default contract and its typed constructors.

Overview
- Value
  • Binds a default-value producer, a setter and an argument hint.
  • Value.set(option, input) applies the once-only rule and the optional-argument
    default before handing the raw token to the setter.
  • The parser only ever talks to this interface, so new option types plug in
    by writing a function that returns a configured Value.

- Typed constructors
  • string_type(target, attribute): store the token verbatim.
  • int_type(target, attribute): base-10 integer with range checking.
  • bool_type(target, attribute, store): presence-only switch writing a constant.
  • string_container_type(container): append every token (pair with REPEATABLE).

Destinations
- Scalar constructors write into caller-owned storage: `target[attribute]` when
  the target is a MutableMapping, otherwise `setattr(target, attribute, ...)`.
  Each destination should be bound to a single Value; aliasing is not checked.

Setter contract
- setter(option, input) -> bool, where input is a str or None.
- A setter fails with a diagnostic by raising a Fault (e.g. InvalidNumberFault);
  Value.set() reports it through its trigger and returns False.

Quick example:
    >>> settings = {"jobs": 1}
    >>> value = int_type(settings, "jobs", 1)
    >>> value.default_value()
    '1'
"""
import re
from collections.abc import MutableMapping

from .faults import *
from .faults import trigger as _trigger
from .flags import ArgFlags, StoreFlag
from .utils import *

# Range of a C int, the representable range of the integer option type.
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class Value(metaclass=ModelType):
    """
    Composite type providing a generic way to write a destination and to get
    the default value for it.

    Only use this directly when implementing a new argument type; otherwise use
    the typed constructors in this module.

    Properties
    - hint: the argument hint shown in help (may be empty).
    - was_set: True once the owning option has been seen in the current parse.
    """

    __introspectable__ = (
        "hint",
    )
    __displayable__ = (
        "hint",
        "was_set",
    )

    def __init__(self, default, setter, hint=""):
        """
        Parameters
        - default: Callable[[], str | None]
          Returns the default value rendered as text, or None when there is none.
        - setter: Callable[[CommandOption, str | None], bool]
          Writes the destination from the raw token and reports success.
        - hint: str
          Indicates what kind of data the option accepts (e.g. "NUMBER").
        """
        if not callable(default):
            raise TypeError(f"{type(self).__typename__} 'default' must be callable")
        if not callable(setter):
            raise TypeError(f"{type(self).__typename__} 'setter' must be callable")
        if not isinstance(hint, str):
            raise TypeError(f"{type(self).__typename__} 'hint' must be a string")

        self._default = default
        self._setter = setter
        self._hint = hint
        self._was_set = False

    @property
    def was_set(self):
        return self._was_set

    def reset(self):
        """
        Forget that the option was seen (done by the parser before each parse).
        """
        self._was_set = False

    def set(self, option, input=None, /, *, trigger=_trigger):
        """
        Call the setter with either the given input or the default value.

        Behavior
        - Fails with RepeatedOptionFault when the option was already seen and
          is not REPEATABLE.
        - Marks the value as seen before calling the setter, so a failing
          setter still consumes the single allowed use.
        - With no input, an OPTIONAL_ARGUMENT option receives the default
          value (failing when there is none) and a NO_ARGUMENT option receives
          None. A REQUIRED_ARGUMENT option without input fails.

        Parameters
        - option: the CommandOption owning this value.
        - input: str | None, the raw token (None when nothing was attached).
        - trigger: callable receiving every fault raised on the way.

        Returns
        - bool: whether the destination was written.
        """
        if self._was_set and not option.flags & ArgFlags.REPEATABLE:
            trigger(RepeatedOptionFault(
                "option %r can only be used once" % option.switch,
                title="repeated option",
                code=FaultCode.REPEATED_OPTION,
                input=option.switch,
                option=option,
                hint="remove the extra occurrences of %s" % option.switch,
                docs=getdoc(FaultCode.REPEATED_OPTION),
            ))
            return False

        self._was_set = True

        arity = ArgFlags(option.flags).arity()
        if input is None and arity == ArgFlags.OPTIONAL_ARGUMENT:
            if (input := self._default()) is None:
                return False
        elif input is None and arity != ArgFlags.NO_ARGUMENT:
            return False

        try:
            return bool(self._setter(option, input))
        except Fault as fault:
            trigger(fault)
        except Exception as exception:
            # unexpected failure in a custom setter; report it and keep parsing
            trigger(DelegatedFault(
                "something occurred while setting option %r" % option.switch,
                title="delegated error",
                code=FaultCode.DELEGATED_ERROR,
                input=option.switch,
                option=option,
                hint="check the setter bound to %s" % option.switch,
                docs=getdoc(FaultCode.DELEGATED_ERROR),
                exception=exception,
            ))
        return False

    def default_value(self):
        """
        Return the default value rendered as text, or None if there is none.
        """
        return self._default()

    def arg_hint(self):
        return self._hint


def _assign(target, attribute, object):
    if isinstance(target, MutableMapping):
        target[attribute] = object
    else:
        setattr(target, attribute, object)


def _check_destination(factory, target, attribute):
    if target is None:
        raise TypeError(f"{factory}() target cannot be None")
    if not isinstance(attribute, str):
        raise TypeError(f"{factory}() attribute must be a string")
    if not isinstance(target, MutableMapping) and not attribute.isidentifier():
        raise ValueError(f"{factory}() attribute must be a valid identifier")


def string_type(target, attribute, /, default=Unset, hint="STRING"):
    """
    Return a Value handling options that take a string argument.

    Parameters
    - target, attribute: destination written with the raw token.
    - default: Unset | str, shown in help and used for optional arguments.
    - hint: argument hint shown in help.
    """
    _check_destination("string_type", target, attribute)
    if not isinstance(default, str | Unset):
        raise TypeError("string_type() default must be a string")

    @rename("string_type.default")
    def default_():
        return coalesce(default)

    @rename("string_type.setter")
    def setter(option, input):
        if input is None:
            return False
        _assign(target, attribute, input)
        return True

    return Value(default_, setter, hint)


def int_type(target, attribute, /, default=Unset, *, minimum=INT_MIN, maximum=INT_MAX):
    """
    Return a Value handling options that take a base-10 integer argument.

    Parameters
    - target, attribute: destination written with the parsed integer.
    - default: Unset | int, shown in help and used for optional arguments.
    - minimum, maximum: int | None, inclusive bounds (None removes the bound).
      Defaults to the range of a C int.

    Faults (the destination is left untouched)
    - InvalidNumberFault: the token is not a decimal integer.
    - NumberOutOfRangeFault: the integer lies outside [minimum, maximum].
    - UncastableValueFault: any other conversion error.
    """
    _check_destination("int_type", target, attribute)
    if not isinstance(default, int | Unset) or isinstance(default, bool):
        raise TypeError("int_type() default must be an integer")
    for bound in (minimum, maximum):
        if bound is not None and (not isinstance(bound, int) or isinstance(bound, bool)):
            raise TypeError("int_type() bounds must be integers")
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValueError("int_type() minimum cannot be greater than maximum")

    @rename("int_type.default")
    def default_():
        return None if default is Unset else str(default)

    @rename("int_type.setter")
    def setter(option, input):
        if input is None:
            return False

        if not re.fullmatch(r"[+-]?[0-9]+", input, re.ASCII):
            raise InvalidNumberFault(
                "argument %r of option %r is not a number" % (input, option.switch),
                title="invalid number",
                code=FaultCode.INVALID_NUMBER,
                input=input,
                option=option,
                hint="pass a whole decimal number (for example: %s=42)" % option.switch,
                docs=getdoc(FaultCode.INVALID_NUMBER),
            )

        try:
            number = int(input, 10)
        except ValueError as exception:
            # e.g. more digits than the interpreter agrees to convert
            raise UncastableValueFault(
                "unknown error while handling argument of option %r" % option.switch,
                title="uncastable value",
                code=FaultCode.UNCASTABLE_VALUE,
                input=input,
                option=option,
                hint=str(exception),
                docs=getdoc(FaultCode.UNCASTABLE_VALUE),
            ) from None

        if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
            raise NumberOutOfRangeFault(
                "argument %r of option %r is out of range" % (input, option.switch),
                title="number out of range",
                code=FaultCode.NUMBER_OUT_OF_RANGE,
                input=input,
                option=option,
                hint="pass a number between %s and %s" % (
                    "-infinity" if minimum is None else minimum,
                    "infinity" if maximum is None else maximum,
                ),
                docs=getdoc(FaultCode.NUMBER_OUT_OF_RANGE),
            )

        _assign(target, attribute, number)
        return True

    return Value(default_, setter, "NUMBER")


def bool_type(target, attribute, /, store=StoreFlag.STORE_TRUE, default=Unset):
    """
    Create a boolean switch that either sets or clears the destination,
    depending on `store`. Any attached token is ignored.

    The value in `default` is only used for generating the help.
    """
    _check_destination("bool_type", target, attribute)
    if not isinstance(store, StoreFlag):
        raise TypeError("bool_type() store must be a StoreFlag")
    if not isinstance(default, bool | Unset):
        raise TypeError("bool_type() default must be a boolean")

    @rename("bool_type.default")
    def default_():
        if default is Unset:
            return None
        return "true" if default else "false"

    @rename("bool_type.setter")
    def setter(option, input):
        _assign(target, attribute, store is StoreFlag.STORE_TRUE)
        return True

    return Value(default_, setter)


def string_container_type(container, /, hint="STRING"):
    """
    Return a Value appending every token to `container`.

    Works with any ordered sequence offering append() (list, deque, ...).
    There is never a default value, so combine it with REQUIRED_ARGUMENT and
    usually REPEATABLE.
    """
    if not callable(getattr(container, "append", None)):
        raise TypeError("string_container_type() container must support append()")

    @rename("string_container_type.default")
    def default_():
        return None

    @rename("string_container_type.setter")
    def setter(option, input):
        if input is None:
            return False
        container.append(input)
        return True

    return Value(default_, setter, hint)


__all__ = (
    # Constants
    "INT_MIN",
    "INT_MAX",

    # Types
    "Value",

    # Typed constructors
    "string_type",
    "int_type",
    "bool_type",
    "string_container_type",
)
