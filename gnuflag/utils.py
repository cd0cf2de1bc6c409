"""
gnuflag utilities shared by the option model, the values and the parser.

Contents
- Unset: "not provided" marker for keyword defaults where None already means
  something (a default_value() of None means "no default").
- coalesce(): materialize Unset into a concrete fallback.
- rename(): give generated closures readable names ("int_type.setter").
- mirror(): read-only property over a private "_name" field.
- ModelType: metaclass of the descriptors (CommandOption, CommandGroup, Value,
  Parser) wiring mirrors and representations from __introspectable__.

Only the names listed in __all__ are meant to be imported elsewhere.
"""
import builtins
import functools
import operator
import re
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance; it is falsy, prints as "Unset", survives
    copy/deepcopy as itself and can be combined with types in isinstance()
    unions (`str | Unset`).
    """

    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    __ror__ = __or__

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when `object` is Unset.

    Every other falsy value (None, 0, "") is returned unchanged:

        >>> coalesce(Unset, "")
        ''
        >>> coalesce(None, "")
    """
    return default if object is Unset else object


def _relabel(callable, name):
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() first argument must be a updatable callable") from None
    return callable


def rename(*parameters):
    """
    Name a callable: `rename(callable, name)`, or as a decorator `@rename(name)`.

    The typed value constructors build their setter and default producer as
    closures; naming them keeps reprs and tracebacks readable.
    """
    if len(parameters) == 2:
        return _relabel(*parameters)
    if len(parameters) != 1:
        raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))

    name, = parameters
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    @functools.partial(_relabel, name="rename")
    def decorator(callable):
        if not builtins.callable(callable):
            raise TypeError("@rename() must be applied to a callable")
        return _relabel(callable, name)

    return decorator


def _freeze(object):
    # strings are sequences too, leave them alone
    if isinstance(object, str):
        return object
    if isinstance(object, Mapping):
        return {key: _freeze(value) for key, value in object.items()}
    if isinstance(object, Sequence):
        return tuple(_freeze(item) for item in object)
    if isinstance(object, Set):
        return frozenset(_freeze(item) for item in object)
    return object


def mirror(name, /):
    """
    Return a read-only property publishing `self._<name>`.

    Lists, sets and mappings are handed out as copies (tuples, frozensets,
    fresh dicts) so the model cannot be changed from outside.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    attribute = "_" + name

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, attribute))

    return property(getter)


class ModelType(type):
    """
    Metaclass for the gnuflag descriptors.

    - __typename__: hyphenated class name ("CommandOption" -> "command-option"),
      the subject of validation messages.
    - one mirror() per name in __introspectable__.
    - __repr__ and __rich_repr__ over __displayable__, falling back to
      __introspectable__, unless the class defines its own.
    """
    __introspectable__ = ()
    __displayable__ = None

    def __new__(cls, name, bases, namespace, **options):
        published = {field: mirror(field) for field in namespace.get("__introspectable__", ())}
        typename = re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()
        self = super().__new__(cls, name, bases, {"__typename__": typename} | namespace | published, **options)

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for field in type(self).__displayable__ or type(self).__introspectable__:
                    yield field, getattr(self, field)

            self.__rich_repr__ = __rich_repr__

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                fields = map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())
                return "%s(%s)" % (type(self).__typename__, ", ".join(fields))

            self.__repr__ = __repr__

        return self


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",
    "ModelType",

    # Constants
    "Unset",
)
