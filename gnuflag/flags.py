"""
Flag enumerations shared by the option model and the typed values.

- ArgFlags: argument arity of an option (exactly one of NO_ARGUMENT,
  REQUIRED_ARGUMENT, OPTIONAL_ARGUMENT) plus the independent REPEATABLE bit.
- StoreFlag: which constant a bool_type() switch writes when present.
"""
from enum import IntEnum, IntFlag


class ArgFlags(IntFlag):
    NO_ARGUMENT = 0
    REQUIRED_ARGUMENT = 0x01
    OPTIONAL_ARGUMENT = 0x02
    ARGUMENT_TYPE_MASK = 0x0F

    REPEATABLE = 0x10  # the option can be used more than once

    def arity(self):
        """
        Return only the arity bits (NO/REQUIRED/OPTIONAL_ARGUMENT).
        """
        return ArgFlags(self & ArgFlags.ARGUMENT_TYPE_MASK)


class StoreFlag(IntEnum):
    STORE_FALSE = 0
    STORE_TRUE = 1


__all__ = (
    "ArgFlags",
    "StoreFlag",
)
