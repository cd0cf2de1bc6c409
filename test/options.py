# python
"""
Options module behavioral tests (CommandOption, CommandGroup, ArgFlags).

Scope
- Validate construction rules for option descriptors: names, arity, flag bits, value binding.
- Validate derived properties (switch, arity) and read-only exposure.
- Validate groups as named ordered sequences of options.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from gnuflag import (
    ArgFlags,
    CommandGroup,
    CommandOption,
    ConflictingArityError,
    OptionTableError,
    string_type,
)


class TestArgFlags(TestCase):
    """Behavioral tests for the ArgFlags enumeration."""

    def testArityDropsRepeatable(self):
        self.assertEqual((ArgFlags.REQUIRED_ARGUMENT | ArgFlags.REPEATABLE).arity(), ArgFlags.REQUIRED_ARGUMENT)
        self.assertEqual((ArgFlags.OPTIONAL_ARGUMENT | ArgFlags.REPEATABLE).arity(), ArgFlags.OPTIONAL_ARGUMENT)
        self.assertEqual(ArgFlags.REPEATABLE.arity(), ArgFlags.NO_ARGUMENT)

    def testFlagValues(self):
        self.assertEqual(ArgFlags.NO_ARGUMENT, 0)
        self.assertEqual(ArgFlags.REQUIRED_ARGUMENT, 0x01)
        self.assertEqual(ArgFlags.OPTIONAL_ARGUMENT, 0x02)
        self.assertEqual(ArgFlags.ARGUMENT_TYPE_MASK, 0x0F)
        self.assertEqual(ArgFlags.REPEATABLE, 0x10)


class TestCommandOption(TestCase):
    """Behavioral tests for CommandOption construction and properties."""

    def setUp(self):
        self.settings = SimpleNamespace(string="")
        self.value = string_type(self.settings, "string")

    def testOptionProperties(self):
        option = CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, self.value, "  Set the String value. ")
        self.assertEqual(option.name, "string")
        self.assertEqual(option.short_name, "s")
        self.assertEqual(option.flags, ArgFlags.REQUIRED_ARGUMENT)
        self.assertIs(option.value, self.value)
        self.assertEqual(option.help, "Set the String value.")
        self.assertEqual(option.switch, "--string")
        self.assertEqual(option.arity, ArgFlags.REQUIRED_ARGUMENT)

    def testShortOnlyOption(self):
        option = CommandOption(short_name="s", flags=ArgFlags.REQUIRED_ARGUMENT, value=self.value)
        self.assertEqual(option.name, "")
        self.assertEqual(option.switch, "-s")

    def testLongOnlyOption(self):
        option = CommandOption("string", flags=ArgFlags.REQUIRED_ARGUMENT, value=self.value)
        self.assertEqual(option.short_name, "")
        self.assertEqual(option.switch, "--string")

    def testOptionIsReadOnly(self):
        option = CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, self.value)
        with self.assertRaises(AttributeError):
            option.flags = ArgFlags.NO_ARGUMENT
        with self.assertRaises(AttributeError):
            option.name = "other"

    def testConflictingArity(self):
        with self.assertRaises(ConflictingArityError) as context:
            CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT | ArgFlags.OPTIONAL_ARGUMENT, self.value)
        self.assertIsInstance(context.exception, OptionTableError)
        self.assertIsInstance(context.exception, ValueError)
        self.assertIn("--string", str(context.exception))

    def testUnreachableOption(self):
        with self.assertRaises(TypeError):
            CommandOption(flags=ArgFlags.REQUIRED_ARGUMENT, value=self.value)
        with self.assertRaises(TypeError):
            CommandOption("", "", ArgFlags.REQUIRED_ARGUMENT, self.value)

    def testMalformedLongNames(self):
        for name in ("-string", "str=ing", "str ing", " string"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                CommandOption(name, "s", ArgFlags.REQUIRED_ARGUMENT, self.value)

    def testMalformedShortNames(self):
        for short_name in ("ab", "-", ":", "=", " ", "\n"):
            with self.subTest(short_name=short_name), self.assertRaises(ValueError):
                CommandOption("string", short_name, ArgFlags.REQUIRED_ARGUMENT, self.value)

    def testUnknownFlagBits(self):
        with self.assertRaises(ValueError):
            CommandOption("string", "s", 0x40, self.value)

    def testFlagsMustBeIntegers(self):
        with self.assertRaises(TypeError):
            CommandOption("string", "s", True, self.value)
        with self.assertRaises(TypeError):
            CommandOption("string", "s", "REQUIRED_ARGUMENT", self.value)

    def testPlainIntegerFlagsAreNormalized(self):
        option = CommandOption("string", "s", 0x11, self.value)
        self.assertIsInstance(option.flags, ArgFlags)
        self.assertEqual(option.flags, ArgFlags.REQUIRED_ARGUMENT | ArgFlags.REPEATABLE)

    def testValueIsRequired(self):
        with self.assertRaises(TypeError):
            CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT)
        with self.assertRaises(TypeError):
            CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, lambda option, input: True)

    def testHelpMustBeString(self):
        with self.assertRaises(TypeError):
            CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, self.value, None)

    def testOptionRepr(self):
        option = CommandOption("string", "s", ArgFlags.REQUIRED_ARGUMENT, self.value)
        self.assertTrue(repr(option).startswith("command-option(name='string', short_name='s', "))


class TestCommandGroup(TestCase):
    """Behavioral tests for CommandGroup."""

    def setUp(self):
        settings = SimpleNamespace(first="", second="")
        self.first = CommandOption("first", "f", ArgFlags.REQUIRED_ARGUMENT, string_type(settings, "first"))
        self.second = CommandOption("second", "s", ArgFlags.REQUIRED_ARGUMENT, string_type(settings, "second"))

    def testGroupIsOrderedSequence(self):
        group = CommandGroup("Default", [self.first, self.second])
        self.assertEqual(group.name, "Default")
        self.assertEqual(len(group), 2)
        self.assertEqual(list(group), [self.first, self.second])
        self.assertIs(group[1], self.second)
        self.assertEqual(group.options, (self.first, self.second))

    def testEmptyGroupAllowed(self):
        self.assertEqual(len(CommandGroup("Empty")), 0)

    def testGroupNameRequired(self):
        with self.assertRaises(ValueError):
            CommandGroup("  ", [self.first])
        with self.assertRaises(TypeError):
            CommandGroup(None, [self.first])

    def testGroupRejectsForeignObjects(self):
        with self.assertRaises(TypeError):
            CommandGroup("Default", [self.first, "--second"])

    def testGroupAcceptsAnyIterable(self):
        group = CommandGroup("Default", (option for option in (self.first, self.second)))
        self.assertEqual(len(group), 2)


if __name__ == "__main__":
    unittest.main()
