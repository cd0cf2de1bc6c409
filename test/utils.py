"""
Tests for the shared utilities.

This module verifies semantic guarantees of the helpers in `gnuflag.utils`:
- Unset: singleton identity, falsy semantics, union support and finality.
- coalesce(): only the Unset sentinel is replaced.
- rename(): function and decorator forms.
- mirror() and ModelType: read-only published fields and stable representations.
"""
import copy
import unittest
from unittest import TestCase

from gnuflag.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.

    This suite asserts that:
    - UnsetType() always returns the same instance (singleton).
    - The sentinel is falsy but not equal to other falsy values.
    - It composes with types in isinstance() unions.
    - The type is final and cannot be subclassed.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported object on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        """
        The sentinel is falsy, yet distinct from None and False.
        """
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        `str | Unset` is usable in isinstance() checks.
        """
        self.assertTrue(isinstance("name", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(3, str | Unset))
        self.assertTrue(isinstance(Unset, Unset | int))

    def testCopyPreservesSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self) -> None:
        for object in (None, 0, "", (), False):
            with self.subTest(object=object):
                self.assertIs(coalesce(object, "fallback"), object)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        callable = rename(lambda: None, "int_type.setter")
        self.assertEqual(callable.__name__, "int_type.setter")
        self.assertEqual(callable.__qualname__, "int_type.setter")

    def testDecoratorForm(self) -> None:
        @rename("string_type.default")
        def default():
            return None

        self.assertEqual(default.__name__, "string_type.default")
        self.assertIsNone(default())

    def testInvalidArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename("name")(42)


class ModelTypeTest(TestCase):
    """
    Test suite for `mirror()` and the `ModelType` metaclass.
    """

    def setUp(self) -> None:
        class SampleModel(metaclass=ModelType):
            __introspectable__ = ("name", "items")

            def __init__(self, name, items):
                self._name = name
                self._items = items

        self.type = SampleModel
        self.model = SampleModel("sample", [1, [2, 3]])

    def testTypename(self) -> None:
        self.assertEqual(self.type.__typename__, "sample-model")

    def testMirrorsAreReadOnlyCopies(self) -> None:
        """
        Published containers are returned as immutable copies.
        """
        self.assertEqual(self.model.name, "sample")
        self.assertEqual(self.model.items, (1, (2, 3)))
        with self.assertRaises(AttributeError):
            self.model.name = "other"

    def testRepr(self) -> None:
        self.assertEqual(repr(self.model), "sample-model(name='sample', items=(1, (2, 3)))")

    def testRichRepr(self) -> None:
        self.assertEqual(list(self.model.__rich_repr__()), [("name", "sample"), ("items", (1, (2, 3)))])

    def testMirrorRejectsNonStrings(self) -> None:
        with self.assertRaises(TypeError):
            mirror(42)


if __name__ == '__main__':
    unittest.main()
