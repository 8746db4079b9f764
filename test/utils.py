"""
Tests for the shared helpers.

Scope
- Unset sentinel: singleton identity, falsy semantics, sealed type.
- coalesce/rename/mirror: small building blocks used by the declarations.
- disjoin/similar/ordinal: text helpers behind the fault messages.
"""
import copy
import unittest
from unittest import TestCase

from clinch.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testSubclassRejected(self) -> None:
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA
                pass

    def testUnionWithType(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("name", Unset | str)


class HelpersTest(TestCase):
    """
    Test suite for the functional helpers.
    """

    def testCoalesceReplacesOnlyUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))

    def testRenameDirect(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(len, "name")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._label = "text"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertEqual(holder.label, "text")
        with self.assertRaises(TypeError):
            holder.table["b"] = 2  # NOQA
        with self.assertRaises(AttributeError):
            holder.items = ()  # NOQA

    def testDisjoin(self) -> None:
        self.assertEqual(disjoin([]), "")
        self.assertEqual(disjoin(["--verbose"]), "'--verbose'")
        self.assertEqual(disjoin(["--verbose", "--version"]), "'--verbose' or '--version'")

    def testSimilar(self) -> None:
        self.assertTrue(similar("--verbos", "--verbose"))
        self.assertTrue(similar("buidl", "build"))
        self.assertFalse(similar("--x", "--verbose"))
        self.assertTrue(similar("--x", "--verbose", 0.0))

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")


if __name__ == "__main__":
    unittest.main()
