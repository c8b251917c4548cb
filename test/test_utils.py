"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation, finality.
- coalesce(): only Unset is replaced.
- rename(): both call forms and argument checks.
- mirror(): read-only properties returning copies of mutable containers.
"""
import unittest
from collections import namedtuple
from unittest import TestCase

from synopsis import ArgumentNameCount, ArgumentsMetadata, Printer
from synopsis.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):

    def testUnsetReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyPreserved(self):
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testDirect(self):
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecorator(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testInvalid(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    class Holder:
        items = mirror("items")
        pairs = mirror("pairs")
        mapping = mirror("mapping")
        name = mirror("name")

        def __init__(self):
            self._items = [1, [2, 3]]
            self._pairs = namedtuple("Pair", ("left", "right"))(1, 2)
            self._mapping = {"key": [1]}
            self._name = "holder"

    def testListsAreCopied(self):
        holder = self.Holder()
        items = holder.items
        items[1].append(4)
        self.assertEqual(holder.items, [1, [2, 3]])

    def testMappingsAreCopied(self):
        holder = self.Holder()
        holder.mapping["key"].append(2)
        self.assertEqual(holder.mapping, {"key": [1]})

    def testTuplesPassThrough(self):
        holder = self.Holder()
        self.assertIs(holder.pairs, holder._pairs)
        self.assertEqual(holder.pairs.left, 1)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.Holder().name = "other"

    def testPrinterArgumentNamesKeepTheirType(self):
        printer = Printer("bx", "MATH", "hash", "Hash.", ArgumentsMetadata().add("VALUE", 2)).initialize()
        names = printer.argument_names
        self.assertIsNot(names, printer.argument_names)
        self.assertIsInstance(names[0], ArgumentNameCount)
        self.assertEqual(names[0].count, 2)

    def testGetterName(self):
        self.assertEqual(self.Holder.__dict__["items"].fget.__name__, "items")

    def testInvalidName(self):
        with self.assertRaises(TypeError):
            mirror(42)


if __name__ == "__main__":
    unittest.main()
