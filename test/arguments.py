"""
Arguments module behavioral tests.

Scope
- Validate declarations (Flag, Option, Positional, Command): construction and name rules.
- Validate value processing against a cursor (presence, consumption, conversion).
- Validate the pre-/post-parse hooks (duplicates, required) and near-miss collection.
- Validate command nesting: child lookup and owner routes.

Conventions
- Test method names follow CamelCase per project convention.
- Declarations are exercised directly with a Cursor; parse-level behavior lives in test/parser.py.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from clinch import (
    ArgumentKind,
    Command,
    Cursor,
    DuplicateArgumentError,
    Flag,
    InvalidValueError,
    MissingValueError,
    Option,
    Positional,
    RepeatedArgumentError,
    RequiredArgumentMissingError,
)


class TestNames(TestCase):
    """Behavioral tests for name validation shared by every declaration."""

    def testPrimaryNameAndAliases(self):
        f = Flag("-v", "--verbose")
        self.assertEqual(f.name, "-v")
        self.assertEqual(f.aliases, ("--verbose",))
        self.assertEqual(f.names, ("-v", "--verbose"))

    def testNamesAreStripped(self):
        self.assertEqual(Flag("  --verbose ").name, "--verbose")

    def testAtLeastOneName(self):
        with self.assertRaises(TypeError):
            Flag()

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Option("--out", 1)  # type: ignore[arg-type]

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            Flag("  ")

    def testWhitespaceOrEqualsRejected(self):
        with self.assertRaises(ValueError):
            Flag("--dry run")
        with self.assertRaises(ValueError):
            Option("--out=dist")

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            Flag("-v", "-v")

    def testKinds(self):
        self.assertIs(Flag("-v").kind, ArgumentKind.FLAG)
        self.assertIs(Option("-o").kind, ArgumentKind.OPTION)
        self.assertIs(Positional("file").kind, ArgumentKind.POSITIONAL)
        self.assertIs(Command("build").kind, ArgumentKind.COMMAND)

    def testRepr(self):
        text = repr(Flag("-v", "--verbose"))
        self.assertTrue(text.startswith("flag("))
        self.assertIn("name='-v'", text)
        self.assertIn("aliases=('--verbose',)", text)


class TestFlag(TestCase):
    """Behavioral tests for Flag."""

    def testPresenceSetsValue(self):
        f = Flag("-v")
        self.assertFalse(f.value)
        self.assertFalse(f.withvalue)
        f.process(Cursor())
        self.assertTrue(f.value)
        self.assertTrue(f.defined)

    def testRepeatedRaises(self):
        f = Flag("-v")
        f.process(Cursor())
        with self.assertRaises(RepeatedArgumentError):
            f.process(Cursor())

    def testResetClearsPresence(self):
        f = Flag("-v")
        f.process(Cursor())
        f.reset()
        self.assertFalse(f.value)

    def testRequiredMissingAfterParse(self):
        with self.assertRaises(RequiredArgumentMissingError):
            Flag("--force", required=True).checkafter()


class TestOption(TestCase):
    """Behavioral tests for Option."""

    def testConsumesNextWord(self):
        o = Option("-o", "--out")
        o.process(Cursor(["dist"]))
        self.assertEqual(o.value, "dist")

    def testDefaultUntilGiven(self):
        o = Option("--jobs", type=int, default=1)
        self.assertEqual(o.value, 1)
        o.process(Cursor(["4"]))
        self.assertEqual(o.value, 4)
        o.reset()
        self.assertEqual(o.value, 1)

    def testMissingValueAtEnd(self):
        with self.assertRaises(MissingValueError):
            Option("--out").process(Cursor())

    def testMissingValueBeforeNamedArgument(self):
        with self.assertRaises(MissingValueError):
            Option("--out").process(Cursor(["--verbose"]))

    def testPushedValueAcceptedVerbatim(self):
        cursor = Cursor()
        cursor.prepend("-1")
        o = Option("--level", type=int)
        o.process(cursor)
        self.assertEqual(o.value, -1)

    def testConverterFailureRaises(self):
        with self.assertRaises(InvalidValueError) as context:
            Option("--jobs", type=int).process(Cursor(["many"]))
        self.assertEqual(context.exception.options["value"], "many")
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testTypeMustBeCallable(self):
        with self.assertRaises(TypeError):
            Option("--jobs", type=1)  # type: ignore[arg-type]


class TestPositional(TestCase):
    """Behavioral tests for Positional."""

    def testWithoutValueBehavesLikeFlag(self):
        p = Positional("clean")
        self.assertFalse(p.withvalue)
        p.process(Cursor(["ignored"]))
        self.assertIs(p.value, True)

    def testWithValueConsumes(self):
        p = Positional("file", value=True)
        self.assertTrue(p.withvalue)
        p.process(Cursor(["data.txt"]))
        self.assertEqual(p.value, "data.txt")

    def testWithValueDefault(self):
        self.assertEqual(Positional("file", value=True, default="-").value, "-")


class TestCommand(TestCase):
    """Behavioral tests for Command nesting."""

    def testChildLookupIsOneLevel(self):
        build = Command("build", "b")
        release = build.command("release")
        force = release.add(Flag("--force"))
        self.assertIs(build.child("release"), release)
        self.assertIsNone(build.child("--force"))
        self.assertIs(release.child("--force"), force)

    def testOwnerRoutes(self):
        build = Command("build")
        release = build.command("release")
        force = release.add(Flag("--force"))
        self.assertEqual(build.owner, ())
        self.assertEqual(release.owner, ("build",))
        self.assertEqual(release.route, ("build", "release"))
        self.assertEqual(force.owner, ("build", "release"))

    def testRoutesFollowLateAttachment(self):
        release = Command("release")
        force = release.add(Flag("--force"))
        build = Command("build")
        build.add(release)
        self.assertEqual(force.owner, ("build", "release"))

    def testArgumentsSnapshot(self):
        build = Command("build")
        verbose = build.add(Flag("-v"))
        self.assertEqual(build.arguments, (verbose,))

    def testResetCascades(self):
        build = Command("build")
        verbose = build.add(Flag("-v"))
        build.process(Cursor())
        verbose.process(Cursor())
        build.reset()
        self.assertFalse(build.value)
        self.assertFalse(verbose.value)

    def testChildrenCheckedOnlyWhenSelected(self):
        build = Command("build")
        build.add(Flag("--force", required=True))
        build.checkafter()
        build.process(Cursor())
        with self.assertRaises(RequiredArgumentMissingError):
            build.checkafter()


class TestChecks(TestCase):
    """Behavioral tests for the duplicate and near-miss hooks."""

    def testDuplicateAcrossKinds(self):
        flags, names = set(), set()
        Flag("-v").checkbefore(flags, names)
        with self.assertRaises(DuplicateArgumentError):
            Option("-o", "-v").checkbefore(flags, names)

    def testSetsPerKind(self):
        flags, names = set(), set()
        Flag("-v").checkbefore(flags, names)
        Positional("file").checkbefore(flags, names)
        self.assertEqual(flags, {"-v"})
        self.assertEqual(names, {"file"})

    def testChildrenMayShadowOuterNames(self):
        flags, names = set(), set()
        Flag("-v").checkbefore(flags, names)
        build = Command("build")
        build.add(Flag("-v"))
        build.checkbefore(flags, names)
        self.assertIn("build", names)

    def testDuplicateChildrenRejected(self):
        build = Command("build")
        build.add(Flag("-v"))
        build.add(Flag("-v"))
        with self.assertRaises(DuplicateArgumentError):
            build.checkbefore(set(), set())

    def testMisspelledCollectsSimilarNames(self):
        suggestions = []
        self.assertTrue(Flag("-v", "--verbose").misspelled("--verbos", suggestions))
        self.assertEqual(suggestions, ["--verbose"])
        self.assertFalse(Flag("--quiet").misspelled("--verbos", suggestions))

    def testMisspelledDoesNotRepeat(self):
        suggestions = ["--verbose"]
        Flag("--verbose").misspelled("--verbos", suggestions)
        self.assertEqual(suggestions, ["--verbose"])


if __name__ == "__main__":
    unittest.main()
