"""
Command layer tests (registry, help, dispatch).

Scope
- Registry: registration rules, lookup, renamed commands, broadcast order.
- Command: generated help through the printer, the implicit help toggle.
- dispatch: empty command lines, unknown and renamed symbols, help switches,
  invocation results.
- Help: general usage, per-command help, invalid input.

Conventions
- Test method names follow CamelCase per project convention.
- Every test builds its own Registry; the module-level registry is never touched.
- Shell renderings go to io.StringIO streams; the application is always "bx".
"""
import io
import unittest
from unittest import TestCase

from synopsis import (
    Cardinality,
    Command,
    ConsoleResult,
    DeprecatedCommandWarning,
    Help,
    InvalidParameterError,
    Registry,
    UnknownCommandError,
    dispatch,
    display_usage,
)


class Seed(Command):
    symbol = "seed"
    category = "WALLET"
    description = "Generate a pseudorandom seed."
    formerly = "newseed"

    def load_options(self, options, /):
        options.add("bit_length,b", "The length of the seed in bits.", default=192)

    def invoke(self, output, error, /):
        output.write(f"seed {' '.join(self.tokens)}\n")
        return ConsoleResult.OKAY


class Secret(Command):
    symbol = "secret"
    category = "MISC"
    description = "Not listed."
    hidden = True

    def invoke(self, output, error, /):
        return ConsoleResult.FAILURE


class CommandTestCase(TestCase):

    def setUp(self):
        self.registry = Registry()
        for cls in (Help, Seed, Secret):
            self.registry.register(cls)
        self.output = io.StringIO()
        self.error = io.StringIO()

    def dispatch(self, *argv, shell=True):
        return dispatch(
            argv, self.output, self.error,
            registry=self.registry, application="bx", shell=shell,
        )

    def help_of(self, symbol):
        buffer = io.StringIO()
        self.registry.find(symbol, application="bx").write_help(buffer)
        return buffer.getvalue()


class TestRegistry(CommandTestCase):

    def testIterationIsSorted(self):
        self.assertEqual(list(self.registry), ["help", "secret", "seed"])
        self.assertEqual(len(self.registry), 3)
        self.assertIn("seed", self.registry)
        self.assertNotIn("newseed", self.registry)

    def testFindBuildsFreshInstances(self):
        first = self.registry.find("seed", ("a",), application="bx")
        second = self.registry.find("seed", application="bx")
        self.assertIsInstance(first, Seed)
        self.assertIsNot(first, second)
        self.assertEqual(first.tokens, ("a",))
        self.assertEqual(second.tokens, ())
        self.assertIs(first.registry, self.registry)

    def testFindUnknown(self):
        self.assertIsNone(self.registry.find("nope"))

    def testFormerly(self):
        self.assertEqual(self.registry.formerly("newseed"), "seed")
        self.assertIsNone(self.registry.formerly("seed"))

    def testBroadcastOrder(self):
        seen = []
        self.registry.broadcast(lambda command: seen.append(command.symbol), application="bx")
        self.assertEqual(seen, ["help", "secret", "seed"])

    def testDuplicateSymbolRejected(self):
        with self.assertRaises(ValueError):
            self.registry.register(Seed)

    def testFormerSymbolCollisionRejected(self):
        class Renamed(Command):
            symbol = "newseed"

            def invoke(self, output, error, /):
                return ConsoleResult.OKAY

        with self.assertRaises(ValueError):
            self.registry.register(Renamed)

    def testNonCommandRejected(self):
        with self.assertRaises(TypeError):
            self.registry.register(object)

    def testMissingSymbolRejected(self):
        class Anonymous(Command):
            def invoke(self, output, error, /):
                return ConsoleResult.OKAY

        with self.assertRaises(TypeError):
            self.registry.register(Anonymous)

    def testDecoratorReturnsClass(self):
        registry = Registry()

        @registry.register
        class Other(Command):
            symbol = "other"

            def invoke(self, output, error, /):
                return ConsoleResult.OKAY

        self.assertTrue(issubclass(Other, Command))
        self.assertIn("other", registry)


class TestCommand(CommandTestCase):

    def testHelpToggleComesFirst(self):
        printer = self.registry.find("seed", application="bx").printer()
        self.assertEqual(printer.options[0].long_name, "help")
        self.assertEqual(printer.format_usage_parameters(), "[-h] [--bit_length VALUE]")

    def testWriteHelp(self):
        rendered = self.help_of("seed")
        self.assertTrue(rendered.startswith("\nUsage: bx seed [-h] [--bit_length VALUE]"))
        self.assertIn("Info: Generate a pseudorandom seed.", rendered)
        self.assertIn("-b [--bit_length]    The length of the seed in bits.", rendered)
        self.assertIn("-h [--help]          Get a description and instructions for this command.", rendered)

    def testHelpCommandUsage(self):
        self.assertIn("Usage: bx help [-h] [COMMAND]", self.help_of("help"))


class TestDispatch(CommandTestCase):

    def testEmptyShowsUsage(self):
        self.assertEqual(self.dispatch(), ConsoleResult.INVALID)
        self.assertEqual(
            self.output.getvalue(),
            "\nUsage: bx COMMAND [--help]\n"
            "\nInfo: The bx commands are:\n\n"
            "help\n"
            "seed\n"
        )

    def testEmptyNeverRaises(self):
        self.assertEqual(self.dispatch(shell=False), ConsoleResult.INVALID)
        self.assertTrue(self.output.getvalue().startswith("\nUsage: bx COMMAND [--help]\n"))
        self.assertEqual(self.error.getvalue(), "")

    def testInvoke(self):
        self.assertEqual(self.dispatch("seed", "a", "b"), ConsoleResult.OKAY)
        self.assertEqual(self.output.getvalue(), "seed a b\n")

    def testInvokeResultIsReturned(self):
        self.assertEqual(self.dispatch("secret"), ConsoleResult.FAILURE)

    def testLongHelpSwitch(self):
        self.assertEqual(self.dispatch("seed", "--help"), ConsoleResult.OKAY)
        self.assertEqual(self.output.getvalue(), self.help_of("seed"))

    def testShortHelpSwitch(self):
        self.assertEqual(self.dispatch("seed", "x", "-h"), ConsoleResult.OKAY)
        self.assertEqual(self.output.getvalue(), self.help_of("seed"))

    def testUnknownCommandInShell(self):
        self.assertEqual(self.dispatch("sede"), ConsoleResult.INVALID)
        rendered = self.error.getvalue()
        self.assertIn("'sede' is not a bx command. Enter 'bx help' for a list of commands.", rendered)
        self.assertIn("did you mean 'seed'?", rendered)
        self.assertEqual(self.output.getvalue(), "")

    def testUnknownCommandRaises(self):
        with self.assertRaises(UnknownCommandError):
            self.dispatch("nope", shell=False)

    def testRenamedCommandInShell(self):
        self.assertEqual(self.dispatch("newseed"), ConsoleResult.INVALID)
        self.assertIn("The 'newseed' command has been replaced by 'seed'.", self.error.getvalue())

    def testRenamedCommandWarns(self):
        with self.assertWarns(DeprecatedCommandWarning):
            self.assertEqual(self.dispatch("newseed", shell=False), ConsoleResult.INVALID)


class TestHelp(CommandTestCase):

    def testWithoutCommandShowsUsage(self):
        self.assertEqual(self.dispatch("help"), ConsoleResult.OKAY)
        expected = io.StringIO()
        display_usage(expected, registry=self.registry, application="bx")
        self.assertEqual(self.output.getvalue(), expected.getvalue())

    def testWithCommand(self):
        self.assertEqual(self.dispatch("help", "seed"), ConsoleResult.OKAY)
        self.assertEqual(self.output.getvalue(), self.help_of("seed"))

    def testUnknownCommand(self):
        self.assertEqual(self.dispatch("help", "nope"), ConsoleResult.INVALID)
        self.assertIn("'nope' is not a bx command.", self.error.getvalue())

    def testUnknownCommandRaises(self):
        with self.assertRaises(UnknownCommandError):
            self.dispatch("help", "nope", shell=False)

    def testTooManyTokens(self):
        self.assertEqual(self.dispatch("help", "seed", "extra"), ConsoleResult.FAILURE)
        self.assertIn("unexpected token 'extra'", self.error.getvalue())

    def testTooManyTokensRaises(self):
        with self.assertRaises(InvalidParameterError):
            self.dispatch("help", "seed", "extra", shell=False)

    def testHelpDeclaresPositionalCommand(self):
        printer = self.registry.find("help", application="bx").printer()
        positional = [parameter for parameter in printer.parameters if parameter.positional]
        self.assertEqual([parameter.long_name for parameter in positional], ["COMMAND"])
        self.assertIs(printer.options[1].cardinality, Cardinality.SINGLE)


if __name__ == "__main__":
    unittest.main()
