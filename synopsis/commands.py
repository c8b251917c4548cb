"""
Synopsis command layer: declare commands, render their help, route a command line.

What this module provides
- Command: abstract base for one command of a multi-command tool.
  • symbol/category/description/formerly/hidden class attributes.
  • load_arguments()/load_options() hooks declaring the raw metadata.
  • write_help(output): renders the help through synopsis.printer.Printer.
  • invoke(output, error): the command body, returning a ConsoleResult.
- Registry: symbol → Command class catalog (register/find/formerly/broadcast).
- Help: the built-in "help" command.
- display_* helpers and dispatch(argv, ...): the thin routing layer.

Core ideas
- The printer never sees argv; dispatch only routes on the first token and on
  --help/-h. Remaining tokens are handed to the command untouched.
- Error displays go through synopsis.faults, so a host can render them with
  rich (shell=True) or receive them as exceptions (shell=False).

Quick start
    from synopsis.commands import Command, register, dispatch

    @register
    class Seed(Command):
        symbol = "seed"
        category = "WALLET"
        description = "Generate a pseudorandom seed."

        def load_options(self, options):
            options.add("bit_length,b", "The length of the seed in bits.", default=192)

        def invoke(self, output, error):
            output.write("...\\n")
            return ConsoleResult.OKAY

    if __name__ == "__main__":
        raise SystemExit(dispatch(sys.argv[1:]))
"""
import difflib
import sys
from abc import ABC, abstractmethod
from enum import IntEnum

from .faults import *
from .logs import logger
from .metadata import ArgumentsMetadata, Cardinality, OptionsMetadata
from .printer import Printer
from .utils import *

COMMAND_USAGE = "Usage: {} COMMAND [--help]"
COMMANDS_HEADER = "Info: The {} commands are:"
INVALID_COMMAND = "'{}' is not a {} command. Enter '{} help' for a list of commands."
DEPRECATED_COMMAND = "The '{}' command has been replaced by '{}'."
HELP_DESCRIPTION = "Get a description and instructions for this command."

HELP_SWITCHES = ("--help", "-h")


class ConsoleResult(IntEnum):
    OKAY    = 0
    FAILURE = -1
    INVALID = -2


def _application(application=Unset, /):
    """
    resolve the application name: explicit, then __prog__ in __main__, then "synopsis".
    """
    return coalesce(application, getattr(__import__("__main__"), "__prog__", "synopsis"))


class Command(ABC):
    """
    One command of a multi-command CLI.

    Subclasses set the class attributes and implement invoke(); they declare
    their parameters through load_arguments()/load_options(). Every command
    gets a "help,h" toggle first.

    Instances are cheap and per-invocation: they carry the raw tokens that
    followed the symbol, the application name, the registry they were found
    in, and the fault rendering options (shell, colorful).
    """
    symbol = Unset
    category = ""
    description = ""
    formerly = Unset
    hidden = False

    def __init__(self, tokens=(), /, *, application=Unset, registry=Unset, shell=True, colorful=False):
        self.tokens = tuple(tokens)
        self.application = _application(application)
        self.registry = registry
        self.shell = shell
        self.colorful = colorful

    def load_arguments(self, arguments, /):
        """
        declare positional slots (ArgumentsMetadata.add(name, count)).
        """

    def load_options(self, options, /):
        """
        declare options (OptionsMetadata.add(names, description, ...)).
        """

    def printer(self):
        """
        build and initialize the Printer for this command's help.
        """
        arguments = ArgumentsMetadata()
        options = OptionsMetadata().add("help,h", HELP_DESCRIPTION)
        self.load_arguments(arguments)
        self.load_options(options)
        return Printer(
            self.application, self.category, self.symbol, self.description, arguments, options
        ).initialize()

    def write_help(self, output, /):
        self.printer().print(output)

    @abstractmethod
    def invoke(self, output, error, /):
        """
        run the command and return a ConsoleResult.
        """
        raise NotImplementedError


class Registry:
    """
    Catalog of Command classes keyed by symbol.

    Commands are stored as classes; find() builds a fresh instance per call so
    no state leaks between invocations.
    """

    def __init__(self):
        self._commands = {}

    def register(self, cls, /):
        """
        add a Command subclass; usable as a class decorator.

        raises
        - TypeError: cls is not a Command subclass or has no string symbol.
        - ValueError: the symbol (or a former symbol) is already in use.
        """
        if not isinstance(cls, type) or not issubclass(cls, Command):
            raise TypeError("register() argument must be a command class")
        if not isinstance(cls.symbol, str) or not cls.symbol.strip():
            raise TypeError(f"command {cls.__name__!r} must declare a non-empty symbol")
        if cls.symbol in self._commands or self.formerly(cls.symbol):
            raise ValueError(f"command symbol {cls.symbol!r} is already in use")
        if cls.formerly is not Unset and (cls.formerly in self._commands or self.formerly(cls.formerly)):
            raise ValueError(f"command former symbol {cls.formerly!r} is already in use")
        self._commands[cls.symbol] = cls
        return cls

    def find(self, symbol, /, tokens=(), **options):
        """
        return a new instance of the command registered as `symbol`, or None.
        """
        try:
            cls = self._commands[symbol]
        except KeyError:
            return None
        return cls(tokens, registry=self, **options)

    def formerly(self, former, /):
        """
        return the current symbol of the command formerly known as `former`, or None.
        """
        for symbol, cls in self._commands.items():
            if cls.formerly is not Unset and cls.formerly == former:
                return symbol
        return None

    def broadcast(self, func, /, **options):
        """
        call `func` with an instance of every registered command, in symbol order.
        """
        for symbol in sorted(self._commands):
            func(self.find(symbol, **options))

    def __iter__(self):
        return iter(sorted(self._commands))

    def __contains__(self, symbol):
        return symbol in self._commands

    def __len__(self):
        return len(self._commands)


registry = Registry()
register = registry.register


def display_command_names(output, /, *, registry=registry):
    """
    write the visible command symbols, one per line, in symbol order.
    """
    def write(command):
        if not command.hidden:
            output.write(f"{command.symbol}\n")
    registry.broadcast(write)


def display_usage(output, /, *, registry=registry, application=Unset):
    application = _application(application)
    output.write(f"\n{COMMAND_USAGE.format(application)}\n")
    output.write(f"\n{COMMANDS_HEADER.format(application)}\n\n")
    display_command_names(output, registry=registry)


def display_invalid_command(error, command, /, *, registry=registry, application=Unset, shell=True, colorful=False):
    """
    report an unknown command symbol, suggesting the closest registered one.
    """
    application = _application(application)
    hint = ""
    if matches := difflib.get_close_matches(command, list(registry), n=1):
        hint = f"did you mean '{matches[0]}'?"
    trigger(
        UnknownCommandError(INVALID_COMMAND.format(command, application, application)),
        prog=application,
        hint=hint,
        shell=shell,
        colorful=colorful,
        deferred=True,
        stream=error,
    )


def display_deprecated_command(error, former, current, /, *, application=Unset, shell=True, colorful=False):
    application = _application(application)
    trigger(
        DeprecatedCommandWarning(DEPRECATED_COMMAND.format(former, current)),
        prog=application,
        hint=f"enter '{application} {current} --help' for its instructions",
        shell=shell,
        colorful=colorful,
        stream=error,
    )


def display_invalid_parameter(error, message, /, *, application=Unset, shell=True, colorful=False):
    application = _application(application)
    trigger(
        InvalidParameterError(message),
        prog=application,
        shell=shell,
        colorful=colorful,
        deferred=True,
        stream=error,
    )


@register
class Help(Command):
    """
    help [COMMAND]: the instructions of COMMAND, or the list of commands.
    """
    symbol = "help"
    category = "MISC"
    description = "Get a description and instructions for a command, or the list of commands."

    def load_arguments(self, arguments, /):
        arguments.add("COMMAND", 1)

    def load_options(self, options, /):
        options.add("COMMAND", "The command for which help is requested.", cardinality=Cardinality.SINGLE)

    def invoke(self, output, error, /):
        options = {"application": self.application, "shell": self.shell, "colorful": self.colorful}
        catalog = coalesce(self.registry, registry)

        if len(self.tokens) > 1:
            display_invalid_parameter(error, f"unexpected token {self.tokens[1]!r}", **options)
            return ConsoleResult.FAILURE
        if not self.tokens:
            display_usage(output, registry=catalog, application=self.application)
            return ConsoleResult.OKAY

        command = catalog.find(self.tokens[0], **options)
        if command is None:
            display_invalid_command(error, self.tokens[0], registry=catalog, **options)
            return ConsoleResult.INVALID
        command.write_help(output)
        return ConsoleResult.OKAY


def dispatch(argv, output=Unset, error=Unset, /, *, registry=registry, application=Unset, shell=True, colorful=False):
    """
    Route a tokenized command line to its command.

    Behavior
    - no tokens: general usage, INVALID.
    - unknown symbol: deprecation notice when it is a former symbol, otherwise
      the invalid-command fault; INVALID either way.
    - "<symbol> --help" / "<symbol> -h": the command's help, OKAY.
    - otherwise: the command's invoke() result.

    Faults are printed to `error` in shell mode and raised otherwise.
    """
    output = coalesce(output, sys.stdout)
    error = coalesce(error, sys.stderr)
    options = {"application": _application(application), "shell": shell, "colorful": colorful}
    argv = list(argv)

    if not argv:
        logger.debug("no command given")
        display_usage(output, registry=registry, application=options["application"])
        return ConsoleResult.INVALID

    symbol, *tokens = argv
    command = registry.find(symbol, tokens, **options)

    if command is None:
        if current := registry.formerly(symbol):
            logger.debug("%r was renamed to %r", symbol, current)
            display_deprecated_command(error, symbol, current, **options)
        else:
            logger.debug("%r is not a registered command", symbol)
            display_invalid_command(error, symbol, registry=registry, **options)
        return ConsoleResult.INVALID

    if any(token in HELP_SWITCHES for token in tokens):
        logger.debug("writing help of %r", symbol)
        command.write_help(output)
        return ConsoleResult.OKAY

    logger.debug("invoking %r with %d tokens", symbol, len(tokens))
    return command.invoke(output, error)


__all__ = (
    "ConsoleResult",
    "Command",
    "Registry",
    "Help",
    "registry",
    "register",
    "display_command_names",
    "display_usage",
    "display_invalid_command",
    "display_deprecated_command",
    "display_invalid_parameter",
    "dispatch",
)
