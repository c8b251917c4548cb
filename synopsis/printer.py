"""
Synopsis printer: fixed-width help rendering for one command.

What this module provides
- columnize(paragraph, width): greedy, space-delimited word wrap.
- Printer: owns a command's raw metadata, normalizes it into an ordered list
  of Parameter records and renders:
  • the usage line        "Usage: <application> <command> <parameters>"
  • the description       "Info: <description>"
  • the options table     (named parameters, sorted by format name)
  • the arguments table   (positional parameters, declaration order)

Layout (not configurable, output must stay byte-for-byte stable)
- paragraphs wrap at 73 columns, each line padded to 73 characters.
- table rows are [ 20 | ' ' | 52 ], the name only on the first row.
- more than 256 consecutive positions of one name collapse to -1 (unbounded).

Lifecycle
    printer = Printer("bx", "WALLET", "seed", "Generate a seed.", arguments, options)
    printer.initialize()
    printer.print(sys.stdout)
"""
import bisect
import sys

from .logs import logger
from .metadata import ArgumentsMetadata, OptionsMetadata
from .parameters import *
from .utils import *

MAX_ARGUMENTS = 256

NAME_WIDTH = 20
DESCRIPTION_WIDTH = 52
PARAGRAPH_WIDTH = 73

USAGE_FORMAT = "Usage: {} {} {}"
DESCRIPTION_FORMAT = "Info: {}"
OPTION_TABLE_HEADER = "Options (named):"
ARGUMENT_TABLE_HEADER = "Arguments (positional):"
VALUE_TEXT = "VALUE"

SENTENCE_DELIMITER = " "


def columnize(paragraph, width, /):
    """
    Wrap `paragraph` into lines of roughly `width` characters.

    Rules
    - words are separated by the space character only; runs of spaces collapse,
      and tabs/newlines stay attached to their words.
    - a word joins the current line when len(word) + len(line) < width (the
      joining space is not counted), otherwise it starts a new line.
    - words longer than `width` are never split.
    - width <= 1 or an empty paragraph produce no lines at all.
    """
    if width <= 1:
        return []

    fragment = ""
    column = []

    for word in filter(None, paragraph.split(SENTENCE_DELIMITER)):
        if fragment and len(word) + len(fragment) < width:
            fragment += SENTENCE_DELIMITER + word
            continue
        if fragment:
            column.append(fragment)
        fragment = word

    if fragment:
        column.append(fragment)
    return column


def _format_row_name(parameter):
    if parameter.positional:
        return parameter.long_name
    if parameter.short_name == NO_SHORT_NAME:
        return f"--{parameter.long_name}"
    if not parameter.long_name:
        return f"-{parameter.short_name}"
    return f"-{parameter.short_name} [--{parameter.long_name}]"


def _enqueue_name(count, name, names, /):
    if count <= 0:
        return
    if count > MAX_ARGUMENTS:
        count = UNBOUNDED
    names.append(ArgumentNameCount(name, count))


class Printer:
    """
    Help renderer for a single command.

    Construction stores the raw metadata only; initialize() must run before any
    format_* call. initialize() rebuilds argument_names and parameters from
    scratch, so a Printer can be re-initialized after its metadata changed.

    Properties (read-only)
    - application, category, command, description: str
    - arguments: ArgumentsMetadata
    - options: OptionsMetadata
    - argument_names: list[ArgumentNameCount]
    - parameters: list[Parameter]
    """

    application = mirror("application")
    category = mirror("category")
    command = mirror("command")
    description = mirror("description")
    arguments = mirror("arguments")
    options = mirror("options")
    argument_names = mirror("argument_names")
    parameters = mirror("parameters")

    columnize = staticmethod(columnize)

    def __init__(
            self,
            application,
            category,
            command,
            description,
            arguments=Unset,
            options=Unset,
            /,
            *,
            normalizer=Unset,
    ):
        for label, value in (
                ("application", application),
                ("category", category),
                ("command", command),
                ("description", description),
        ):
            if not isinstance(value, str):
                raise TypeError(f"printer {label!r} must be a string")

        arguments = ArgumentsMetadata() if arguments is Unset else arguments
        options = OptionsMetadata() if options is Unset else options
        if not isinstance(arguments, ArgumentsMetadata):
            raise TypeError("printer 'arguments' must be arguments metadata")
        if not isinstance(options, OptionsMetadata):
            raise TypeError("printer 'options' must be options metadata")

        self._application = application
        self._category = category
        self._command = command
        self._description = description
        self._arguments = arguments
        self._options = options
        self._normalizer = Normalizer() if normalizer is Unset else normalizer
        self._argument_names = []
        self._parameters = []

    # Initialization

    def generate_argument_names(self):
        """
        Collapse the positional expansion into (name, count) runs.

        Walks the positions in order, counting consecutive identical names. The
        walk stops once a run exceeds MAX_ARGUMENTS; that run is then recorded
        with the UNBOUNDED count.
        """
        self._argument_names.clear()

        name = Unset
        count = 0

        for argument in self._arguments.expand():
            if count > MAX_ARGUMENTS:
                break
            if count == 0:
                name = argument
            if argument == name:
                count += 1
                continue
            _enqueue_name(count, name, self._argument_names)
            name, count = argument, 1

        _enqueue_name(count, name, self._argument_names)

    def generate_parameters(self):
        """
        Classify every declared option, keeping named ones sorted by format name.

        Named parameters are inserted after any equal key (stable) and lead the
        list; positional parameters follow in declaration order.
        """
        named = []
        positional = []

        for option in self._options:
            parameter = self._normalizer.classify(option, self._argument_names)
            if parameter.positional:
                positional.append(parameter)
            else:
                bisect.insort(named, parameter, key=lambda x: x.format_name)

        self._parameters[:] = named + positional

    def initialize(self):
        self.generate_argument_names()
        self.generate_parameters()
        logger.debug(
            "%s %s: %d argument names, %d parameters",
            self._application, self._command, len(self._argument_names), len(self._parameters),
        )
        return self

    # Formatters

    def format_parameters_table(self, positional):
        """
        Render the options table (positional=False) or the arguments table (True).

        Parameters without a description produce no rows.
        """
        output = []

        for parameter in self._parameters:
            if parameter.positional != positional:
                continue

            name = _format_row_name(parameter)
            for row in columnize(parameter.description, DESCRIPTION_WIDTH):
                output.append(f"{name:<{NAME_WIDTH}} {row:<{DESCRIPTION_WIDTH}}\n")
                name = ""

        return "".join(output)

    def format_paragraph(self, paragraph):
        return "".join(f"{line:<{PARAGRAPH_WIDTH}}\n" for line in columnize(paragraph, PARAGRAPH_WIDTH))

    def format_usage(self):
        return self.format_paragraph(USAGE_FORMAT.format(
            self._application, self._command, self.format_usage_parameters()
        ))

    def format_description(self):
        return self.format_paragraph(DESCRIPTION_FORMAT.format(self._description))

    def format_usage_parameters(self):
        """
        Assemble the parameter part of the usage line.

        Group order: [-<short toggles>], required options, [--long toggles],
        [optional options], [multiple options]..., required arguments,
        [optional arguments], [multiple arguments]...
        """
        toggle_short_options = []
        toggle_long_options = []
        required_options = []
        optional_options = []
        multiple_options = []
        required_arguments = []
        optional_arguments = []
        multiple_arguments = []

        for parameter in self._parameters:
            long_name = parameter.long_name

            if parameter.args_limit == 0:
                if parameter.short_name != NO_SHORT_NAME:
                    toggle_short_options.append(parameter.short_name)
                else:
                    toggle_long_options.append(long_name)
            elif not parameter.positional:
                if parameter.required:
                    required_options.append(long_name)
                elif parameter.args_limit == 1:
                    optional_options.append(long_name)
                else:
                    multiple_options.append(long_name)
            else:
                if parameter.required:
                    required_arguments.append(long_name)
                elif parameter.args_limit == 1:
                    optional_arguments.append(long_name)
                else:
                    multiple_arguments.append(long_name)

        usage = []

        if toggle_short_options:
            usage.append(f" [-{''.join(toggle_short_options)}]")
        usage.extend(f" --{name} {VALUE_TEXT}" for name in required_options)
        usage.extend(f" [--{name}]" for name in toggle_long_options)
        usage.extend(f" [--{name} {VALUE_TEXT}]" for name in optional_options)
        usage.extend(f" [--{name} {VALUE_TEXT}]..." for name in multiple_options)
        usage.extend(f" {name}" for name in required_arguments)
        usage.extend(f" [{name}]" for name in optional_arguments)
        usage.extend(f" [{name}]..." for name in multiple_arguments)

        return "".join(usage).strip()

    # Printer

    def print(self, output=Unset, /):
        """
        Write the full help text to `output` (sys.stdout by default).

        Table headers are omitted when their table is empty.
        """
        output = coalesce(output, sys.stdout)

        option_table = self.format_parameters_table(False)
        argument_table = self.format_parameters_table(True)

        option_table_header = OPTION_TABLE_HEADER + "\n" if option_table else ""
        argument_table_header = ARGUMENT_TABLE_HEADER + "\n" if argument_table else ""

        output.write("".join((
            "\n", self.format_usage(),
            "\n", self.format_description(),
            "\n", option_table_header,
            "\n", option_table,
            "\n", argument_table_header,
            "\n", argument_table,
        )))

    def __rich_repr__(self):
        yield "application", self._application
        yield "category", self._category
        yield "command", self._command
        yield "argument_names", self.argument_names
        yield "parameters", self.parameters


__all__ = (
    "MAX_ARGUMENTS",
    "NAME_WIDTH",
    "DESCRIPTION_WIDTH",
    "PARAGRAPH_WIDTH",
    "columnize",
    "Printer",
)
