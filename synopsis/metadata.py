r"""
Synopsis raw metadata: what a command declares before normalization.

Overview
- Cardinality: how many values an option accepts per occurrence
  (TOGGLE, SINGLE, DEFAULTED, MULTIPLE).
- OptionMetadata: one raw option/argument descriptor, built from a
  "long,s" names string, a description and its value semantics.
- OptionsMetadata: ordered, chainable collection of OptionMetadata.
- ArgumentsMetadata: the positional-argument table, an ordered list of
  (name, count) slots where -1 means "every remaining position".

Metadata (sanitized on construction)
- names: "long,s" where either side may be empty (",m", "long") but not both.
  The short side must be exactly one character.
- description: string, kept verbatim (may be empty; empty descriptions are omitted from tables).
- cardinality: Unset | Cardinality. When Unset it resolves to DEFAULTED if a
  default is given, otherwise TOGGLE (an option declared without a value is a
  presence-only switch).
- default: Unset | any. Only SINGLE/DEFAULTED options may carry one.
- required: bool.

Quick example:
    >>> options = OptionsMetadata()
    >>> options.add("help,h", "Get a description and instructions for this command.")
    >>> options.add("format,f", "The output format.", default="info")
    >>> options.add("TRANSACTION", "The transaction.", cardinality=Cardinality.SINGLE, required=True)
    >>> arguments = ArgumentsMetadata().add("TRANSACTION", 1)
"""
import functools
import itertools
import operator
from enum import IntEnum

from .utils import *


class Cardinality(IntEnum):
    """
    value semantics of a raw option.

    - TOGGLE: no value, presence alone is meaningful.
    - SINGLE: exactly one value, no default.
    - DEFAULTED: exactly one value, falling back to a default.
    - MULTIPLE: many values per occurrence.
    """
    TOGGLE    = 0
    SINGLE    = 1
    DEFAULTED = 2
    MULTIPLE  = 3


UNBOUNDED_COUNT = -1


def _split_names(typename, names, /):
    """
    Internal: split and validate a "long,s" names string into (long, short).

    Rules
    - at most one comma; surrounding whitespace is trimmed on both sides.
    - the short side, when present, is exactly one character.
    - long and short cannot both be empty.

    Raises
    - TypeError: when names is not a string.
    - ValueError: on any of the rules above.
    """
    if not isinstance(names, str):
        raise TypeError(f"{typename} names must be a string")

    long, separator, short = names.partition(",")
    long, short = long.strip(), short.strip()

    if separator and "," in short:
        raise ValueError(f"{typename} names accept at most one short name")
    if short and len(short) != 1:
        raise ValueError(f"{typename} short name must be a single character")
    if not long and not short:
        raise ValueError(f"{typename} must specify a long or a short name")
    return long, short


class OptionMetadata:
    """
    Raw option/argument descriptor (one declared parameter of a command).

    Whether the descriptor ends up as a named option or a positional argument
    is not decided here: a descriptor whose long name appears in the command's
    ArgumentsMetadata is positional (see synopsis.parameters.Normalizer).

    Properties
    - long_name: str (possibly empty)
    - short_name: str (one character, or empty when absent)
    - description: str
    - cardinality: Cardinality (resolved)
    - default: any (Unset when none)
    - required: bool
    """

    __introspectable__ = (
        "long_name",
        "short_name",
        "description",
        "cardinality",
        "default",
        "required",
    )
    __typename__ = "option-metadata"

    long_name = mirror("long_name")
    short_name = mirror("short_name")
    description = mirror("description")
    cardinality = mirror("cardinality")
    default = mirror("default")
    required = mirror("required")

    def __init__(
            self,
            names,
            description="",
            /,
            *,
            cardinality=Unset,
            default=Unset,
            required=False,
    ):
        typename = type(self).__typename__
        self._long_name, self._short_name = _split_names(typename, names)

        if not isinstance(description, str):
            raise TypeError(f"{typename} 'description' must be a string")
        self._description = description

        if not isinstance(cardinality, Cardinality | Unset):
            raise TypeError(f"{typename} 'cardinality' must be a cardinality")
        cardinality = coalesce(cardinality, Cardinality.TOGGLE if default is Unset else Cardinality.DEFAULTED)

        if cardinality is Cardinality.SINGLE and default is not Unset:
            # A single value with a default is the defaulted form.
            cardinality = Cardinality.DEFAULTED
        if cardinality is Cardinality.DEFAULTED and default is Unset:
            raise ValueError(f"{typename} 'default' is mandatory for defaulted options")
        if cardinality in (Cardinality.TOGGLE, Cardinality.MULTIPLE) and default is not Unset:
            raise ValueError(f"{typename} 'default' is only allowed for single-valued options")
        self._cardinality = cardinality
        self._default = default

        if not isinstance(required, bool):
            raise TypeError(f"{typename} 'required' must be a boolean")
        self._required = required

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"


class OptionsMetadata:
    """
    Ordered collection of OptionMetadata, declaration order preserved.

    add() mirrors the chained declaration style commands use:

        options = (
            OptionsMetadata()
            .add("first,f", "First option description.")
            .add("second,x", "Second option description.")
        )

    Long and short names must be unique across the collection.
    """
    __typename__ = "options-metadata"

    def __init__(self, options=(), /):
        self._options = []
        for option in options:
            self.append(option)

    def append(self, option, /):
        typename = type(self).__typename__
        if not isinstance(option, OptionMetadata):
            raise TypeError(f"{typename} items must be option metadata")
        for other in self._options:
            if option.long_name and option.long_name == other.long_name:
                raise ValueError(f"{typename} long name {option.long_name!r} is already in use")
            if option.short_name and option.short_name == other.short_name:
                raise ValueError(f"{typename} short name {option.short_name!r} is already in use")
        self._options.append(option)
        return self

    def add(self, names, description="", /, **options):
        """
        Build an OptionMetadata from the given arguments and append it.

        Returns the collection itself so declarations can be chained.
        """
        return self.append(OptionMetadata(names, description, **options))

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __getitem__(self, index):
        return self._options[index]

    def __repr__(self):
        return f"{type(self).__typename__}({self._options!r})"


class ArgumentsMetadata:
    """
    Positional-argument table: ordered (name, count) slot declarations.

    Semantics
    - add(name, count) reserves `count` consecutive positions for `name`.
    - count == -1 reserves every remaining position; nothing may follow it.
    - count == 0 reserves nothing (the name never appears in the expansion).
    - expand() yields the name of each position in order (endless when the
      table ends with an unbounded entry).
    """
    __typename__ = "arguments-metadata"

    def __init__(self):
        self._arguments = []

    def add(self, name, count, /):
        typename = type(self).__typename__
        if not isinstance(name, str):
            raise TypeError(f"{typename} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{typename} names cannot be empty-strings")
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError(f"{typename} counts must be integers")
        if count < UNBOUNDED_COUNT:
            raise ValueError(f"{typename} counts must be positive, zero, or -1 for unbounded")
        if self._arguments and self._arguments[-1][1] == UNBOUNDED_COUNT:
            raise ValueError(f"{typename} cannot add {name!r} after an unbounded argument")
        self._arguments.append((name, count))
        return self

    def max_total_count(self):
        """
        Return the number of declared positions, or None when unbounded.
        """
        if self._arguments and self._arguments[-1][1] == UNBOUNDED_COUNT:
            return None
        return sum(count for _, count in self._arguments)

    def name_for_position(self, position, /):
        """
        Return the argument name bound to a 0-based position.

        Raises
        - IndexError: when the position is beyond a bounded table.
        """
        if position < 0:
            raise IndexError(f"{type(self).__typename__} position must not be negative")
        offset = 0
        for name, count in self._arguments:
            if count == UNBOUNDED_COUNT or position < offset + count:
                return name
            offset += count
        raise IndexError(f"{type(self).__typename__} position {position} is out of range")

    def expand(self):
        """
        Yield the argument name of every position, in order.
        """
        for name, count in self._arguments:
            if count == UNBOUNDED_COUNT:
                yield from itertools.repeat(name)
            else:
                yield from itertools.repeat(name, count)

    def __iter__(self):
        return iter(self._arguments)

    def __len__(self):
        return len(self._arguments)

    def __repr__(self):
        return f"{type(self).__typename__}({self._arguments!r})"


__all__ = (
    "Cardinality",
    "OptionMetadata",
    "OptionsMetadata",
    "ArgumentsMetadata",
)
