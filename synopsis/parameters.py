"""
Synopsis parameters: the normalized unit of help rendering.

Scope
- Parameter: plain record describing one option or positional argument
  (position, required, short/long names, description, values limit).
- ArgumentNameCount: one (name, count) entry of the collapsed positional table.
- Normalizer: classifies one OptionMetadata against the collapsed positional
  table into a Parameter.

Sentinels
- NOT_POSITIONAL (-1): the parameter is a named option.
- NO_SHORT_NAME ("\\0"): the parameter has no short name.
- UNBOUNDED (-1): many values, or every remaining position.

Ordering key
- Parameter.format_name is the option-table display name: "--long", "-s",
  or "-s [ --long ]". Named parameters are sorted on it, so long-only options
  come first, then short-named ones by their short character.
"""
from collections import namedtuple

from .metadata import Cardinality, OptionMetadata, UNBOUNDED_COUNT

NOT_POSITIONAL = -1
NO_SHORT_NAME = "\0"
UNBOUNDED = UNBOUNDED_COUNT

ArgumentNameCount = namedtuple("ArgumentNameCount", ("name", "count"))


class Parameter:
    """
    Normalized storage for one command line option or positional argument.

    Fields are plain attributes; format_name is derived from the names.

    Invariant
    - long_name is non-empty or short_name is not NO_SHORT_NAME.
    - args_limit is 0 (toggle), 1 (single value) or UNBOUNDED for options;
      for positionals it is the number of positions bound to the name.
    """
    __slots__ = (
        "position",
        "required",
        "short_name",
        "long_name",
        "description",
        "args_limit",
    )

    def __init__(
            self,
            *,
            position=NOT_POSITIONAL,
            required=False,
            short_name=NO_SHORT_NAME,
            long_name="",
            description="",
            args_limit=0,
    ):
        self.position = position
        self.required = required
        self.short_name = short_name
        self.long_name = long_name
        self.description = description
        self.args_limit = args_limit

    @property
    def positional(self):
        return self.position != NOT_POSITIONAL

    @property
    def format_name(self):
        if self.short_name == NO_SHORT_NAME:
            return f"--{self.long_name}"
        if not self.long_name:
            return f"-{self.short_name}"
        return f"-{self.short_name} [ --{self.long_name} ]"

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in Parameter.__slots__)

    __hash__ = None

    def __rich_repr__(self):
        for name in Parameter.__slots__:
            yield name, getattr(self, name)
        yield "format_name", self.format_name

    def __repr__(self):
        return "parameter(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class Normalizer:
    """
    Convert raw option metadata into Parameter records.

    Each step is a separate method so a test double can override any one of
    them; Printer accepts a Normalizer instance for that purpose.
    """

    def classify(self, option, arguments, /):
        """
        Build the Parameter for `option` given the collapsed positional table.

        Parameters
        - option: OptionMetadata
        - arguments: Sequence[ArgumentNameCount] (see Printer.generate_argument_names)

        Raises
        - ValueError: when the descriptor has neither a long nor a short name
          (OptionMetadata already refuses to build one).
        """
        if not isinstance(option, OptionMetadata):
            raise TypeError("classify() first argument must be option metadata")
        if not option.long_name and not option.short_name:
            raise ValueError("classify() option must have a long or a short name")

        position = self.position(option, arguments)
        return Parameter(
            position=position,
            required=self.required(option),
            short_name=self.short_name(option),
            long_name=option.long_name,
            description=option.description,
            args_limit=self.arguments_limit(position, option, arguments),
        )

    def position(self, option, arguments, /):
        """
        Return the first position bound to the option's long name, or NOT_POSITIONAL.

        The position is the sum of the counts of every preceding entry.
        """
        offset = 0
        for name, count in arguments:
            if name == option.long_name:
                return offset
            offset += count
        return NOT_POSITIONAL

    def short_name(self, option, /):
        return option.short_name or NO_SHORT_NAME

    def required(self, option, /):
        """
        Required iff flagged so, carrying no default, and taking a value.
        """
        return option.required and option.cardinality in (Cardinality.SINGLE, Cardinality.MULTIPLE)

    def arguments_limit(self, position, option, arguments, /):
        """
        Return the values limit: the bound count for positionals, the
        cardinality-derived limit (0, 1, UNBOUNDED) for named options.
        """
        if position != NOT_POSITIONAL:
            for name, count in arguments:
                if name == option.long_name:
                    return UNBOUNDED if count == UNBOUNDED_COUNT else count
        match option.cardinality:
            case Cardinality.TOGGLE:
                return 0
            case Cardinality.SINGLE | Cardinality.DEFAULTED:
                return 1
            case _:
                return UNBOUNDED


__all__ = (
    "NOT_POSITIONAL",
    "NO_SHORT_NAME",
    "UNBOUNDED",
    "ArgumentNameCount",
    "Parameter",
    "Normalizer",
)
