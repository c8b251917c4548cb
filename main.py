import sys

from rich.pretty import pprint

from synopsis import *

__prog__ = "bx"


@register
class Seed(Command):
    symbol = "seed"
    category = "WALLET"
    description = "Generate a pseudorandom seed."
    formerly = "newseed"

    def load_options(self, options, /):
        options.add("bit_length,b", "The length of the seed in bits.", default=192)
        options.add("entropy", "Additional entropy mixed into the seed.", cardinality=Cardinality.MULTIPLE)

    def invoke(self, output, error, /):
        output.write("0123456789abcdef0123456789abcdef0123456789abcdef\n")
        return ConsoleResult.OKAY


@register
class Hash(Command):
    symbol = "hash"
    category = "MATH"
    description = "Hash the given values."

    def load_arguments(self, arguments, /):
        arguments.add("VALUE", -1)

    def load_options(self, options, /):
        options.add("algorithm,a", "The hash algorithm.", default="sha256")
        options.add("VALUE", "The values to hash.", cardinality=Cardinality.MULTIPLE, required=True)

    def invoke(self, output, error, /):
        if not self.tokens:
            display_invalid_parameter(error, "at least one VALUE is required", colorful=True)
            return ConsoleResult.FAILURE
        output.write("\n".join(self.tokens) + "\n")
        return ConsoleResult.OKAY


if __name__ == '__main__':
    configure()
    pprint(registry.find("hash").printer())
    sys.exit(dispatch(sys.argv[1:], colorful=True))
