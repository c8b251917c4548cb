"""
Synopsis helpers shared by the metadata, parameters, printer and command layers.

Unset
- "argument not given" for every optional parameter of the package: the
  Printer's arguments/options/normalizer, a fault's message, the level and
  stream of logs.configure(), the application name of the command layer.
- None stays a legitimate value: OptionMetadata(default=None) is a defaulted
  option, OptionMetadata() without default is a toggle.
- Usable in unions for isinstance checks (Cardinality | Unset).

coalesce(value, default)
- Resolves Unset only, e.g. the output stream of Printer.print() and dispatch().

mirror("name")
- Read-only property over self._name. Printer exposes its argument names and
  parameters through it, and the copies it returns keep callers from
  reordering the normalized list between initialize() and rendering.
  Tuples (ArgumentNameCount included) and strings are returned as-is.

rename(callable, name)
- Gives the generated mirror getters their property name.

    >>> class Holder:
    ...     _items = [1, 2]
    ...     items = mirror("items")
    >>> Holder().items is Holder._items
    False
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value (an option default may
    well be None), but the API needs a way to distinguish “not provided” from
    “provided as None”. A single instance, Unset, is exposed for that purpose.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator

    Raises
    - TypeError: non-callable target, non-string name, or wrong arity.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy mutable container values.

    Behavior
    - tuple (named tuples included): returned as-is, already immutable.
    - other Sequence (non-string): a new list with each element processed.
    - Mapping: a new dict with processed values (keys preserved).
    - Set: a new set with each element processed.
    - Anything else: returned as-is.
    """
    if isinstance(object, tuple | str):
        return object
    elif isinstance(object, Sequence):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private backing attribute "_{name}".

    Containers are returned as fresh copies so callers cannot mutate the
    state a Printer (or a metadata collection) relies on.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
