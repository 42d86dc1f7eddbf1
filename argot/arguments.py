r"""
Argot argument declarations.

Overview
- Argument: one entry of a parser's table, a name, a description and the
  number of extra tokens it consumes.
  • names starting with '-' (not followed by a digit) declare switches,
    e.g. "-v" or "--output".
  • every other valid name declares a positional, e.g. "FILE" or "count".

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields declared in __introspectable__ via read-only properties.

Metadata (validated on construction)
- name: str, non-empty, no leading digit, no whitespace.
- descr: str (may be empty; embedded newlines force breaks in usage text).
- nargs: int >= 0, extra tokens after a switch name; positionals take none.
- arity: 1 + nargs, total tokens consumed including a switch's own name.

Quick example:
    >>> from argot.arguments import Argument
    >>> Argument("-t", "a switch taking one string", 1).arity
    2
    >>> Argument("FILE", "input file").switch
    False
"""
import functools
import operator
import re

from .faults import InvalidDeclarationError
from .utils import *


def is_switch(token, /):
    """
    tell whether `token` is spelled like a switch.

    a token is switch-like when it starts with '-' and the character that
    follows, if any, is not a digit; "-5" and "-0.25" stay positional so
    negative numbers can be passed as values.
    """
    return re.match(r"-(?![0-9])", token) is not None


def is_valid(name, /):
    """
    tell whether `name` can be declared: non-empty, no leading digit, no whitespace.
    """
    return bool(name) and not re.match(r"[0-9]", name) and not re.search(r"\s", name)


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Expose the fields listed in __introspectable__ as read-only properties
      backed by "_<field>" attributes (see mirror()).

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and representations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                # fields computed by the class body keep their own property
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='-t', descr='a switch', nargs=1, arity=2)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Argument(metaclass=ArgumentType):
    """
    Immutable declaration of one positional or switch.

    Parameters
    - name: str
      the token that identifies the argument ('-' prefix declares a switch).
    - descr: str
      help text rendered by the usage formatter.
    - nargs: int
      extra value tokens consumed after a switch's name (0 declares a pure flag).

    Raises
    - TypeError: when a field has the wrong type.
    - InvalidDeclarationError: when the name is invalid, nargs is negative, or a
      positional declares extra tokens.
    """
    __introspectable__ = (
        "name",
        "descr",
        "nargs",
        "arity",
    )
    __slots__ = ("_name", "_descr", "_nargs")

    def __init__(self, name, descr="", nargs=0):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not is_valid(name):
            raise InvalidDeclarationError(
                f"invalid {type(self).__typename__} name {name!r}",
                argument=name,
            )

        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")

        if not isinstance(nargs, int) or isinstance(nargs, bool):
            raise TypeError(f"{type(self).__typename__} 'nargs' must be an integer")
        elif nargs < 0:
            raise InvalidDeclarationError(
                f"{type(self).__typename__} {name!r} cannot take a negative number of values",
                argument=name,
            )
        elif nargs and not is_switch(name):
            raise InvalidDeclarationError(
                f"positional {name!r} cannot take extra values",
                argument=name,
                hint="positionals always consume exactly one token; declare a switch instead",
            )

        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_descr", descr)
        object.__setattr__(self, "_nargs", nargs)

    @property
    def arity(self):
        return 1 + self._nargs

    @property
    def switch(self):
        return is_switch(self._name)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")


__all__ = (
    "Argument",
    "is_switch",
    "is_valid",
)
