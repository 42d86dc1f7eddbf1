"""
Argot value extraction (the unwrapping protocol).

A type specification names what a caller wants out of the tokens attributed
to one argument. resolve() turns a specification into an unwrapper, a callable
taking a tuple of raw tokens and returning the converted value or raising a
ConversionError.

Specifications
- str / numpy.str_ (or a value of them)      → the single token, verbatim.
- int                                        → unbounded Python int.
- numpy.int8 … numpy.uint64 (or a value)     → range-checked numpy integer.
- float / numpy floating types (or a value)  → float of that precision.
- 1-D numpy.ndarray value                    → array of the same dtype and length.
- list of specifications                     → list, one token per element.
- tuple of specifications                    → tuple, one token per element.
- Required(spec)                             → same as spec, but no fallback.

Values act as prototypes: `7` asks for an int, `("x", 0, 1.0)` for a
(str, int, float) tuple, `numpy.zeros(3, numpy.int16)` for three int16.

Rules for arithmetic tokens
- exactly one token, consumed end-to-end (no whitespace, no trailing characters).
- ASCII digits only; leading '+' or '-' allowed.
- hexadecimal spellings ("0x1f") are rejected even though Python could read them.
- values outside the type's range raise NumericOverflowError.
"""
import decimal
import functools
import re

import numpy

from .faults import *
from .utils import *

_HEXADECIMAL = re.compile(r"[+-]?0[xX]")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOATING = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class Required:
    """
    sentinel default meaning "no fallback".

    an accessor given a Required default clears the success flag when the
    argument is absent instead of substituting a value. it wraps the type
    specification so the accessor still knows what to extract when the
    argument is present.
    """
    __slots__ = ("spec",)

    def __init__(self, spec, /):
        if isinstance(spec, Required):
            spec = spec.spec
        resolve(spec)  # fail fast on unsupported specifications
        self.spec = spec

    def __bool__(self):
        return False

    def __repr__(self):
        return "required(%s)" % describe(self.spec)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Required' is not an acceptable base type")


def required(spec, /):
    """
    build the Required sentinel for `spec`.

    Examples
    - result["count"] | required(int)
    - result["-u"] | required((int, int))
    """
    return Required(spec)


def describe(spec, /):
    """
    short human-readable name of a type specification (used in messages).
    """
    match spec:
        case Required():
            return describe(spec.spec)
        case type():
            return spec.__name__
        case numpy.ndarray():
            return "%s[%d]" % (spec.dtype.type.__name__, len(spec))
        case tuple():
            return "(%s)" % ", ".join(map(describe, spec))
        case list():
            return "[%s]" % ", ".join(map(describe, spec))
        case _:
            return type(spec).__name__


def _single(tokens, spec):
    if len(tokens) != 1:
        raise ArityMismatchError(
            "expected one value for %s but got %d" % (describe(spec), len(tokens)),
            tokens=tokens,
        )
    return tokens[0]


def _unwrap_text(type, tokens):
    token = _single(tokens, type)
    return token if type is str else type(token)


def _unwrap_integer(type, tokens):
    token = _single(tokens, type)

    if _HEXADECIMAL.match(token):
        raise HexadecimalLiteralError("%r looks like a hexadecimal literal" % token, tokens=tokens)
    if not _INTEGER.fullmatch(token):
        raise ConversionError("%r is not a valid %s" % (token, type.__name__), tokens=tokens)

    try:
        value = int(token)
    except ValueError:
        # past the interpreter's limit on digits for str to int conversion
        raise (NumericOverflowError if issubclass(type, numpy.integer) else ConversionError)(
            "a %d-character value is too long for %s" % (len(token), type.__name__),
            tokens=tokens,
        ) from None

    if issubclass(type, numpy.integer):
        info = numpy.iinfo(type)
        if not info.min <= value <= info.max:
            raise NumericOverflowError(
                "%r is out of range for %s [%d, %d]" % (token, type.__name__, info.min, info.max),
                tokens=tokens,
            )
    return type(value)


def _unwrap_floating(type, tokens):
    token = _single(tokens, type)

    if _HEXADECIMAL.match(token):
        raise HexadecimalLiteralError("%r looks like a hexadecimal literal" % token, tokens=tokens)
    if not _FLOATING.fullmatch(token):
        raise ConversionError("%r is not a valid %s" % (token, type.__name__), tokens=tokens)

    # exact reference parse; a finite literal must not come out infinite
    reference = decimal.Decimal(token)

    # narrower types are rounded from the double; longdouble reads the text itself
    with numpy.errstate(over="ignore"):
        value = type(token) if issubclass(type, numpy.longdouble) else type(float(token))

    if reference.is_finite() and numpy.isinf(value):
        raise NumericOverflowError(
            "%r is out of range for %s" % (token, type.__name__),
            tokens=tokens,
        )
    return value


def _unwrap_array(type, length, tokens):
    values = _unwrap_sequence((resolve(type),) * length, tokens)
    return numpy.array(values, dtype=type)


def _unwrap_sequence(unwrappers, tokens):
    if len(tokens) != len(unwrappers):
        raise ArityMismatchError(
            "expected %d values but got %d" % (len(unwrappers), len(tokens)),
            tokens=tokens,
        )

    values = []
    for index, (unwrapper, token) in enumerate(zip(unwrappers, tokens), 1):
        try:
            values.append(unwrapper((token,)))
        except ConversionError as error:
            # same fault family, message prefixed with the element's position
            raise type(error)(
                "%s value: %s" % (ordinal(index), error.message),
                **error.options | {"tokens": tokens, "index": index},
            ) from None
    return values


def _unwrap_list(unwrappers, tokens):
    return _unwrap_sequence(unwrappers, tokens)


def _unwrap_tuple(unwrappers, tokens):
    return tuple(_unwrap_sequence(unwrappers, tokens))


def resolve(spec, /):
    """
    build the unwrapper for a type specification.

    parameters
    - spec: a type, a prototype value, a tuple/list of specifications, a 1-D
      numpy array, or a Required sentinel (see module docstring).

    returns
    - callable(tokens: tuple[str, ...]) -> value, raising ConversionError (or
      one of its subclasses) when the tokens cannot be converted.

    raises
    - TypeError: the specification is not supported (None, bool, dict, ...).
    """
    match spec:
        case Required():
            return resolve(spec.spec)
        case type() if issubclass(spec, bool | numpy.bool_):
            raise TypeError("booleans are not extractable; test the argument's presence instead")
        case type() if issubclass(spec, str):
            return functools.partial(_unwrap_text, spec)
        case type() if issubclass(spec, int | numpy.integer):
            return functools.partial(_unwrap_integer, spec)
        case type() if issubclass(spec, float | numpy.floating):
            return functools.partial(_unwrap_floating, spec)
        case numpy.dtype():
            return resolve(spec.type)
        case bool() | numpy.bool_():
            raise TypeError("booleans are not extractable; test the argument's presence instead")
        case str() | int() | float() | numpy.integer() | numpy.floating():
            return resolve(type(spec))
        case numpy.ndarray() if spec.ndim == 1:
            resolve(element := spec.dtype.type)
            return functools.partial(_unwrap_array, element, len(spec))
        case tuple():
            return functools.partial(_unwrap_tuple, tuple(map(resolve, spec)))
        case list():
            return functools.partial(_unwrap_list, tuple(map(resolve, spec)))
        case _:
            raise TypeError("cannot extract values of %s" % describe(spec))


def extract(spec, tokens, /):
    """
    convert `tokens` according to `spec`.

    this is the eager, raising form of the accessor; ParsedResult slots call it
    lazily and turn its faults into a cleared success flag.

    Examples
    - extract(int, ["300"])          -> 300
    - extract(numpy.int8, ["300"])   -> NumericOverflowError
    - extract((str, int), ["a", "1"]) -> ("a", 1)
    """
    return resolve(spec)(tuple(tokens))


__all__ = (
    "Required",
    "required",
    "resolve",
    "extract",
    "describe",
)
