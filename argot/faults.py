"""
Argot faults (declaration errors, parse faults) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the library
  can report. Codes are grouped by domain to keep logs/searches predictable.
- ArgumentFault: base type that carries message + options and knows how to
  render itself through rich in a friendly, lowercased, and actionable way.
- Declaration errors are raised while a parser is built (programmer errors).
- Parse faults are never raised by the parser; they are collected on the parse
  result, which clears its success flag. The value extractor raises them so
  callers using it directly get ordinary exceptions.

Integration
- ParsedResult.report() prints the collected faults through `console`.
- Host applications can override palette entries via __styles__ and code labels
  via __codes__ in __main__.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declarations (101xx)
      • INVALID_DECLARATION, DUPLICATE_NAME
    - structural, found while matching tokens (111xx)
      • UNRECOGNIZED_SWITCH, TOO_MANY_POSITIONALS
    - semantic, found while extracting values (121xx)
      • MISSING_REQUIRED_ARGUMENT, CONVERSION_FAILURE, ARITY_MISMATCH,
        HEXADECIMAL_LITERAL, NUMERIC_OVERFLOW
    """
    # --- declaration errors (10xxx) ---
    INVALID_DECLARATION         = 10101
    DUPLICATE_NAME              = 10102

    # --- structural faults (11xxx) ---
    UNRECOGNIZED_SWITCH         = 11101
    TOO_MANY_POSITIONALS        = 11102

    # --- semantic faults (12xxx) ---
    MISSING_REQUIRED_ARGUMENT   = 12101
    CONVERSION_FAILURE          = 12111
    ARITY_MISMATCH              = 12112
    HEXADECIMAL_LITERAL         = 12113
    NUMERIC_OVERFLOW            = 12114

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentFault(Exception):
    """
    base of every fault reported by argot.

    class-level metadata
    - __code__:  FaultCode of the fault family.
    - __title__: short lowercased title used in rendered headers.
    - __hint__:  default actionable hint (options["hint"] overrides it).

    instance data
    - message: one-sentence, lowercased description.
    - options: read-only mapping with context (argument, token, index, tokens, ...).
    """
    __code__ = Unset
    __title__ = "argument fault"
    __hint__ = "run with --help to see the expected usage"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint", type(self).__hint__)

    def __str__(self):
        return coalesce(self.message, "")

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = self.options.get("prog", getattr(main, "__prog__", Unset))

        header = Text.assemble(
            "[ ",
            *((text(prog, styler("prog-name")), " — ") if prog else ()),
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        message = overrides.pop("message", self.message)
        return type(self)(message, **{**self.options, **overrides})

    def __eq__(self, other):
        if not isinstance(other, ArgumentFault):
            return NotImplemented
        return (type(self), self.message, self.options.get("argument")) == (
            type(other), other.message, other.options.get("argument")
        )

    def __hash__(self):
        return hash((type(self), self.message, self.options.get("argument")))


# --- declarations (raised while building a parser) ---

class InvalidDeclarationError(ArgumentFault, ValueError):
    __code__ = FaultCode.INVALID_DECLARATION
    __title__ = "invalid declaration"
    __hint__ = "names must be non-empty, must not start with a digit and must not contain whitespace"


class DuplicateNameError(InvalidDeclarationError):
    __code__ = FaultCode.DUPLICATE_NAME
    __title__ = "duplicate name"
    __hint__ = "every positional and switch must have a distinct name"


# --- structural (collected by the matcher) ---

class UnrecognizedSwitchError(ArgumentFault):
    __code__ = FaultCode.UNRECOGNIZED_SWITCH
    __title__ = "unrecognized switch"
    __hint__ = "check the spelling or run with --help to see all available options"


class TooManyPositionalsError(ArgumentFault):
    __code__ = FaultCode.TOO_MANY_POSITIONALS
    __title__ = "too many positionals"
    __hint__ = "remove this extra value or run with --help to see the expected usage"


# --- semantic (raised by the extractor, collected by accessors) ---

class MissingArgumentError(ArgumentFault):
    __code__ = FaultCode.MISSING_REQUIRED_ARGUMENT
    __title__ = "missing argument"
    __hint__ = "this argument has no default and must be given"


class ConversionError(ArgumentFault, ValueError):
    __code__ = FaultCode.CONVERSION_FAILURE
    __title__ = "invalid value"
    __hint__ = "pass a value of the expected type"


class ArityMismatchError(ConversionError):
    __code__ = FaultCode.ARITY_MISMATCH
    __title__ = "wrong number of values"
    __hint__ = "pass exactly the number of values this argument expects"


class HexadecimalLiteralError(ConversionError):
    __code__ = FaultCode.HEXADECIMAL_LITERAL
    __title__ = "hexadecimal literal"
    __hint__ = "write the number in decimal notation"


class NumericOverflowError(ConversionError, OverflowError):
    __code__ = FaultCode.NUMERIC_OVERFLOW
    __title__ = "value out of range"
    __hint__ = "pass a value within the range of the expected type"


def amend(fault, /, **options):
    """
    return a copy of `fault` with `options` merged in (see ArgumentFault.__replace__).
    """
    if not isinstance(fault, ArgumentFault):
        raise TypeError("amend() argument must be an argument fault")
    return copy.replace(fault, **options)


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "InvalidDeclarationError",
    "DuplicateNameError",
    "UnrecognizedSwitchError",
    "TooManyPositionalsError",
    "MissingArgumentError",
    "ConversionError",
    "ArityMismatchError",
    "HexadecimalLiteralError",
    "NumericOverflowError",
    "amend",
)
