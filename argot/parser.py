"""
Argot parser: declare arguments once, match argument vectors against them.

What this module provides
- Parser: the validated, immutable table of declarations (positionals first,
  then switches) and the matcher that attributes raw tokens to them.
- ParsedResult: one RawSlice per declaration plus a success flag and the list
  of faults found so far.
- Slot: accessor view over one slice; `slot | default` extracts a typed value
  with default fallback, lazily, clearing the success flag on failure.

Quick start
    import numpy
    from argot import Parser, required

    parser = Parser([
        ("a", "a required integer"),
        ("b", "a string"),
        ("-s", "a boolean switch"),
        ("-u", "a switch taking two integers", 2),
    ])

    result = parser.parse()
    a = result["a"] | required(int)
    b = result["b"] | "zebra"
    s = bool(result["-s"])
    u = result["-u"] | numpy.array([0, 0], dtype=numpy.int32)

    if not result.ok:
        result.report()
        print(parser.usage())

Matching rules
- index 0 of the vector is the program name and is skipped.
- a switch-like token (see is_switch) is looked up by exact name; a match
  consumes the switch and its nargs following tokens whatever they look like,
  an unknown switch consumes itself only.
- any other token fills the next unfilled positional, in declaration order.
- unknown switches and excess positionals are recorded and scanning goes on.
- a switch given twice keeps its last occurrence.
"""
import shlex
import sys

from rich.console import Group

from .arguments import Argument, is_switch
from .faults import *
from .faults import console as stderr
from .unwrapping import Required, resolve
from .usage import Usage
from .utils import *


class RawSlice:
    """
    tokens attributed to one declaration by the matcher.

    - name: the declaration's name.
    - tokens: the value tokens (a switch's own name excluded), or Unset when
      the argument did not appear in the input.
    """
    __slots__ = ("name", "tokens")

    def __init__(self, name, tokens=Unset, /):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "tokens", tokens if tokens is Unset else tuple(tokens))

    def __setattr__(self, name, value, /):
        raise AttributeError("raw-slice is read-only")

    def __delattr__(self, name, /):
        raise AttributeError("raw-slice is read-only")

    @property
    def present(self):
        return self.tokens is not Unset

    @property
    def count(self):
        return len(self.tokens) if self.present else 0

    def __eq__(self, other):
        if not isinstance(other, RawSlice):
            return NotImplemented
        return (self.name, self.tokens) == (other.name, other.tokens)

    def __hash__(self):
        return hash((self.name, self.tokens))

    def __repr__(self):
        return "raw-slice(name=%r, tokens=%r)" % (self.name, self.tokens)


class Parser:
    """
    Immutable table of argument declarations and the matcher over it.

    Parameters
    - arguments: Iterable[Argument | tuple]
      declarations, either Argument instances or (name, descr[, nargs]) tuples.

    Raises
    - InvalidDeclarationError: an entry is not a valid declaration.
    - DuplicateNameError: two entries share a name.

    Notes
    - positionals keep their relative declaration order, as do switches; the
      table stores all positionals before all switches.
    - the parser holds no per-parse state, a single instance may serve any
      number of parse() calls.
    """
    __introspectable__ = (
        "arguments",
        "positionals",
        "switches",
    )

    arguments = mirror("arguments")

    def __init__(self, arguments, /):
        positionals = []
        switches = []
        names = set()

        for argument in arguments:
            if not isinstance(argument, Argument):
                if not isinstance(argument, tuple):
                    raise TypeError("parser arguments must be Argument instances or tuples")
                argument = Argument(*argument)
            if argument.name in names:
                raise DuplicateNameError(
                    "argument %r is declared more than once" % argument.name,
                    argument=argument.name,
                )
            names.add(argument.name)
            (switches if argument.switch else positionals).append(argument)

        self._arguments = tuple(positionals + switches)
        self._npositionals = len(positionals)
        self._indices = {argument.name: index for index, argument in enumerate(self._arguments)}

    @property
    def positionals(self):
        return self._arguments[:self._npositionals]

    @property
    def switches(self):
        return self._arguments[self._npositionals:]

    def __len__(self):
        return len(self._arguments)

    def __iter__(self):
        return iter(self._arguments)

    def __contains__(self, name):
        return name in self._indices

    def __getitem__(self, name):
        return self._arguments[self._indices[name]]

    def __repr__(self):
        return "parser(%s)" % ", ".join(repr(argument.name) for argument in self._arguments)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def index(self, name, /):
        """
        position of `name` in the table (and in ParsedResult.slices).
        """
        return self._indices[name]

    def parse(self, argv=Unset, /):
        """
        match an argument vector against the table.

        parameters
        - argv: Sequence[str] | str | Unset
          the full vector, program name first (sys.argv when Unset). a string is
          split with shlex first.

        returns
        - ParsedResult, whose success flag reflects every structural problem of
          the whole vector. value conversion happens later, on access.
        """
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = shlex.split(argv)

        tokens = tuple(argv)[1:]
        result = ParsedResult(self)
        slices = [RawSlice(argument.name) for argument in self._arguments]

        position = 0
        index = 0
        while index < len(tokens):
            token = tokens[index]

            if is_switch(token):
                # positional names are never switch-like, so a hit is always a switch
                if (found := self._indices.get(token)) is None:
                    result._fail(UnrecognizedSwitchError(
                        "unknown switch %r at %s position" % (token, ordinal(index + 1)),
                        token=token,
                        index=index + 1,
                    ))
                    index += 1
                    continue
                arity = self._arguments[found].arity
                # the switch's own token is never part of its values
                slices[found] = RawSlice(self._arguments[found].name, tokens[index + 1:index + arity])
                index += arity
            elif position < self._npositionals:
                slices[position] = RawSlice(self._arguments[position].name, (token,))
                position += 1
                index += 1
            else:
                result._fail(TooManyPositionalsError(
                    "unexpected positional %r at %s position" % (token, ordinal(index + 1)),
                    token=token,
                    index=index + 1,
                ))
                index += 1

        result._slices = tuple(slices)
        return result

    def usage(self, program=Unset, /, width=80, *, colorful=True):
        """
        build the help text for this table (see argot.usage.Usage).

        parameters
        - program: str | Unset
          display name; __main__.__prog__ or sys.argv[0] when Unset.
        - width: int
          maximum column of the rendered text.
        - colorful: bool
          whether the rich rendering keeps its styles.
        """
        if program is Unset:
            program = getattr(__import__("__main__"), "__prog__", sys.argv[0] if sys.argv else "")
        return Usage(self, program, width, colorful=colorful)


class ParsedResult:
    """
    outcome of one Parser.parse() call.

    - ok: success flag. cleared by the matcher for unknown switches and excess
      positionals, and by accessors for missing required arguments and values
      that fail to convert. once cleared it stays cleared.
    - faults: every fault recorded so far, in order, without repetitions.
    - slices: RawSlice per declaration, in the parser's table order.

    results are owned by a single caller; accessors mutate the flag.
    """

    def __init__(self, parser, /):
        self._parser = parser
        self._slices = ()
        self._faults = []
        self._ok = True

    parser = mirror("parser")
    slices = mirror("slices")
    faults = mirror("faults")

    @property
    def ok(self):
        return self._ok

    def _fail(self, fault):
        self._ok = False
        if fault not in self._faults:
            self._faults.append(fault)

    def __getitem__(self, name):
        return Slot(self, self._slices[self._parser.index(name)])

    def __iter__(self):
        for raw in self._slices:
            yield Slot(self, raw)

    def __repr__(self):
        return "parsed-result(ok=%r, slices=%r)" % (self._ok, self._slices)

    def __rich__(self):
        return Group(*self._faults)

    def report(self, console=Unset, /):
        """
        print the recorded faults (stderr console by default).

        the library never calls this itself; embedding programs decide when and
        whether diagnostics are shown.
        """
        console = coalesce(console, stderr)
        for fault in self._faults:
            console.print(fault)


class Slot:
    """
    accessor over one RawSlice of a ParsedResult.

    - bool(slot): whether the argument appeared in the input.
    - slot | default: typed value with fallback; the type comes from default.
    - slot.get(spec, default): the same with an explicit type specification.

    failures (missing required argument, conversion errors) return None and
    clear the result's success flag; a present but malformed value never falls
    back to the default.
    """
    __slots__ = ("_result", "_raw")

    def __init__(self, result, raw, /):
        self._result = result
        self._raw = raw

    @property
    def name(self):
        return self._raw.name

    @property
    def tokens(self):
        return coalesce(self._raw.tokens, ())

    def __bool__(self):
        return self._raw.present

    def __len__(self):
        return self._raw.count

    def __repr__(self):
        return "slot(name=%r, tokens=%r)" % (self._raw.name, self._raw.tokens)

    def get(self, spec, default=Unset, /):
        """
        extract a value of type `spec`.

        parameters
        - spec: any type specification accepted by argot.unwrapping.resolve().
        - default: value returned verbatim when the argument is absent. Unset or
          a Required sentinel makes the argument required.

        returns
        - the extracted value, `default`, or None on failure.

        raises
        - TypeError: `spec` is not a supported type specification.
        """
        unwrapper = resolve(spec)

        if not self._raw.present:
            if default is Unset or isinstance(default, Required):
                self._result._fail(MissingArgumentError(
                    "missing required argument %r" % self._raw.name,
                    argument=self._raw.name,
                ))
                return None
            return default

        try:
            return unwrapper(self._raw.tokens)
        except ConversionError as error:
            self._result._fail(amend(
                error,
                message="argument %r: %s" % (self._raw.name, error.message),
                argument=self._raw.name,
            ))
            return None

    def __or__(self, default):
        if default is None:
            raise TypeError("cannot infer a value type from None; use slot.get(type, None)")
        return self.get(default, default)


__all__ = (
    "Parser",
    "ParsedResult",
    "RawSlice",
    "Slot",
)
