"""
Argot usage text.

Usage renders the help of a parser, aligned and word-wrapped (width=40):

    Usage: tool [options] a b

    Arguments:
            a    a required integer
            b    a string

    Options:
            -s   a boolean switch
            -t   a switch taking a string
                 as an extra argument

Layout
- every entry is indented by eight spaces.
- names are padded to the longest declared name (positionals and switches
  alike) plus three spaces, so all descriptions start on the same column.
- descriptions are wrapped greedily at spaces so no line exceeds `width`
  columns; a word longer than the room left is split, an embedded newline
  forces a break (a final one does not), continuation lines start on the
  description column.

str(usage) is plain text; usage.__rich__() yields the same layout styled with
the palette below (override entries with a __styles__ mapping in __main__).
"""
import re
from collections import defaultdict

from rich.text import Text

from .faults import console

INDENT = " " * 8
PADDING = 3


class Usage:
    """
    pure, repeatable rendering of a parser's help.

    parameters
    - parser: the Parser to describe.
    - program: display name; any directory part ('/' or '\\') is dropped.
    - width: maximum column of the text (80 by default in Parser.usage()).
    - colorful: whether __rich__ keeps its styles.
    """

    def __init__(self, parser, program, width=80, *, colorful=True):
        if not isinstance(program, str):
            raise TypeError("usage program name must be a string")
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("usage width must be an integer")
        self._parser = parser
        self._program = re.sub(r".*[/\\]", "", program)
        self._width = width
        self._colorful = colorful

    @property
    def program(self):
        return self._program

    @property
    def width(self):
        return self._width

    def _wrap(self, descr, room):
        # a trailing newline ends the description without opening a line
        wrapped = Text(descr.removesuffix("\n")).wrap(console, max(room, 1))
        for line in wrapped:
            line.rstrip()
        return [line.plain for line in wrapped]

    def _fragments(self):
        """
        yield lines as lists of (fragment, style) pairs.
        """
        positionals = self._parser.positionals
        switches = self._parser.switches

        head = [("Usage: ", "usage-label"), (self._program, "program-name")]
        if switches:
            head.append((" [options]", "options-marker"))
        for argument in positionals:
            head.extend(((" ", ""), (argument.name, "positional-name")))
        yield head

        column = PADDING + max((len(argument.name) for argument in self._parser), default=0)
        room = self._width - column - len(INDENT) - 1

        for label, group, style in (
            ("Arguments:", positionals, "positional-name"),
            ("Options:", switches, "switch-name"),
        ):
            if not group:
                continue
            yield []
            yield [(label, "section-label")]
            for argument in group:
                lines = self._wrap(argument.descr, room) if argument.descr else []
                first = [(INDENT, ""), (argument.name, style)]
                if lines:
                    first.extend((
                        (" " * (column - len(argument.name)), ""),
                        (lines[0], "description"),
                    ))
                yield first
                for line in lines[1:]:
                    yield [(INDENT + " " * column, ""), (line, "description")]

    def __str__(self):
        return "\n".join("".join(fragment for fragment, _ in line) for line in self._fragments())

    def __repr__(self):
        return "usage(program=%r, width=%r)" % (self._program, self._width)

    def __rich__(self):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "options-marker": "#9CA3AF",  # Muted gray
            "section-label": "bold #FFFFFF",  # Pure white headers
            "positional-name": "bold #FFD600",  # AMBER for positionals
            "switch-name": "bold #22C55E",  # GREEN for switches
            "description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful and style else ""

        return Text("\n").join(
            Text.assemble(*((fragment, styler(style)) for fragment, style in line))
            for line in self._fragments()
        )


__all__ = (
    "Usage",
)
