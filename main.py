import numpy
from rich.console import Console
from rich.pretty import pprint

from argot import *

__prog__ = "argot-demo"

parser = Parser([
    ("a", "a required integer"),
    ("b", "a string"),
    ("-s", "a boolean switch"),
    ("-t", "a switch taking a string as an extra argument", 1),
    ("-u", "a switch taking two integers", 2),
    ("-w", "a switch taking a name, a count and a ratio", 3),
])


if __name__ == '__main__':
    result = parser.parse()

    values = {
        "a": result["a"] | required(int),
        "b": result["b"] | "zebra",
        "-s": bool(result["-s"]),
        "-t": result["-t"] | "default",
        "-u": result["-u"] | numpy.array([0, 0], dtype=numpy.int32),
        "-w": result["-w"] | ("gasket", 4, 1.3),
    }

    if not result.ok:
        result.report()
        Console(stderr=True).print(parser.usage())
        raise SystemExit(2)

    pprint(values)
