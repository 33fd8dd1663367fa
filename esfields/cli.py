"""esfields CLI — parse a file and print its ESTree as JSON."""

from __future__ import annotations

import json
import sys

from . import parse
from .errors import OptionsError, ParseError
from .options import Options


USAGE: str = """\
esfields [OPTIONS] [FILE]

Parse ECMAScript source and print the ESTree as JSON.
Reads from stdin when FILE is omitted.

Options:
  --class-fields            Enable class fields and private names
  --ecma-version N          ECMAScript edition or year (default 9)
  --module                  Parse as a module
  --allow-reserved VALUE    true, false or never
  --help                    Show this help message
"""

ALLOW_RESERVED_VALUES: dict[str, bool | str] = {
    "true": True,
    "false": False,
    "never": "never",
}


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    filepath: str = ""
    class_fields = False
    ecma_version = 9
    source_type = "script"
    allow_reserved: bool | str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--class-fields":
            class_fields = True
            i += 1
        elif arg == "--module":
            source_type = "module"
            i += 1
        elif arg == "--ecma-version":
            if i + 1 >= len(args):
                print("esfields: --ecma-version requires a value", file=sys.stderr)
                return 2
            value = args[i + 1]
            if not value.isdigit():
                print("esfields: invalid --ecma-version '" + value + "'", file=sys.stderr)
                return 2
            ecma_version = int(value)
            i += 2
        elif arg == "--allow-reserved":
            if i + 1 >= len(args):
                print("esfields: --allow-reserved requires a value", file=sys.stderr)
                return 2
            value = args[i + 1]
            if value not in ALLOW_RESERVED_VALUES:
                print("esfields: invalid --allow-reserved '" + value + "'", file=sys.stderr)
                return 2
            allow_reserved = ALLOW_RESERVED_VALUES[value]
            i += 2
        elif arg.startswith("-"):
            print("esfields: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif filepath == "":
            filepath = arg
            i += 1
        else:
            print("esfields: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2

    try:
        options = Options(
            ecma_version=ecma_version,
            class_fields=class_fields,
            source_type=source_type,
            allow_reserved=allow_reserved,
        )
    except OptionsError as e:
        print("esfields: " + str(e), file=sys.stderr)
        return 2

    name = filepath if filepath != "" else "<stdin>"
    try:
        if filepath == "":
            raw = sys.stdin.buffer.read()
        else:
            with open(filepath, "rb") as f:
                raw = f.read()
    except FileNotFoundError:
        print("esfields: " + name + ": No such file or directory", file=sys.stderr)
        return 1
    except OSError as e:
        print("esfields: " + name + ": " + str(e), file=sys.stderr)
        return 1
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("esfields: " + name + ": invalid utf-8", file=sys.stderr)
        return 1

    try:
        program = parse(source, options)
    except ParseError as e:
        print("esfields: " + name + ": parse error: " + str(e), file=sys.stderr)
        return 1

    print(json.dumps(program, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
