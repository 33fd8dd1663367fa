"""Parse errors. Every failure is fatal and carries a source offset."""

from __future__ import annotations


class ParseError(Exception):
    """Parse error with location info. line is 1-based, col is 0-based."""

    message: str = ""

    def __init__(self, msg: str, pos: int, line: int, col: int):
        self.msg: str = msg
        self.pos: int = pos
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class TokenizeError(ParseError):
    """Error during tokenization."""


class UnexpectedToken(ParseError):
    message = "Unexpected token"


class DuplicatePrivateElement(ParseError):
    message = "Duplicate private element"


class UndeclaredPrivateName(ParseError):
    message = "Usage of undeclared private name"


class ReservedConstructorField(ParseError):
    message = "Classes may not have a field named constructor"


class PrivateDeleteForbidden(ParseError):
    message = "Private elements may not be deleted"


class ArgumentsInFieldInitializer(ParseError):
    message = "A class field initializer may not contain arguments"


class SuperInFieldInitializer(ParseError):
    message = "A class field initializer may not contain super"


class OptionsError(ValueError):
    """Invalid parser option."""


def line_col(source: str, pos: int) -> tuple[int, int]:
    """Translate an offset into (line, col). Line terminators follow ECMAScript."""
    line = 1
    line_start = 0
    i = 0
    while i < pos and i < len(source):
        c = source[i]
        if c == "\n" or c == "\u2028" or c == "\u2029":
            line += 1
            line_start = i + 1
        elif c == "\r":
            if i + 1 < len(source) and source[i + 1] == "\n":
                i += 1
            line += 1
            line_start = i + 1
        i += 1
    return line, pos - line_start


def error_at(source: str, kind: type[ParseError], pos: int, msg: str = "") -> ParseError:
    """Build an error of the given kind at an offset of source."""
    line, col = line_col(source, pos)
    return kind(msg or kind.message, pos, line, col)
