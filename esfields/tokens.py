"""Lex ECMAScript source into a flat token list."""

from __future__ import annotations

import unicodedata
from typing import Callable

from .errors import TokenizeError, error_at

# Token type constants
TK_NAME = "name"
TK_KEYWORD = "keyword"
TK_NUM = "num"
TK_STRING = "string"
TK_PUNCT = "punct"
TK_PRIVATE_NAME = "privateName"
TK_EOF = "eof"

KEYWORDS: set[str] = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
}

RESERVED_WORDS: set[str] = {"enum"}

# Punctuators, sorted by length descending for greedy matching
PUNCTUATORS: list[str] = [
    ">>>=",
    "...",
    "===",
    "!==",
    "**=",
    "<<=",
    ">>=",
    ">>>",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "<<",
    ">>",
    "**",
    "{",
    "}",
    "(",
    ")",
    "[",
    "]",
    ";",
    ",",
    "<",
    ">",
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "!",
    "~",
    "?",
    ":",
    "=",
    ".",
]

LINE_TERMINATORS: set[str] = {"\n", "\r", "\u2028", "\u2029"}

WHITESPACE: set[str] = {" ", "\t", "\v", "\f", "\u00a0", "\ufeff"}

ESCAPE_MAP: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

# A token reader is offered every significant position before the default
# rules. It returns None to decline, or (type, value, end).
TokenReader = Callable[[str, int], "tuple[str, str, int] | None"]


class Token:
    """A token with type, value, and position."""

    def __init__(self, type_: str, value: str, start: int, end: int, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.start: int = start
        self.end: int = end
        self.line: int = line
        self.col: int = col
        self.nl_before: bool = False
        self.escaped: bool = False

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.start)
            + ", "
            + str(self.end)
            + ")"
        )


def is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_hex(c: str) -> bool:
    return (c >= "0" and c <= "9") or (c >= "a" and c <= "f") or (c >= "A" and c <= "F")


def is_id_start(c: str) -> bool:
    if (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "$" or c == "_":
        return True
    if ord(c) < 0x80:
        return False
    return unicodedata.category(c) in ("Lu", "Ll", "Lt", "Lm", "Lo", "Nl")


def is_id_char(c: str) -> bool:
    if is_id_start(c) or is_digit(c):
        return True
    if ord(c) < 0x80:
        return False
    if c == "\u200c" or c == "\u200d":
        return True
    return unicodedata.category(c) in ("Mn", "Mc", "Nd", "Pc")


def _read_hex(source: str, pos: int, count: int) -> tuple[int, int]:
    """Read exactly count hex digits. Returns (value, new_pos)."""
    end = pos + count
    if end > len(source):
        raise error_at(source, TokenizeError, pos, "Bad character escape sequence")
    digits = source[pos:end]
    for d in digits:
        if not _is_hex(d):
            raise error_at(source, TokenizeError, pos, "Bad character escape sequence")
    return int(digits, 16), end


def _read_code_point(source: str, pos: int) -> tuple[str, int]:
    """Read the part of a \\u escape after the 'u'. Returns (char, new_pos)."""
    if pos < len(source) and source[pos] == "{":
        close = source.find("}", pos + 1)
        if close < 0 or close == pos + 1:
            raise error_at(source, TokenizeError, pos, "Bad character escape sequence")
        code, _ = _read_hex(source, pos + 1, close - pos - 1)
        if code > 0x10FFFF:
            raise error_at(source, TokenizeError, pos, "Code point out of bounds")
        return chr(code), close + 1
    code, pos = _read_hex(source, pos, 4)
    return chr(code), pos


def read_word(source: str, pos: int) -> tuple[str, int, bool]:
    """Read a maximal run of identifier characters, decoding \\u escapes.

    Returns (word, end, escaped). The word is empty when the first character
    cannot continue an identifier.
    """
    chars: list[str] = []
    escaped = False
    length = len(source)
    first = True
    while pos < length:
        c = source[pos]
        if c == "\\":
            esc_pos = pos
            if pos + 1 >= length or source[pos + 1] != "u":
                raise error_at(source, TokenizeError, pos, "Expecting Unicode escape sequence \\uXXXX")
            c, pos = _read_code_point(source, pos + 2)
            valid = is_id_start(c) if first else is_id_char(c)
            if not valid:
                raise error_at(source, TokenizeError, esc_pos, "Invalid Unicode escape")
            escaped = True
        elif is_id_char(c):
            pos += 1
        else:
            break
        chars.append(c)
        first = False
    return "".join(chars), pos, escaped


def _read_number(source: str, pos: int) -> int:
    """Scan a numeric literal starting at pos. Returns the end offset."""
    length = len(source)
    start = pos
    if source[pos] == "0" and pos + 1 < length and source[pos + 1] in "xXoObB":
        radix_char = source[pos + 1].lower()
        pos += 2
        digits_start = pos
        while pos < length and _is_hex(source[pos]):
            pos += 1
        digits = source[digits_start:pos]
        if digits == "":
            raise error_at(source, TokenizeError, start, "Expected number in radix")
        allowed = {"x": "0123456789abcdefABCDEF", "o": "01234567", "b": "01"}[radix_char]
        for d in digits:
            if d not in allowed:
                raise error_at(source, TokenizeError, start, "Invalid number")
    else:
        while pos < length and is_digit(source[pos]):
            pos += 1
        if pos < length and source[pos] == ".":
            pos += 1
            while pos < length and is_digit(source[pos]):
                pos += 1
        if pos < length and source[pos] in "eE":
            pos += 1
            if pos < length and source[pos] in "+-":
                pos += 1
            if pos >= length or not is_digit(source[pos]):
                raise error_at(source, TokenizeError, start, "Invalid number")
            while pos < length and is_digit(source[pos]):
                pos += 1
    if pos < length and (is_id_start(source[pos]) or source[pos] == "\\"):
        raise error_at(source, TokenizeError, pos, "Identifier directly after number")
    return pos


def _read_string(source: str, pos: int) -> tuple[str, int]:
    """Scan a quoted string starting at its opening quote. Returns (value, end)."""
    quote = source[pos]
    start = pos
    pos += 1
    length = len(source)
    chars: list[str] = []
    while True:
        if pos >= length:
            raise error_at(source, TokenizeError, start, "Unterminated string constant")
        c = source[pos]
        if c == quote:
            return "".join(chars), pos + 1
        if c == "\n" or c == "\r":
            raise error_at(source, TokenizeError, start, "Unterminated string constant")
        if c != "\\":
            chars.append(c)
            pos += 1
            continue
        pos += 1
        if pos >= length:
            raise error_at(source, TokenizeError, start, "Unterminated string constant")
        e = source[pos]
        if e in ESCAPE_MAP and not (e == "0" and pos + 1 < length and is_digit(source[pos + 1])):
            chars.append(ESCAPE_MAP[e])
            pos += 1
        elif e == "x":
            code, pos = _read_hex(source, pos + 1, 2)
            chars.append(chr(code))
        elif e == "u":
            ch, pos = _read_code_point(source, pos + 1)
            chars.append(ch)
        elif e == "\r":
            pos += 1
            if pos < length and source[pos] == "\n":
                pos += 1
        elif e in LINE_TERMINATORS:
            pos += 1
        elif is_digit(e):
            raise error_at(source, TokenizeError, pos, "Octal escape sequences are not supported")
        else:
            chars.append(e)
            pos += 1


def tokenize(source: str, readers: tuple[TokenReader, ...] = ()) -> list[Token]:
    """Tokenize ECMAScript source into a flat list ending with TK_EOF."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    line_start = 0
    length = len(source)
    nl_before = False

    while pos < length:
        c = source[pos]

        # Line terminators
        if c in LINE_TERMINATORS:
            if c == "\r" and pos + 1 < length and source[pos + 1] == "\n":
                pos += 1
            pos += 1
            line += 1
            line_start = pos
            nl_before = True
            continue

        # Whitespace
        if c in WHITESPACE or (ord(c) > 0x7F and unicodedata.category(c) == "Zs"):
            pos += 1
            continue

        # Line comment
        if c == "/" and pos + 1 < length and source[pos + 1] == "/":
            while pos < length and source[pos] not in LINE_TERMINATORS:
                pos += 1
            continue

        # Block comment
        if c == "/" and pos + 1 < length and source[pos + 1] == "*":
            close = source.find("*/", pos + 2)
            if close < 0:
                raise error_at(source, TokenizeError, pos, "Unterminated comment")
            i = pos + 2
            while i < close:
                ch = source[i]
                if ch in LINE_TERMINATORS:
                    if ch == "\r" and i + 1 < close and source[i + 1] == "\n":
                        i += 1
                    line += 1
                    line_start = i + 1
                    nl_before = True
                i += 1
            pos = close + 2
            continue

        start = pos
        col = pos - line_start
        tok: Token | None = None

        for reader in readers:
            read = reader(source, pos)
            if read is not None:
                type_, value, end = read
                tok = Token(type_, value, start, end, line, col)
                break

        if tok is None:
            if is_id_start(c) or c == "\\":
                word, end, escaped = read_word(source, pos)
                if word == "":
                    raise error_at(source, TokenizeError, pos, "Unexpected character '" + c + "'")
                type_ = TK_KEYWORD if word in KEYWORDS and not escaped else TK_NAME
                tok = Token(type_, word, start, end, line, col)
                tok.escaped = escaped
            elif is_digit(c) or (c == "." and pos + 1 < length and is_digit(source[pos + 1])):
                end = _read_number(source, pos)
                tok = Token(TK_NUM, source[start:end], start, end, line, col)
            elif c == '"' or c == "'":
                value, end = _read_string(source, pos)
                tok = Token(TK_STRING, value, start, end, line, col)
            else:
                for op in PUNCTUATORS:
                    if source.startswith(op, pos):
                        tok = Token(TK_PUNCT, op, start, start + len(op), line, col)
                        break
        if tok is None:
            raise error_at(source, TokenizeError, pos, "Unexpected character '" + c + "'")

        tok.nl_before = nl_before
        nl_before = False
        tokens.append(tok)
        pos = tok.end

    eof = Token(TK_EOF, "", length, length, line, length - line_start)
    eof.nl_before = nl_before
    tokens.append(eof)
    return tokens
