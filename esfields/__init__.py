"""ECMAScript parser with class fields and private names."""

from __future__ import annotations

from .ast import ASTNode
from .class_fields import ClassFields, read_private_name
from .errors import (
    ArgumentsInFieldInitializer,
    DuplicatePrivateElement,
    OptionsError,
    ParseError,
    PrivateDeleteForbidden,
    ReservedConstructorField,
    SuperInFieldInitializer,
    TokenizeError,
    UndeclaredPrivateName,
    UnexpectedToken,
)
from .options import Options
from .parse import Parser
from .tokens import Token
from .tokens import tokenize as _tokenize

__all__ = [
    "ArgumentsInFieldInitializer",
    "ClassFields",
    "DuplicatePrivateElement",
    "OptionsError",
    "Options",
    "ParseError",
    "Parser",
    "PrivateDeleteForbidden",
    "ReservedConstructorField",
    "SuperInFieldInitializer",
    "Token",
    "TokenizeError",
    "UndeclaredPrivateName",
    "UnexpectedToken",
    "parse",
    "tokenize",
]


def parse(source: str, options: Options | dict[str, object] | None = None, **kwargs: object) -> ASTNode:
    """Parse source to an ESTree Program dict.

    Options come from an Options object, a dict, or keyword arguments.
    """
    if options is None:
        options = Options.from_dict(kwargs)
    elif isinstance(options, dict):
        options = Options.from_dict({**options, **kwargs})
    elif kwargs:
        raise OptionsError("pass either an Options object or keyword options, not both")
    extensions = (ClassFields,) if options.class_fields else ()
    return Parser(source, options, extensions).parse_program()


def tokenize(source: str, class_fields: bool = False) -> list[Token]:
    """Tokenize source. class_fields enables '#name' tokens."""
    readers = (read_private_name,) if class_fields else ()
    return _tokenize(source, readers)
