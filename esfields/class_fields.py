"""Class fields and private names.

Adds instance field declarations (`x = 1`, `[k] = 2`, `#p = 3`) to class
bodies, `#name` tokens, `obj.#name` member access, and the early errors that
go with them: undeclared or duplicate private names, `#constructor`,
`delete obj.#p`, and `arguments`/`super` inside field initializers.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .ast import ASTNode, is_type, make_node
from .errors import (
    ArgumentsInFieldInitializer,
    ParseError,
    PrivateDeleteForbidden,
    ReservedConstructorField,
    SuperInFieldInitializer,
)
from .hooks import ExtensionHooks, GrammarHooks
from .options import FIELDS_VERSION
from .scope import PrivateNameScope
from .tokens import TK_PRIVATE_NAME, TK_PUNCT, TokenReader, is_id_start, read_word

SIGIL = "#"


def read_private_name(source: str, pos: int) -> tuple[str, str, int] | None:
    """Token reader for '#name'. The name excludes the sigil and may be empty."""
    if source[pos] != SIGIL:
        return None
    start = pos + 1
    if start < len(source) and (is_id_start(source[start]) or source[start] == "\\"):
        name, end, _ = read_word(source, start)
        return TK_PRIVATE_NAME, name, end
    return TK_PRIVATE_NAME, "", start


class ClassFields(ExtensionHooks):
    """Grammar hooks for class fields and private names."""

    def __init__(self, parser, next_hooks: GrammarHooks):
        super().__init__(parser, next_hooks)
        self.scope: PrivateNameScope = PrivateNameScope(self._error)
        self.in_field_value: bool = False

    def _error(self, kind: type[ParseError], pos: int) -> ParseError:
        return self.parser.error_at(kind, pos)

    def token_readers(self) -> tuple[TokenReader, ...]:
        return (read_private_name,) + self.next.token_readers()

    # ── Field initializers ───────────────────────────────────

    @contextmanager
    def field_value(self) -> Iterator[None]:
        saved = self.in_field_value
        self.in_field_value = True
        try:
            yield
        finally:
            self.in_field_value = saved

    def maybe_parse_value(self, field: ASTNode) -> None:
        p = self.parser
        if p.eat("="):
            with self.field_value():
                field["value"] = p.parse_expression()
        else:
            field["value"] = None

    def finish_field(self, field: ASTNode) -> ASTNode:
        self.parser.finish_node(field, "FieldDefinition")
        self.parser.semicolon()
        return field

    # ── Private names ────────────────────────────────────────

    def parse_private_name(self) -> ASTNode:
        p = self.parser
        tok = p.current()
        if tok.value == "":
            p.advance()
            raise p.unexpected()
        node = make_node("PrivateName", tok.start, {"name": tok.value})
        p.advance()
        p.finish_node(node, "PrivateName")
        if p.options.allow_reserved == "never":
            p.check_unreserved(node)
        return node

    # ── Hooks ────────────────────────────────────────────────

    def parse_class(self, node: ASTNode, is_statement: bool) -> ASTNode:
        with self.scope.class_scope():
            return self.next.parse_class(node, is_statement)

    def parse_class_element(self) -> ASTNode | None:
        p = self.parser
        if p.eat(";"):
            return None
        if p.options.ecma_version < FIELDS_VERSION:
            return self.next.parse_class_element()
        if not p.at_type(TK_PRIVATE_NAME):
            # default_parse_class_element treats `async` as a modifier unless
            # it is followed by "(", so `async = 1` needs a lookahead here.
            nxt = p.peek(1)
            if p.is_contextual("async") and nxt.type == TK_PUNCT and nxt.value in (";", "=", "}"):
                node = p.start_node()
                node["key"] = p.parse_ident(True)
                node["computed"] = False
                self.maybe_parse_value(node)
                return self.finish_field(node)
            return self.next.parse_class_element()
        node = p.start_node()
        node["key"] = self.parse_private_name()
        node["computed"] = False
        key = node["key"]
        if key["name"] == "constructor":
            raise p.error_at(ReservedConstructorField, node["start"])
        self.scope.declare(key["name"], node["start"])
        self.maybe_parse_value(node)
        return self.finish_field(node)

    def parse_class_method(
        self, method: ASTNode, is_generator: bool, is_async: bool
    ) -> ASTNode:
        p = self.parser
        if (
            is_generator
            or is_async
            or method["kind"] != "method"
            or method["static"]
            or p.options.ecma_version < FIELDS_VERSION
            or p.at("(")
        ):
            return self.next.parse_class_method(method, is_generator, is_async)
        self.maybe_parse_value(method)
        del method["kind"]
        del method["static"]
        return self.finish_field(method)

    def parse_dot_property(self) -> ASTNode:
        if not self.parser.at_type(TK_PRIVATE_NAME):
            return self.next.parse_dot_property()
        prop = self.parse_private_name()
        self.scope.record_use(prop["name"], prop["start"])
        return prop

    def after_unary(self, node: ASTNode) -> ASTNode:
        node = self.next.after_unary(node)
        if is_type(node, ["UnaryExpression"]) and node["operator"] == "delete":
            argument = node["argument"]
            if is_type(argument, ["MemberExpression"]) and is_type(
                argument["property"], ["PrivateName"]
            ):
                raise self.parser.error_at(PrivateDeleteForbidden, node["start"])
        return node

    def after_ident(self, node: ASTNode) -> ASTNode:
        node = self.next.after_ident(node)
        if self.in_field_value and node["name"] == "arguments":
            raise self.parser.error_at(ArgumentsInFieldInitializer, node["start"])
        return node

    def after_expr_atom(self, node: ASTNode) -> ASTNode:
        node = self.next.after_expr_atom(node)
        if self.in_field_value and is_type(node, ["Super"]):
            raise self.parser.error_at(SuperInFieldInitializer, node["start"])
        return node
