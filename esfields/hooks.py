"""Grammar hook points.

The parser calls these at fixed grammar positions instead of its own
productions. GrammarHooks is the default: every hook defers to the host
grammar. An extension subclasses it, is handed the hooks it wraps as `next`,
and calls through to them for every construct it does not handle itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .ast import ASTNode
from .tokens import TokenReader

if TYPE_CHECKING:
    from .parse import Parser


class GrammarHooks:
    """Default hook implementations backed by the host grammar."""

    def __init__(self, parser: Parser):
        self.parser: Parser = parser

    def token_readers(self) -> tuple[TokenReader, ...]:
        return ()

    def parse_class(self, node: ASTNode, is_statement: bool) -> ASTNode:
        return self.parser.default_parse_class(node, is_statement)

    def parse_class_element(self) -> ASTNode | None:
        """Parse one class body member. None means an empty member (';')."""
        return self.parser.default_parse_class_element()

    def parse_class_method(
        self, method: ASTNode, is_generator: bool, is_async: bool
    ) -> ASTNode:
        """Finish a class member whose modifiers and key have been parsed."""
        return self.parser.default_parse_class_method(method, is_generator, is_async)

    def parse_dot_property(self) -> ASTNode:
        """Parse the property after '.' in a member access."""
        return self.parser.parse_ident(True)

    def after_unary(self, node: ASTNode) -> ASTNode:
        return node

    def after_ident(self, node: ASTNode) -> ASTNode:
        return node

    def after_expr_atom(self, node: ASTNode) -> ASTNode:
        return node


class ExtensionHooks(GrammarHooks):
    """Base for extensions: every hook passes through to the wrapped hooks."""

    def __init__(self, parser: Parser, next_hooks: GrammarHooks):
        super().__init__(parser)
        self.next: GrammarHooks = next_hooks

    def token_readers(self) -> tuple[TokenReader, ...]:
        return self.next.token_readers()

    def parse_class(self, node: ASTNode, is_statement: bool) -> ASTNode:
        return self.next.parse_class(node, is_statement)

    def parse_class_element(self) -> ASTNode | None:
        return self.next.parse_class_element()

    def parse_class_method(
        self, method: ASTNode, is_generator: bool, is_async: bool
    ) -> ASTNode:
        return self.next.parse_class_method(method, is_generator, is_async)

    def parse_dot_property(self) -> ASTNode:
        return self.next.parse_dot_property()

    def after_unary(self, node: ASTNode) -> ASTNode:
        return self.next.after_unary(node)

    def after_ident(self, node: ASTNode) -> ASTNode:
        return self.next.after_ident(node)

    def after_expr_atom(self, node: ASTNode) -> ASTNode:
        return self.next.after_expr_atom(node)
