"""Tests for private name scopes and grammar hook chaining."""

import pytest

from esfields.errors import (
    DuplicatePrivateElement,
    ParseError,
    UndeclaredPrivateName,
    error_at,
)
from esfields.hooks import ExtensionHooks
from esfields.options import Options
from esfields.parse import Parser
from esfields.scope import PrivateNameScope


def _scope(source: str = "x" * 100) -> PrivateNameScope:
    return PrivateNameScope(lambda kind, pos: error_at(source, kind, pos))


def test_declare_then_use():
    scope = _scope()
    with scope.class_scope():
        scope.declare("a", 1)
        scope.record_use("a", 5)
        assert scope.unresolved[-1] == {}
    assert scope.declared == []


def test_use_then_declare():
    scope = _scope()
    with scope.class_scope():
        scope.record_use("a", 5)
        assert scope.unresolved[-1] == {"a": 5}
        scope.declare("a", 9)
        assert scope.unresolved[-1] == {}


def test_earliest_use_kept():
    scope = _scope()
    scope.enter_class()
    scope.record_use("a", 7)
    scope.record_use("a", 30)
    assert scope.unresolved[-1] == {"a": 7}


def test_duplicate_in_same_class():
    scope = _scope()
    scope.enter_class()
    scope.declare("a", 1)
    with pytest.raises(DuplicatePrivateElement) as exc:
        scope.declare("a", 12)
    assert exc.value.pos == 12


def test_inner_class_may_redeclare():
    scope = _scope()
    scope.enter_class()
    scope.declare("a", 1)
    scope.enter_class()
    scope.declare("a", 20)
    scope.record_use("a", 25)
    scope.exit_class()
    scope.exit_class()
    assert scope.declared == []


def test_inner_sees_outer_declaration():
    scope = _scope()
    scope.enter_class()
    scope.declare("a", 1)
    scope.enter_class()
    scope.record_use("a", 25)
    assert scope.unresolved[-1] == {}


def test_unresolved_moves_to_parent():
    scope = _scope()
    scope.enter_class()
    scope.enter_class()
    scope.record_use("b", 40)
    scope.exit_class()
    assert scope.unresolved[-1] == {"b": 40}
    scope.declare("b", 60)
    scope.exit_class()


def test_parent_keeps_earlier_use():
    scope = _scope()
    scope.enter_class()
    scope.record_use("b", 10)
    scope.enter_class()
    scope.record_use("b", 40)
    scope.exit_class()
    assert scope.unresolved[-1] == {"b": 10}


def test_inner_declaration_resolves_only_inner_uses():
    scope = _scope()
    scope.enter_class()
    scope.enter_class()
    scope.record_use("c", 15)
    scope.declare("c", 18)
    scope.exit_class()
    assert scope.unresolved[-1] == {}


def test_outermost_reports_earliest():
    scope = _scope()
    scope.enter_class()
    scope.record_use("z", 50)
    scope.record_use("y", 12)
    with pytest.raises(UndeclaredPrivateName) as exc:
        scope.exit_class()
    assert exc.value.pos == 12
    assert scope.declared == []


def test_use_outside_class():
    scope = _scope()
    with pytest.raises(UndeclaredPrivateName) as exc:
        scope.record_use("a", 3)
    assert exc.value.pos == 3


def test_class_scope_discards_on_error():
    scope = _scope()
    with pytest.raises(ParseError):
        with scope.class_scope():
            scope.record_use("q", 4)
            scope.declare("w", 5)
            scope.declare("w", 6)
    assert scope.declared == []
    assert scope.unresolved == []


def test_exit_innermost_keeps_outer_frames():
    scope = _scope()
    scope.enter_class()
    scope.enter_class()
    scope.exit_class()
    assert len(scope.declared) == 1
    assert len(scope.unresolved) == 1


class PrefixIdentifiers(ExtensionHooks):
    """Test extension: prefixes every identifier name."""

    def after_ident(self, node):
        node = self.next.after_ident(node)
        node["name"] = "_" + node["name"]
        return node


class CountAtoms(ExtensionHooks):
    def __init__(self, parser, next_hooks):
        super().__init__(parser, next_hooks)
        self.count = 0

    def after_expr_atom(self, node):
        self.count += 1
        return self.next.after_expr_atom(node)


def test_extension_chain_wraps_defaults():
    parser = Parser("a + b", Options(), (PrefixIdentifiers, CountAtoms))
    program = parser.parse_program()
    expr = program["body"][0]["expression"]
    assert expr["left"]["name"] == "_a"
    assert expr["right"]["name"] == "_b"
    assert isinstance(parser.hooks, CountAtoms)
    assert isinstance(parser.hooks.next, PrefixIdentifiers)
    assert parser.hooks.count == 2


class UpperProperties(ExtensionHooks):
    def parse_dot_property(self):
        node = self.next.parse_dot_property()
        node["name"] = node["name"].upper()
        return node


def test_dot_property_hook():
    program = Parser("a.b.c", Options(), (UpperProperties,)).parse_program()
    expr = program["body"][0]["expression"]
    assert expr["property"]["name"] == "C"
    assert expr["object"]["property"]["name"] == "B"
    assert expr["object"]["object"]["name"] == "a"


def test_default_hooks_parse_classes():
    program = Parser("class A { m() {} }").parse_program()
    assert program["body"][0]["body"]["body"][0]["type"] == "MethodDefinition"
