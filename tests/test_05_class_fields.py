"""Class field and private name tests against exact trees and error kinds."""

import pytest

from esfields import (
    ArgumentsInFieldInitializer,
    DuplicatePrivateElement,
    Options,
    ParseError,
    PrivateDeleteForbidden,
    ReservedConstructorField,
    SuperInFieldInitializer,
    UndeclaredPrivateName,
    UnexpectedToken,
    parse,
)
from esfields.ast import dict_walk


def _parse(source: str, **kwargs) -> dict:
    return parse(source, class_fields=True, **kwargs)


def _first(source: str) -> dict:
    return _parse(source)["body"][0]


def _ident(name: str, start: int) -> dict:
    return {"type": "Identifier", "start": start, "end": start + len(name), "name": name}


def _literal(value: int, start: int) -> dict:
    return {"type": "Literal", "start": start, "end": start + 1, "value": value, "raw": str(value)}


def _class(members: list[dict], end: int) -> dict:
    return {
        "type": "ClassDeclaration",
        "start": 0,
        "end": end,
        "id": _ident("A", 6),
        "superClass": None,
        "body": {"type": "ClassBody", "start": 8, "end": end, "body": members},
    }


def _method_a(start: int) -> dict:
    return {
        "type": "MethodDefinition",
        "start": start,
        "end": start + 6,
        "kind": "method",
        "static": False,
        "computed": False,
        "key": _ident("a", start),
        "value": {
            "type": "FunctionExpression",
            "start": start + 1,
            "end": start + 6,
            "id": None,
            "expression": False,
            "generator": False,
            "async": False,
            "params": [],
            "body": {"type": "BlockStatement", "start": start + 4, "end": start + 6, "body": []},
        },
    }


# (member source, expected FieldDefinition for a member starting at offset 10)
FIELDS = [
    (
        "x",
        {"type": "FieldDefinition", "start": 10, "end": 11, "computed": False,
         "key": _ident("x", 10), "value": None},
    ),
    (
        "x = 0",
        {"type": "FieldDefinition", "start": 10, "end": 15, "computed": False,
         "key": _ident("x", 10), "value": _literal(0, 14)},
    ),
    (
        "[x]",
        {"type": "FieldDefinition", "start": 10, "end": 13, "computed": True,
         "key": _ident("x", 11), "value": None},
    ),
    (
        "[x] = 0",
        {"type": "FieldDefinition", "start": 10, "end": 17, "computed": True,
         "key": _ident("x", 11), "value": _literal(0, 16)},
    ),
    (
        "#x",
        {"type": "FieldDefinition", "start": 10, "end": 12, "computed": False,
         "key": {"type": "PrivateName", "start": 10, "end": 12, "name": "x"}, "value": None},
    ),
    (
        "#x = 0",
        {"type": "FieldDefinition", "start": 10, "end": 16, "computed": False,
         "key": {"type": "PrivateName", "start": 10, "end": 12, "name": "x"},
         "value": _literal(0, 15)},
    ),
    (
        "async",
        {"type": "FieldDefinition", "start": 10, "end": 15, "computed": False,
         "key": _ident("async", 10), "value": None},
    ),
    (
        "async = 5",
        {"type": "FieldDefinition", "start": 10, "end": 19, "computed": False,
         "key": _ident("async", 10), "value": _literal(5, 18)},
    ),
]


def _expected_alone(field: dict) -> dict:
    return _class([field], field["end"] + 2)


def _expected_semicolon(field: dict) -> dict:
    return _class([field], field["end"] + 3)


def _expected_private_after(field: dict) -> dict:
    end = field["end"]
    y = {
        "type": "FieldDefinition",
        "start": end + 2,
        "end": end + 4,
        "computed": False,
        "key": {"type": "PrivateName", "start": end + 2, "end": end + 4, "name": "y"},
        "value": None,
    }
    return _class([field, y], end + 6)


def _expected_method_after(field: dict) -> dict:
    return _class([field, _method_a(field["end"] + 1)], field["end"] + 9)


# (template, expected builder)
CONTEXTS = [
    ("class A { %s }", _expected_alone),
    ("class A { %s; }", _expected_semicolon),
    ("class A { %s; #y }", _expected_private_after),
    ("class A { %s;a() {} }", _expected_method_after),
    ("class A { %s\na() {} }", _expected_method_after),
]


@pytest.mark.parametrize("template,build", CONTEXTS, ids=[c[0] for c in CONTEXTS])
@pytest.mark.parametrize("member,field", FIELDS, ids=[f[0] for f in FIELDS])
def test_field_tree(member: str, field: dict, template: str, build) -> None:
    source = template.replace("%s", member)
    assert _first(source) == build(field)


ERRORS = [
    ("class A { #a; f() { delete this.#a } }", PrivateDeleteForbidden, 20),
    ("class A { #a; #a }", DuplicatePrivateElement, 14),
    ("class A { a = this.#a }", UndeclaredPrivateName, 19),
    ("class A { a = this.#a; b = this.#b }", UndeclaredPrivateName, 19),
    ("class A { constructor = 4 }", UnexpectedToken, 22),
    ("class A { #constructor = 4 }", ReservedConstructorField, 10),
    ("class A { a = () => arguments }", ArgumentsInFieldInitializer, 20),
    ("class A { a = () => super() }", SuperInFieldInitializer, 20),
    ("class A { # a }", UnexpectedToken, 12),
    ("class A { #a; a() { this.# a } }", UnexpectedToken, 27),
    ("class C { \\u0061sync m(){} };", UnexpectedToken, 21),
]


@pytest.mark.parametrize("source,kind,col", ERRORS, ids=[e[0] for e in ERRORS])
def test_error_kind_and_position(source: str, kind: type, col: int) -> None:
    with pytest.raises(kind) as exc:
        _parse(source)
    assert exc.value.line == 1
    assert exc.value.col == col
    assert exc.value.pos == col
    assert str(exc.value) == kind.message + " at line 1 col " + str(col)


def test_error_messages_are_fixed() -> None:
    assert PrivateDeleteForbidden.message == "Private elements may not be deleted"
    assert DuplicatePrivateElement.message == "Duplicate private element"
    assert UndeclaredPrivateName.message == "Usage of undeclared private name"
    assert ReservedConstructorField.message == "Classes may not have a field named constructor"
    assert ArgumentsInFieldInitializer.message == (
        "A class field initializer may not contain arguments"
    )
    assert SuperInFieldInitializer.message == "A class field initializer may not contain super"
    assert UnexpectedToken.message == "Unexpected token"


def test_errors_are_parse_errors() -> None:
    with pytest.raises(ParseError):
        _parse("class A { #a; #a }")


def test_earliest_undeclared_name_is_reported() -> None:
    source = "class A { m() { this.#b } n() { this.#a; this.#b } }"
    with pytest.raises(UndeclaredPrivateName) as exc:
        _parse(source)
    assert exc.value.pos == source.index("#b")


def test_undeclared_name_reported_after_nested_class() -> None:
    source = "class A {\n  m() {\n    class B { x = this.#z }\n  }\n}"
    with pytest.raises(UndeclaredPrivateName) as exc:
        _parse(source)
    assert exc.value.pos == source.index("#z")
    assert exc.value.line == 3
    assert exc.value.col == 23


def test_forward_reference_in_same_class() -> None:
    program = _parse("class A { m() { return this.#later } #later = 1 }")
    members = program["body"][0]["body"]["body"]
    assert members[1]["key"] == {"type": "PrivateName", "start": 37, "end": 43, "name": "later"}


def test_private_member_expression_shape() -> None:
    program = _parse("class A { #a; m() { this.#a } }")
    stmt = program["body"][0]["body"]["body"][1]["value"]["body"]["body"][0]
    assert stmt["expression"] == {
        "type": "MemberExpression",
        "start": 20,
        "end": 27,
        "object": {"type": "ThisExpression", "start": 20, "end": 24},
        "property": {"type": "PrivateName", "start": 25, "end": 27, "name": "a"},
        "computed": False,
    }


def test_repeated_parses_are_identical() -> None:
    source = "class A { #a = 1; b = this.#a; m() { return class { #a; n() { this.#a } } } }"
    assert _parse(source) == _parse(source)


def test_failed_parse_does_not_affect_next() -> None:
    with pytest.raises(UndeclaredPrivateName):
        _parse("class A { m() { class B { n() { this.#x } } } }")
    program = _parse("class A { #x; m() { this.#x } }")
    assert program["body"][0]["body"]["body"][0]["key"]["name"] == "x"


def test_initializer_flag_restored_after_error_free_field() -> None:
    program = _parse("class A { a = 1; m() { return arguments[0] } }")
    method = program["body"][0]["body"]["body"][1]
    assert method["kind"] == "method"


def test_initializer_flag_restored_after_nested_class_field() -> None:
    source = "class A { a = class { b = 1 }; m() { return arguments } }"
    program = _parse(source)
    assert len(program["body"][0]["body"]["body"]) == 2


def test_options_object() -> None:
    program = parse("class A { x }", Options(class_fields=True, ecma_version=2017))
    assert program["body"][0]["body"]["body"][0]["type"] == "FieldDefinition"


def test_disabled_below_es2017() -> None:
    with pytest.raises(UnexpectedToken) as exc:
        _parse("class A { x = 1 }", ecma_version=7)
    assert exc.value.col == 12


@pytest.mark.parametrize("source", ["class A { async = 1 }", "class A { async }"])
def test_async_field_disabled_below_es2017(source: str) -> None:
    with pytest.raises(UnexpectedToken) as exc:
        _parse(source, ecma_version=7)
    assert str(exc.value).startswith("Unexpected token")
    with pytest.raises(UnexpectedToken):
        parse(source, ecma_version=7)


def test_hash_rejected_without_extension() -> None:
    with pytest.raises(ParseError) as exc:
        parse("class A { #x }")
    assert exc.value.msg == "Unexpected character '#'"


def test_every_node_is_finished() -> None:
    source = (
        "class Counter extends HTMLElement {\n"
        "  #x = 0;\n"
        "  label = 'n'.length;\n"
        "}\n"
    )
    nodes = dict_walk(_parse(source))
    types = [node["type"] for node in nodes]
    assert "" not in types
    assert types.count("FieldDefinition") == 2
    for node in nodes:
        assert node["start"] <= node["end"]
