"""Parser option tests."""

import pytest

from esfields import Options, OptionsError, parse


def test_defaults():
    options = Options()
    assert options.ecma_version == 9
    assert options.class_fields is False
    assert options.source_type == "script"
    assert options.allow_reserved is False


def test_year_normalized():
    assert Options(ecma_version=2015).ecma_version == 6
    assert Options(ecma_version=2021).ecma_version == 12


def test_es3_allows_reserved():
    assert Options(ecma_version=3).allow_reserved is True


def test_allow_reserved_never():
    assert Options(allow_reserved="never").allow_reserved == "never"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ecma_version": 4},
        {"ecma_version": "9"},
        {"ecma_version": True},
        {"source_type": "commonjs"},
        {"allow_reserved": "sometimes"},
        {"class_fields": 1},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(OptionsError):
        Options(**kwargs)


def test_from_dict_rejects_unknown():
    with pytest.raises(OptionsError) as exc:
        Options.from_dict({"ranges": True})
    assert str(exc.value) == "unknown option: ranges"


def test_parse_keyword_options():
    program = parse("a", source_type="module")
    assert program["sourceType"] == "module"


def test_parse_dict_options():
    program = parse("class A { x }", {"class_fields": True})
    assert program["body"][0]["body"]["body"][0]["type"] == "FieldDefinition"


def test_parse_rejects_object_and_keywords():
    with pytest.raises(OptionsError):
        parse("a", Options(), class_fields=True)


def test_options_error_is_value_error():
    with pytest.raises(ValueError):
        parse("a", ecma_version=42)
