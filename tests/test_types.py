import pytest

from formbuilder.exceptions import MalformedEnumLiteral, UnsupportedColumnType
from formbuilder.types import (
    WidgetKind,
    base_type,
    coerce_value,
    declared_length,
    option_values,
    parse_enum_values,
    resolve,
)


@pytest.mark.parametrize("raw_type,expected", [
    ("int", WidgetKind.NUMBER),
    ("int(11)", WidgetKind.NUMBER),
    ("smallint", WidgetKind.NUMBER),
    ("mediumint", WidgetKind.NUMBER),
    ("BIGINT(20)", WidgetKind.NUMBER),
    ("varchar(255)", WidgetKind.TEXT),
    ("json", WidgetKind.TEXT),
    ("text", WidgetKind.TEXT_AREA),
    ("longtext", WidgetKind.TEXT_AREA),
    ("boolean", WidgetKind.RADIO),
    ("bool", WidgetKind.RADIO),
    ("tinyint(1)", WidgetKind.RADIO),
])
def test_resolve_dispatches_on_base_type(raw_type, expected):
    assert resolve(raw_type, "column", 0) == expected


@pytest.mark.parametrize("raw_type", ["date", "datetime", "timestamp", "decimal(10,2)", "blob", "set('a','b')"])
def test_resolve_rejects_unsupported_types(raw_type):
    with pytest.raises(UnsupportedColumnType):
        resolve(raw_type, "column", 0)


def test_password_name_overrides_type():
    assert resolve("varchar(255)", "user_password", 0) == WidgetKind.PASSWORD
    assert resolve("text", "PasswordHint", 0) == WidgetKind.PASSWORD


def test_enum_cardinality_picks_radio_or_dropdown():
    assert resolve("enum('a','b')", "choice", 2) == WidgetKind.RADIO
    assert resolve("enum('a','b','c')", "choice", 3) == WidgetKind.DROPDOWN


def test_two_valued_enum_wins_over_password_rule():
    assert resolve("enum('a','b')", "password_reset", 2) == WidgetKind.RADIO


def test_base_type_strips_value_list_and_case():
    assert base_type("ENUM('a','b')") == "enum"
    assert base_type("varchar(10)") == "varchar"
    assert base_type("int(10) unsigned") == "int"
    assert base_type("int unsigned") == "int"


def test_parse_enum_values_preserves_order_and_strips_quotes():
    assert parse_enum_values("enum('a','b','c')") == ["a", "b", "c"]
    assert parse_enum_values("enum('small','medium','large')") == ["small", "medium", "large"]


def test_parse_enum_values_requires_value_list():
    with pytest.raises(MalformedEnumLiteral):
        parse_enum_values("enum")
    with pytest.raises(MalformedEnumLiteral):
        parse_enum_values("enum()")


def test_option_values():
    assert option_values("enum('x','y')") == ["x", "y"]
    assert option_values("tinyint(1)") == ["0", "1"]
    assert option_values("boolean") == ["0", "1"]
    assert option_values("varchar(20)") == []


def test_declared_length():
    assert declared_length("varchar(64)") == 64
    assert declared_length("VARCHAR (32)") == 32
    assert declared_length("text") is None


def test_coerce_value():
    assert coerce_value("42", "int(11)") == 42
    assert coerce_value("", "int") is None
    assert coerce_value("true", "tinyint(1)") == 1
    assert coerce_value("0", "boolean") == 0
    assert coerce_value("b", "enum('a','b')") == "b"
    assert coerce_value(None, "varchar(5)") is None
    with pytest.raises(ValueError):
        coerce_value("z", "enum('a','b')")
    with pytest.raises(ValueError):
        coerce_value("maybe", "bool")
