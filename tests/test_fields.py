import pytest

from formbuilder.columns import ColumnMetadata, KeyRole
from formbuilder.exceptions import MalformedEnumLiteral, UnsupportedColumnType
from formbuilder.fields import (
    DEFAULT_MAX_LENGTH,
    JSON_PLACEHOLDER_HINT,
    FieldDescriptorBuilder,
    humanize,
    pretty,
)
from formbuilder.types import WidgetKind


def build(column, **kwargs):
    return FieldDescriptorBuilder.from_column(column, **kwargs).build()


def test_humanize_and_pretty():
    assert humanize("first_name") == "First name"
    assert pretty("first_name") == "First Name"


def test_builder_is_immutable():
    base = FieldDescriptorBuilder().name("title").widget(WidgetKind.TEXT)
    required = base.required()
    assert base.build().required is False
    assert required.build().required is True


def test_builder_requires_name_and_widget():
    with pytest.raises(ValueError):
        FieldDescriptorBuilder().widget(WidgetKind.TEXT).build()
    with pytest.raises(ValueError):
        FieldDescriptorBuilder().name("title").build()


def test_nullable_column_is_optional():
    field = build(ColumnMetadata("nickname", "varchar(30)", nullable=True))
    assert field.required is False


def test_not_null_column_is_required():
    field = build(ColumnMetadata("nickname", "varchar(30)", nullable=False))
    assert field.required is True


def test_optional_keys_policy():
    column = ColumnMetadata("email", "varchar(255)", nullable=False, key_role=KeyRole.UNIQUE)
    assert build(column).required is True
    assert build(column, optional_keys=True).required is False


def test_placeholder_label_and_length():
    field = build(ColumnMetadata("first_name", "varchar(64)"))
    assert field.widget_kind == WidgetKind.TEXT
    assert field.placeholder == "First name"
    assert field.label == "First Name"
    assert field.max_length == 64


def test_labels_disabled():
    field = build(ColumnMetadata("bio", "text"), render_labels=False)
    assert field.label is None
    assert field.max_length == DEFAULT_MAX_LENGTH


def test_json_column_accepts_multiple_values():
    field = build(ColumnMetadata("tech_stack", "json"))
    assert field.widget_kind == WidgetKind.TEXT
    assert field.is_json_encoded is True
    assert field.accepts_multiple is True
    assert field.placeholder == f"Tech Stack: {JSON_PLACEHOLDER_HINT}"


def test_json_rule_takes_precedence_over_password_rule():
    field = build(ColumnMetadata("password_history", "json"))
    assert field.widget_kind == WidgetKind.TEXT
    assert field.is_json_encoded is True


def test_enum_options_and_default():
    field = build(ColumnMetadata("size", "enum('s','m','l')", default_value="m"))
    assert field.widget_kind == WidgetKind.DROPDOWN
    assert field.options == ("s", "m", "l")
    assert field.default_value == "m"


def test_boolean_radio_defaults_to_zero_one():
    field = build(ColumnMetadata("active", "tinyint(1)"))
    assert field.widget_kind == WidgetKind.RADIO
    assert field.options == ("0", "1")


def test_widget_override():
    field = build(ColumnMetadata("born_on", "date"), widget_override=WidgetKind.DATE)
    assert field.widget_kind == WidgetKind.DATE


def test_construction_errors_propagate():
    with pytest.raises(UnsupportedColumnType):
        build(ColumnMetadata("born_on", "date"))
    with pytest.raises(MalformedEnumLiteral):
        build(ColumnMetadata("size", "enum"))
