from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .columns import ColumnMetadata
from .types import JSON_TYPE, WidgetKind, base_type, declared_length, option_values, resolve

DEFAULT_MAX_LENGTH = 255
JSON_PLACEHOLDER_HINT = "Separate using commas E.g One,two,three"


def humanize(name: str) -> str:
    """first_name -> First name"""
    text = name.replace("_", " ")
    return text[:1].upper() + text[1:]


def pretty(text: str) -> str:
    """first_name -> First Name"""
    return " ".join(word[:1].upper() + word[1:] for word in text.replace("_", " ").split(" "))


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    widget_kind: WidgetKind
    label: Optional[str] = None
    placeholder: str = ""
    options: Tuple[str, ...] = ()
    default_value: Optional[str] = None
    max_length: int = DEFAULT_MAX_LENGTH
    required: bool = False
    accepts_multiple: bool = False
    is_json_encoded: bool = False


@dataclass(frozen=True)
class FieldDescriptorBuilder:
    """Accumulates input configuration; every setter returns a new builder.

    Example:
        FieldDescriptorBuilder().name("email").widget(WidgetKind.TEXT).required().build()
    """

    _name: Optional[str] = None
    _widget: Optional[WidgetKind] = None
    _label: Optional[str] = None
    _placeholder: Optional[str] = None
    _options: Tuple[str, ...] = field(default_factory=tuple)
    _default: Optional[str] = None
    _max_length: int = DEFAULT_MAX_LENGTH
    _required: bool = False
    _json: bool = False

    def name(self, value: str) -> "FieldDescriptorBuilder":
        return replace(self, _name=value)

    def widget(self, kind: WidgetKind) -> "FieldDescriptorBuilder":
        return replace(self, _widget=kind)

    def label(self, value: Optional[str] = None) -> "FieldDescriptorBuilder":
        """Use the given label, or one derived from the field name."""
        if value is None:
            if self._name is None:
                raise ValueError("Set a name before deriving a label from it")
            value = pretty(self._name)
        return replace(self, _label=value)

    def placeholder(self, value: str) -> "FieldDescriptorBuilder":
        return replace(self, _placeholder=value)

    def options(self, values) -> "FieldDescriptorBuilder":
        return replace(self, _options=tuple(values))

    def default(self, value: Optional[str]) -> "FieldDescriptorBuilder":
        return replace(self, _default=value)

    def length(self, value: int) -> "FieldDescriptorBuilder":
        if value <= 0:
            raise ValueError("Maximum length must be positive")
        return replace(self, _max_length=value)

    def required(self, is_required: bool = True) -> "FieldDescriptorBuilder":
        return replace(self, _required=is_required)

    def json(self, is_json: bool = True) -> "FieldDescriptorBuilder":
        return replace(self, _json=is_json)

    def _make_placeholder(self) -> str:
        if self._json:
            return f"{self._placeholder or pretty(self._name)}: {JSON_PLACEHOLDER_HINT}"
        if self._placeholder is not None:
            return self._placeholder
        return humanize(self._name)

    def build(self) -> FieldDescriptor:
        if not self._name:
            raise ValueError("A field needs a name")
        if self._widget is None:
            raise ValueError(f"Field '{self._name}' has no widget kind")
        widget = WidgetKind.TEXT if self._json else self._widget
        return FieldDescriptor(
            name=self._name,
            widget_kind=widget,
            label=self._label,
            placeholder=self._make_placeholder(),
            options=self._options,
            default_value=self._default,
            max_length=self._max_length,
            required=self._required,
            accepts_multiple=self._json,
            is_json_encoded=self._json,
        )

    @classmethod
    def from_column(
        cls,
        column: ColumnMetadata,
        render_labels: bool = True,
        optional_keys: bool = False,
        widget_override: Optional[WidgetKind] = None,
    ) -> "FieldDescriptorBuilder":
        values = option_values(column.raw_type)
        if widget_override is None:
            kind = resolve(column.raw_type, column.name, len(values))
        else:
            kind = widget_override
        required = not column.nullable
        if optional_keys and column.is_key:
            required = False
        builder = (
            cls()
            .name(column.name)
            .widget(kind)
            .options(values)
            .default(column.default_value)
            .required(required)
            .json(base_type(column.raw_type) == JSON_TYPE)
        )
        length = declared_length(column.raw_type)
        if length is not None:
            builder = builder.length(length)
        if render_labels:
            builder = builder.label()
        return builder
