import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .columns import ColumnMetadata
from .exceptions import (
    FormBuilderException,
    InvalidFieldSelection,
    InvalidRequestMethod,
    SchemaIntrospectionFailed,
)
from .fields import FieldDescriptor, FieldDescriptorBuilder, pretty
from .types import WidgetKind

logger = logging.getLogger(__name__)


class RequestMethod(Enum):
    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, value: Union["RequestMethod", str]) -> "RequestMethod":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().upper()
            for method in cls:
                if method.value == normalized:
                    return method
        raise InvalidRequestMethod(f"Invalid request method {value!r}, expected one of GET, POST")


@dataclass(frozen=True)
class HtmxConfig:
    """hx-* wiring: `target` receives the response, `render_target` is an
    optional container emitted above the form for it."""

    target: str
    swap: str = "innerHTML"
    render_target: Optional[str] = None


@dataclass(frozen=True)
class FormOptions:
    render_labels: bool = True
    # treat PRIMARY/UNIQUE columns as optional even when NOT NULL
    optional_keys: bool = False
    widget_overrides: Mapping[str, WidgetKind] = field(default_factory=dict)


PLACEHOLDER_STYLES = {
    "named": lambda name: f":{name}",
    "pyformat": lambda name: f"%({name})s",
    "qmark": lambda name: "?",
    "format": lambda name: "%s",
}


@dataclass(frozen=True)
class InsertStatement:
    table: str
    columns: Tuple[str, ...]
    placeholders: Tuple[str, ...]

    @property
    def sql(self) -> str:
        return "INSERT INTO {} ({}) VALUES ({})".format(
            self.table, ", ".join(self.columns), ", ".join(self.placeholders)
        )


@dataclass(frozen=True)
class FormModel:
    """The fields of one table's insert form plus how the form submits.

    Instances are immutable: `restrict_to`, `omit` and the `with_*` methods
    return a new model.
    """

    table: str
    fields: Tuple[FieldDescriptor, ...]
    action: str = ""
    method: RequestMethod = RequestMethod.POST
    csrf_enabled: bool = False
    htmx: Optional[HtmxConfig] = None
    title: Optional[str] = None
    submit_text: str = "Submit"
    wrapper_class: Optional[str] = None

    @classmethod
    def build(
        cls,
        table: str,
        columns: Iterable[ColumnMetadata],
        options: Optional[FormOptions] = None,
        **attrs: Any,
    ) -> "FormModel":
        columns = list(columns or [])
        if not columns:
            raise SchemaIntrospectionFailed(f"No columns found for table '{table}'")
        options = options or FormOptions()
        unknown = set(options.widget_overrides) - {c.name for c in columns}
        if unknown:
            raise InvalidFieldSelection(f"Widget overrides for unknown columns: {', '.join(sorted(unknown))}")
        descriptors = []
        for column in columns:
            if column.is_auto_increment:
                continue
            builder = FieldDescriptorBuilder.from_column(
                column,
                render_labels=options.render_labels,
                optional_keys=options.optional_keys,
                widget_override=options.widget_overrides.get(column.name),
            )
            descriptors.append(builder.build())
        if "method" in attrs:
            attrs["method"] = RequestMethod.parse(attrs["method"])
        attrs.setdefault("title", pretty(table))
        logger.debug("Built form for %s with %d fields", table, len(descriptors))
        return cls(table=table, fields=tuple(descriptors), **attrs)

    @classmethod
    def from_backend(cls, backend, table: str, options: Optional[FormOptions] = None, **attrs: Any) -> "FormModel":
        """Introspect `table` through `backend.describe_table` and build the model."""
        try:
            columns = backend.describe_table(table)
        except FormBuilderException:
            raise
        except Exception as e:
            logger.exception("Introspection of table %s failed", table)
            raise SchemaIntrospectionFailed(f"Could not describe table '{table}'") from e
        return cls.build(table, columns, options, **attrs)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def json_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.fields if f.is_json_encoded]

    def field(self, name: str) -> FieldDescriptor:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)

    def restrict_to(self, names: Iterable[str]) -> "FormModel":
        wanted = set(names)
        missing = wanted - set(self.field_names)
        if missing:
            raise InvalidFieldSelection(f"Unknown fields for table '{self.table}': {', '.join(sorted(missing))}")
        return replace(self, fields=tuple(f for f in self.fields if f.name in wanted))

    def omit(self, names: Iterable[str]) -> "FormModel":
        # unknown names are ignored, unlike restrict_to
        unwanted = set(names)
        return replace(self, fields=tuple(f for f in self.fields if f.name not in unwanted))

    def with_action(self, destination: str) -> "FormModel":
        return replace(self, action=destination)

    def with_method(self, method: Union[RequestMethod, str]) -> "FormModel":
        return replace(self, method=RequestMethod.parse(method))

    def with_csrf(self, enabled: bool = True) -> "FormModel":
        return replace(self, csrf_enabled=enabled)

    def with_htmx(self, htmx: Optional[HtmxConfig]) -> "FormModel":
        return replace(self, htmx=htmx)

    def with_title(self, title: Optional[str]) -> "FormModel":
        return replace(self, title=title)

    def with_submit_text(self, text: str) -> "FormModel":
        return replace(self, submit_text=text)

    def with_wrapper(self, css_class: Optional[str]) -> "FormModel":
        return replace(self, wrapper_class=css_class)

    def build_insert_statement(self, paramstyle: str = "named") -> InsertStatement:
        try:
            placeholder = PLACEHOLDER_STYLES[paramstyle]
        except KeyError:
            raise ValueError(f"Unsupported paramstyle {paramstyle!r}") from None
        columns = tuple(self.field_names)
        return InsertStatement(
            table=self.table,
            columns=columns,
            placeholders=tuple(placeholder(name) for name in columns),
        )

    def default_values(self) -> Dict[str, Optional[str]]:
        """One entry per field, holding the column default (None when it has none)."""
        return {f.name: f.default_value for f in self.fields}
