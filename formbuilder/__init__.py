from .columns import ColumnMetadata, KeyRole
from .csrf import CsrfGuard, MappingSessionStore
from .executor import Executor
from .fields import FieldDescriptor, FieldDescriptorBuilder
from .form import FormModel, FormOptions, HtmxConfig, InsertStatement, RequestMethod
from .renderer import FormRenderer
from .submission import SubmissionHandler, SubmissionResult
from .types import WidgetKind, parse_enum_values, resolve

__all__ = [
    "ColumnMetadata",
    "KeyRole",
    "CsrfGuard",
    "MappingSessionStore",
    "Executor",
    "FieldDescriptor",
    "FieldDescriptorBuilder",
    "FormModel",
    "FormOptions",
    "HtmxConfig",
    "InsertStatement",
    "RequestMethod",
    "FormRenderer",
    "SubmissionHandler",
    "SubmissionResult",
    "WidgetKind",
    "parse_enum_values",
    "resolve",
]
