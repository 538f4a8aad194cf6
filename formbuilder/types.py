import re
from enum import Enum
from typing import Any, List, Optional

from .exceptions import MalformedEnumLiteral, UnsupportedColumnType


class WidgetKind(Enum):
    # varchar and json columns
    TEXT = 1
    # text and longtext columns
    TEXT_AREA = 2
    # integer columns
    NUMBER = 3
    # enum columns with more than two values
    DROPDOWN = 4
    # only reachable through an explicit widget override
    DATE = 5
    # boolean columns and two-valued enums
    RADIO = 6
    PASSWORD = 7


NUMBER_TYPES = {"int", "smallint", "mediumint", "bigint"}
TEXT_TYPES = {"varchar", "json"}
TEXT_AREA_TYPES = {"text", "longtext"}
BOOLEAN_TYPES = {"boolean", "bool", "tinyint"}
ENUM_TYPE = "enum"
JSON_TYPE = "json"

SUPPORTED_TYPES = NUMBER_TYPES | TEXT_TYPES | TEXT_AREA_TYPES | BOOLEAN_TYPES | {ENUM_TYPE}

_length_re = re.compile(r"^\s*varchar\s*\(\s*(\d+)\s*\)", re.I)


def base_type(raw_type: str) -> str:
    """First word of a column type: enum('a','b') -> enum, int(10) unsigned -> int."""
    head = re.split(r"[\s(]", raw_type.strip(), maxsplit=1)[0]
    return head.lower()


def parse_enum_values(raw_type: str) -> List[str]:
    """Return the literals of a type like enum('a','b','c') in declared order."""
    opening = raw_type.find("(")
    if opening == -1:
        raise MalformedEnumLiteral(f"No value list in column type {raw_type!r}")
    inner = raw_type[opening:].strip().strip("()")
    if not inner.strip():
        raise MalformedEnumLiteral(f"Empty value list in column type {raw_type!r}")
    return [token.strip().strip("'") for token in inner.split(",")]


def option_values(raw_type: str) -> List[str]:
    typ = base_type(raw_type)
    if typ == ENUM_TYPE:
        return parse_enum_values(raw_type)
    if typ in BOOLEAN_TYPES:
        # tinyint(1) carries a display width, not a value list
        return ["0", "1"]
    return []


def resolve(raw_type: str, column_name: str, value_count: int) -> WidgetKind:
    typ = base_type(raw_type)
    if typ == ENUM_TYPE and value_count == 2:
        return WidgetKind.RADIO
    if "password" in column_name.lower():
        return WidgetKind.PASSWORD
    if typ in NUMBER_TYPES:
        return WidgetKind.NUMBER
    if typ in TEXT_TYPES:
        return WidgetKind.TEXT
    if typ in TEXT_AREA_TYPES:
        return WidgetKind.TEXT_AREA
    if typ == ENUM_TYPE:
        return WidgetKind.DROPDOWN
    if typ in BOOLEAN_TYPES:
        return WidgetKind.RADIO
    raise UnsupportedColumnType(f"Column '{column_name}' has unsupported type {raw_type!r}")


def declared_length(raw_type: str) -> Optional[int]:
    m = _length_re.match(raw_type)
    if m:
        return int(m.group(1))
    return None


def coerce_value(value: Any, raw_type: str):
    """Coerce a submitted value to the column type. Raises ValueError on failure.

    Text, enum and json values are stored as strings; json columns arrive
    already encoded.
    """
    if value is None:
        return None
    typ = base_type(raw_type)
    if typ in BOOLEAN_TYPES:
        if isinstance(value, bool):
            return int(value)
        v = str(value).strip().lower()
        if v in ("1", "true", "t", "yes"):
            return 1
        if v in ("0", "false", "f", "no"):
            return 0
        raise ValueError(f"Cannot coerce {value!r} to {raw_type}")
    if typ in NUMBER_TYPES:
        if isinstance(value, str) and not value.strip():
            return None
        return int(value)
    if typ == ENUM_TYPE:
        v = str(value)
        if v not in parse_enum_values(raw_type):
            raise ValueError(f"{value!r} is not one of {raw_type}")
        return v
    if typ in SUPPORTED_TYPES:
        return str(value)
    raise UnsupportedColumnType(f"Cannot store values of type {raw_type!r}")
