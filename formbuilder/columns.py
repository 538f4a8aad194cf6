from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .exceptions import SchemaIntrospectionFailed


def _text(value: Any) -> Optional[str]:
    # some drivers (mysql-connector) return DESCRIBE cells as bytes
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


class KeyRole(Enum):
    """Values MySQL reports in the `Key` column of DESCRIBE."""

    NONE = ""
    PRIMARY = "PRI"
    UNIQUE = "UNI"
    MULTIPLE = "MUL"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "KeyRole":
        value = (raw or "").strip().upper()
        for role in cls:
            if role.value == value:
                return role
        raise SchemaIntrospectionFailed(f"Unknown key role {raw!r}")


@dataclass(frozen=True)
class ColumnMetadata:
    """One introspected column. Built once per column and never changed."""

    name: str
    raw_type: str
    nullable: bool = True
    key_role: KeyRole = KeyRole.NONE
    default_value: Optional[str] = None
    extra: str = ""

    @property
    def is_auto_increment(self) -> bool:
        return "auto_increment" in (self.extra or "").lower()

    @property
    def is_key(self) -> bool:
        return self.key_role in (KeyRole.PRIMARY, KeyRole.UNIQUE)

    @classmethod
    def from_describe_row(cls, row: Mapping[str, Any]) -> "ColumnMetadata":
        # DESCRIBE rows: Field, Type, Null, Key, Default, Extra
        try:
            name = row["Field"]
            raw_type = row["Type"]
        except KeyError as e:
            raise SchemaIntrospectionFailed(f"DESCRIBE row is missing {e.args[0]!r}") from e
        default = _text(row.get("Default"))
        return cls(
            name=_text(name),
            raw_type=_text(raw_type),
            nullable=(_text(row.get("Null")) or "YES").upper() == "YES",
            key_role=KeyRole.parse(_text(row.get("Key"))),
            default_value=default,
            extra=_text(row.get("Extra")) or "",
        )
