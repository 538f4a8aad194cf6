import logging
import re
from typing import Any, List, Mapping, Sequence

from .columns import ColumnMetadata
from .exceptions import SchemaIntrospectionFailed
from .form import PLACEHOLDER_STYLES

logger = logging.getLogger(__name__)

_identifier_re = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def quote_identifier(name: str) -> str:
    if not _identifier_re.match(name or ""):
        raise ValueError(f"Invalid SQL identifier {name!r}")
    return f"`{name}`"


class DbApiBackend:
    """describe_table / execute_insert over a DB-API 2 connection to MySQL or MariaDB.

    `paramstyle` must match the driver module's `paramstyle` attribute
    (PyMySQL and mysqlclient use "pyformat").
    """

    def __init__(self, connection, paramstyle: str = "pyformat"):
        if paramstyle not in PLACEHOLDER_STYLES:
            raise ValueError(f"Unsupported paramstyle {paramstyle!r}")
        self.connection = connection
        self.paramstyle = paramstyle

    def describe_table(self, table: str) -> List[ColumnMetadata]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(f"DESCRIBE {quote_identifier(table)}")
            rows = cursor.fetchall()
            names = [d[0] for d in cursor.description or ()]
        except Exception as e:
            logger.exception("DESCRIBE %s failed", table)
            raise SchemaIntrospectionFailed(f"Could not describe table '{table}'") from e
        finally:
            cursor.close()
        columns = []
        for row in rows:
            if not isinstance(row, Mapping):
                row = dict(zip(names, row))
            columns.append(ColumnMetadata.from_describe_row(row))
        return columns

    def _parameters(self, columns: Sequence[str], values: Mapping[str, Any]):
        if self.paramstyle in ("named", "pyformat"):
            return {c: values.get(c) for c in columns}
        return [values.get(c) for c in columns]

    def execute_insert(self, table: str, columns: Sequence[str], values: Mapping[str, Any]) -> None:
        placeholder = PLACEHOLDER_STYLES[self.paramstyle]
        sql = "INSERT INTO {} ({}) VALUES ({})".format(
            quote_identifier(table),
            ", ".join(quote_identifier(c) for c in columns),
            ", ".join(placeholder(c) for c in columns),
        )
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, self._parameters(columns, values))
            self.connection.commit()
        except Exception:
            self.connection.rollback()
            raise
        finally:
            cursor.close()
