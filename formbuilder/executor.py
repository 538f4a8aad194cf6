import logging
from typing import Any, Dict, List, Mapping, Sequence

from .catalog import Catalog
from .columns import ColumnMetadata
from .parser import CreateTable, Describe, DropTable, Parser
from .storage import Table

logger = logging.getLogger(__name__)


class Executor:
    """Local backend for the form builder, coordinating Catalog and Table storage.

    Provides the two capabilities a form needs: `describe_table` for
    introspection and `execute_insert` for persisting a submission.
    """

    def __init__(self, base_dir: str = "data"):
        self.catalog = Catalog(base_dir=base_dir)
        self.parser = Parser()

    def execute(self, sql: str):
        stmt = self.parser.parse(sql)
        if stmt is None:
            return None
        if isinstance(stmt, CreateTable):
            return self._exec_create(stmt)
        if isinstance(stmt, Describe):
            return [self._describe_row(c) for c in self.describe_table(stmt.table)]
        if isinstance(stmt, DropTable):
            self.catalog.drop_table(stmt.name)
            return {"status": "OK", "dropped": stmt.name}
        raise ValueError("Unsupported statement type")

    def _exec_create(self, stmt: CreateTable):
        schema = {"name": stmt.name, "columns": stmt.columns}
        self.catalog.create_table(schema)
        logger.info("Created table %s", stmt.name)
        return {"status": "OK", "table": stmt.name}

    @staticmethod
    def _describe_row(column: ColumnMetadata) -> Dict[str, Any]:
        return {
            "Field": column.name,
            "Type": column.raw_type,
            "Null": "YES" if column.nullable else "NO",
            "Key": column.key_role.value,
            "Default": column.default_value,
            "Extra": column.extra,
        }

    def list_tables(self) -> List[str]:
        return self.catalog.list_tables()

    def describe_table(self, table: str) -> List[ColumnMetadata]:
        return self.catalog.describe_table(table)

    def execute_insert(self, table: str, columns: Sequence[str], values: Mapping[str, Any]) -> Dict[str, Any]:
        t = Table(table, catalog=self.catalog)
        return t.insert({c: values.get(c) for c in columns})

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return Table(table, catalog=self.catalog).scan()
