import json
import os
import shutil
from typing import Any, Dict, List

from .columns import ColumnMetadata, KeyRole
from .exceptions import SchemaError, TableNotFound


class Catalog:
    """Manage table schemas and table directories on disk.

    Each table lives in a folder under `base_dir` with `schema.json` and a
    `data.jsonl` file. Columns are stored the way MySQL's DESCRIBE reports
    them: name, raw type, nullability, key role, default and extra.
    """

    def __init__(self, base_dir: str = "data"):
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)

    def table_path(self, table_name: str) -> str:
        return os.path.join(self.base_dir, table_name)

    def list_tables(self) -> List[str]:
        return sorted(
            d for d in os.listdir(self.base_dir)
            if os.path.exists(os.path.join(self.base_dir, d, "schema.json"))
        )

    def create_table(self, schema: Dict[str, Any]):
        name = schema.get("name")
        if not name:
            raise SchemaError("Schema must include a 'name' field")
        if not schema.get("columns"):
            raise SchemaError(f"Table '{name}' must have at least one column")
        path = self.table_path(name)
        if os.path.exists(os.path.join(path, "schema.json")):
            raise SchemaError(f"Table '{name}' already exists")
        os.makedirs(path, exist_ok=True)
        schema_file = os.path.join(path, "schema.json")
        with open(schema_file, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)

    def load_schema(self, table_name: str) -> Dict[str, Any]:
        path = self.table_path(table_name)
        schema_file = os.path.join(path, "schema.json")
        if not os.path.exists(schema_file):
            raise TableNotFound(f"Table '{table_name}' not found")
        with open(schema_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def describe_table(self, table_name: str) -> List[ColumnMetadata]:
        schema = self.load_schema(table_name)
        return [
            ColumnMetadata(
                name=c["name"],
                raw_type=c["type"],
                nullable=c.get("nullable", True),
                key_role=KeyRole.parse(c.get("key")),
                default_value=c.get("default"),
                extra=c.get("extra", ""),
            )
            for c in schema.get("columns", [])
        ]

    def drop_table(self, table_name: str):
        path = self.table_path(table_name)
        if not os.path.exists(path):
            raise TableNotFound(f"Table '{table_name}' not found")
        shutil.rmtree(path)
