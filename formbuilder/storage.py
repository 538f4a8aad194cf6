import json
import os
from typing import Any, Dict, List, Optional

from .catalog import Catalog
from .exceptions import ConstraintViolation, TableNotFound
from .types import coerce_value


class Table:
    """Represents a single table: schema and data file.

    Data is stored in JSONL where each line is a JSON row. Rows are loaded
    into memory so NOT NULL, PRIMARY KEY and UNIQUE can be checked on insert.
    """

    def __init__(self, name: str, catalog: Optional[Catalog] = None):
        self.name = name
        self.catalog = catalog or Catalog()
        self.path = self.catalog.table_path(name)
        if not os.path.exists(self.path):
            raise TableNotFound(f"Table '{name}' not found")
        self.schema = self.catalog.load_schema(name)
        self.data_file = os.path.join(self.path, "data.jsonl")
        self.columns = {c["name"]: c for c in self.schema.get("columns", [])}
        self.unique_columns = [n for n, c in self.columns.items() if c.get("key") in ("PRI", "UNI")]
        self._rows: List[Dict[str, Any]] = []
        self._load_data()

    def _load_data(self):
        if not os.path.exists(self.data_file):
            self._rows = []
            return
        rows = []
        with open(self.data_file, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                rows.append(json.loads(line))
        self._rows = rows

    def _next_id(self, column: str) -> int:
        existing = [r.get(column) for r in self._rows if isinstance(r.get(column), int)]
        return max(existing, default=0) + 1

    def _value_for(self, name: str, col: Dict[str, Any], row: Dict[str, Any]):
        val = row.get(name)
        if val == "" and col.get("nullable", True):
            val = None
        if val is None and "auto_increment" in col.get("extra", ""):
            return self._next_id(name)
        if val is None:
            val = col.get("default")
        try:
            val = coerce_value(val, col["type"])
        except ValueError as e:
            raise ConstraintViolation(f"Invalid value for column '{name}': {e}") from e
        if val is None and not col.get("nullable", True):
            raise ConstraintViolation(f"Column '{name}' cannot be null")
        return val

    def insert(self, row: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(row) - set(self.columns)
        if unknown:
            raise ConstraintViolation(f"Unknown columns for table '{self.name}': {', '.join(sorted(unknown))}")
        record = {name: self._value_for(name, col, row) for name, col in self.columns.items()}
        for col in self.unique_columns:
            v = record.get(col)
            if v is not None and any(r.get(col) == v for r in self._rows):
                raise ConstraintViolation(f"UNIQUE constraint violation on column '{col}': {v}")
        # persist append
        with open(self.data_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._rows.append(record)
        return record

    def scan(self) -> List[Dict[str, Any]]:
        return list(self._rows)
