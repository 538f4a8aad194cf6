import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class CreateTable:
    name: str
    columns: List[dict]


@dataclass
class Describe:
    table: str


@dataclass
class DropTable:
    name: str


class Parser:
    """Tiny ad-hoc parser for the DDL the local store understands.

    Supported examples:
    - CREATE TABLE users (id INT NOT NULL AUTO_INCREMENT, name VARCHAR(64) NOT NULL, PRIMARY KEY (id))
    - CREATE TABLE posts (id INT AUTO_INCREMENT PRIMARY KEY, status ENUM('draft','live') DEFAULT 'draft')
    - DESCRIBE users
    - DROP TABLE users
    """

    _column_re = re.compile(r"`?(\w+)`?\s+(\w+(?:\s*\([^)]*\))?(?:\s+unsigned)?)(.*)$", re.I | re.S)
    _default_re = re.compile(r"\bDEFAULT\s+('(?:[^']|'')*'|\S+)", re.I)

    def parse(self, sql: str):
        sql = sql.strip().rstrip(";")
        if not sql:
            return None
        head = sql.split(None, 1)[0].upper()
        if head == "CREATE":
            return self._parse_create(sql)
        if head in ("DESCRIBE", "DESC"):
            return self._parse_describe(sql)
        if head == "DROP":
            return self._parse_drop(sql)
        raise ValueError(f"Unsupported statement: {head}")

    def _parse_create(self, sql: str) -> CreateTable:
        m = re.match(r"CREATE\s+TABLE\s+`?(\w+)`?\s*\((.*)\)", sql, re.I | re.S)
        if not m:
            raise ValueError("Invalid CREATE TABLE syntax")
        name = m.group(1)
        body = m.group(2).strip()
        parts = [p.strip() for p in self._split_commas(body) if p.strip()]
        cols: List[Dict[str, Any]] = []
        primary: List[str] = []
        unique: List[str] = []
        for p in parts:
            up = p.upper()
            if up.startswith("PRIMARY KEY"):
                primary.extend(self._key_columns(p))
                continue
            if up.startswith("UNIQUE"):
                unique.extend(self._key_columns(p))
                continue
            cols.append(self._parse_column(p))
        by_name = {c["name"]: c for c in cols}
        for col_name in primary + unique:
            if col_name not in by_name:
                raise ValueError(f"Key references unknown column '{col_name}'")
        for col_name in unique:
            by_name[col_name]["key"] = "UNI"
        for col_name in primary:
            by_name[col_name]["key"] = "PRI"
            by_name[col_name]["nullable"] = False
        return CreateTable(name=name, columns=cols)

    def _parse_column(self, definition: str) -> Dict[str, Any]:
        mcol = self._column_re.match(definition)
        if not mcol:
            raise ValueError(f"Invalid column definition: {definition}")
        col_type = re.sub(r"\s+\(", "(", mcol.group(2).strip())
        rest = mcol.group(3)
        # drop quoted literals so modifiers inside DEFAULT 'not null' are not matched
        modifiers = re.sub(r"'(?:[^']|'')*'", "''", rest).upper()
        col: Dict[str, Any] = {
            "name": mcol.group(1),
            "type": col_type,
            "nullable": "NOT NULL" not in modifiers,
            "key": "",
            "default": self._parse_default(rest),
            "extra": "",
        }
        if "AUTO_INCREMENT" in modifiers:
            col["extra"] = "auto_increment"
        if "PRIMARY KEY" in modifiers:
            col["key"] = "PRI"
            col["nullable"] = False
        elif re.search(r"\bUNIQUE\b", modifiers):
            col["key"] = "UNI"
        return col

    def _parse_default(self, rest: str) -> Optional[str]:
        m = self._default_re.search(rest)
        if not m:
            return None
        d = m.group(1)
        if d.startswith("'") and d.endswith("'"):
            return d[1:-1].replace("''", "'")
        if d.upper() == "NULL":
            return None
        return d

    def _key_columns(self, clause: str) -> List[str]:
        inner = re.search(r"\(([^)]+)\)", clause)
        if not inner:
            raise ValueError(f"Invalid key clause: {clause}")
        return [c.strip().strip("`") for c in inner.group(1).split(",")]

    def _split_commas(self, s: str) -> List[str]:
        parts = []
        cur = []
        depth = 0
        quoted = False
        for ch in s:
            if ch == "'":
                quoted = not quoted
            elif not quoted and ch == '(':
                depth += 1
            elif not quoted and ch == ')':
                depth -= 1
            if ch == ',' and depth == 0 and not quoted:
                parts.append(''.join(cur))
                cur = []
            else:
                cur.append(ch)
        if cur:
            parts.append(''.join(cur))
        return parts

    def _parse_describe(self, sql: str) -> Describe:
        m = re.match(r"(?:DESCRIBE|DESC)\s+`?(\w+)`?$", sql.strip(), re.I)
        if not m:
            raise ValueError("Invalid DESCRIBE syntax")
        return Describe(table=m.group(1))

    def _parse_drop(self, sql: str) -> DropTable:
        m = re.match(r"DROP\s+TABLE\s+`?(\w+)`?$", sql.strip(), re.I)
        if not m:
            raise ValueError("Invalid DROP TABLE syntax")
        return DropTable(name=m.group(1))
