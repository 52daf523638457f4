"""
Shared fixtures for the transfer tests.

FakeConnection is an in-memory stand-in for the database service: it
implements execute/select/schema_info/clone/close with the same shapes
SurrealConnection returns, so engines can run without a server.
"""

import json
import re
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from surreal_transfer.models.errors import NetworkError, QueryError
from surreal_transfer.models.record import RecordId, unescape_ident
from surreal_transfer.services.database import QueryResponse

_INSERT = re.compile(r"^INSERT INTO (.+) \$records;$")


class FakeConnection:
    """In-memory database service."""

    def __init__(
        self,
        tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        schemas: Optional[Dict[str, List[str]]] = None,
        fail_select: Optional[Dict[str, Exception]] = None,
        insert_errors: Optional[Dict[str, str]] = None,
        fail_insert: Optional[Dict[str, Exception]] = None,
    ):
        self.tables = tables if tables is not None else {}
        self.schemas = schemas or {}
        self.fail_select = fail_select or {}
        self.insert_errors = insert_errors or {}
        self.fail_insert = fail_insert or {}
        self.statements: List[tuple] = []
        self.clones: List["FakeClone"] = []
        self.closed = False
        self._lock = threading.Lock()
        self._generated = 0

    def execute(self, statement: str, bindings: Optional[Dict[str, Any]] = None) -> QueryResponse:
        self.statements.append((statement, bindings))
        match = _INSERT.match(statement)
        if not match:
            return QueryResponse(rows=[], errors=[f"unsupported statement: {statement}"])

        table = unescape_ident(match.group(1))
        if table in self.fail_insert:
            raise self.fail_insert[table]
        if table in self.insert_errors:
            return QueryResponse(rows=[], errors=[self.insert_errors[table]])

        inserted = []
        with self._lock:
            for record in bindings["records"]:
                row = json.loads(json.dumps(record))
                if "id" in row:
                    row["id"] = str(RecordId(table, row["id"]))
                else:
                    self._generated += 1
                    row["id"] = str(RecordId(table, f"gen{self._generated}"))
                self.tables.setdefault(table, []).append(row)
                inserted.append(dict(row))
        return QueryResponse(rows=inserted, errors=[])

    def select(self, table: str, start: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if table in self.fail_select:
            raise self.fail_select[table]
        rows = self.tables.get(table, [])
        end = start + limit if limit is not None else None
        return [dict(row) for row in rows[start:end]]

    def schema_info(self, table: str) -> Dict[str, Any]:
        fields = self.schemas.get(table, [])
        return {
            "events": {},
            "fields": {name: f"DEFINE FIELD {name} ON {table}" for name in fields},
            "indexes": {},
            "lives": {},
            "tables": {},
        }

    def clone(self) -> "FakeClone":
        clone = FakeClone(self)
        with self._lock:
            self.clones.append(clone)
        return clone

    def close(self) -> None:
        self.closed = True


class FakeClone:
    """Connection clone sharing the parent's in-memory tables."""

    def __init__(self, parent: FakeConnection):
        self.parent = parent
        self.closed = False

    def execute(self, statement, bindings=None):
        return self.parent.execute(statement, bindings)

    def select(self, table, start=0, limit=None):
        return self.parent.select(table, start, limit)

    def schema_info(self, table):
        return self.parent.schema_info(table)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


@pytest.fixture
def fake_db() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON (or raw text) file under tmp_path and return its path."""

    def _write(name: str, content: Any) -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def select_failure():
    return QueryError("Select from broken failed: boom", {"table": "broken"})


@pytest.fixture
def network_failure():
    return NetworkError("connection reset")


@pytest.fixture
def fake_connection_cls():
    return FakeConnection
