"""
Pytest configuration for BeeConta backend tests.

Sets up the test environment and an in-memory stand-in for the Supabase
query builder, so service tests exercise real filter chains without a
database.
"""
import copy
import os
import re
import uuid
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

# Embed alias used in selects -> table holding the related rows
EMBED_TABLES = {
    "empresas": "empresas",
    "empresa": "empresas",
    "grupos_economicos": "grupos_economicos",
    "banco": "bancos",
    "moeda": "moedas",
    "conta_bancaria": "contas_bancarias",
    "cartao_credito": "cartoes_credito",
    "categoria": "categorias",
    "categoria_pai": "categorias",
}

EMBED_PATTERN = re.compile(r"(\w+):(\w+)\s*\(([^)]*)\)")

RowFilter = Callable[[Dict[str, Any]], bool]


class FakeQuery:
    """
    Chainable query against a FakeSupabase table.

    Supports the subset of the PostgREST builder the services use. A filter
    on an embedded column (e.g. eq("empresas.status", "ativo")) nulls the
    embed instead of dropping the parent row, as PostgREST does.
    """

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._mode = "select"
        self._payload: Any = None
        self._embeds: List[Tuple[str, str, List[str]]] = []
        self._filters: List[RowFilter] = []
        self._embed_filters: List[Tuple[str, str, Any]] = []
        self._order: Optional[Tuple[str, bool]] = None
        self._limit: Optional[int] = None

    # --- operations ---

    def select(self, columns: str = "*", **kwargs: Any) -> "FakeQuery":
        self._embeds = [
            (alias, fk, [c.strip() for c in cols.split(",") if c.strip()])
            for alias, fk, cols in EMBED_PATTERN.findall(columns)
        ]
        return self

    def insert(self, data: Any) -> "FakeQuery":
        self._mode = "insert"
        self._payload = data
        return self

    def update(self, data: Dict[str, Any]) -> "FakeQuery":
        self._mode = "update"
        self._payload = data
        return self

    def upsert(self, data: Any, **kwargs: Any) -> "FakeQuery":
        self._mode = "upsert"
        self._payload = data
        return self

    # --- filters ---

    def eq(self, column: str, value: Any) -> "FakeQuery":
        if "." in column:
            alias, embedded_column = column.split(".", 1)
            self._embed_filters.append((alias, embedded_column, value))
        else:
            self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self

    def lte(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self

    def or_(self, expression: str) -> "FakeQuery":
        conditions = [part.split(".", 2) for part in expression.split(",")]

        def matches(row: Dict[str, Any]) -> bool:
            for column, operator, value in conditions:
                if operator == "eq" and str(row.get(column)) == value:
                    return True
                if operator == "is" and value == "null" and row.get(column) is None:
                    return True
            return False

        self._filters.append(matches)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    # --- execution ---

    def execute(self) -> SimpleNamespace:
        self._db.calls.append((self._table, self._mode, copy.deepcopy(self._payload)))

        error = self._db.errors.get((self._table, self._mode)) or self._db.errors.get(
            (self._table, None)
        )
        if error is not None:
            raise error

        if self._mode == "insert":
            records = self._payload if isinstance(self._payload, list) else [self._payload]
            return SimpleNamespace(data=[self._db.store(self._table, r) for r in records])

        if self._mode == "upsert":
            records = self._payload if isinstance(self._payload, list) else [self._payload]
            return SimpleNamespace(data=[self._db.store(self._table, r, merge=True) for r in records])

        matching = [
            row for row in self._db.tables.setdefault(self._table, [])
            if all(row_filter(row) for row_filter in self._filters)
        ]

        if self._mode == "update":
            for row in matching:
                row.update(copy.deepcopy(self._payload))
            return SimpleNamespace(data=[copy.deepcopy(row) for row in matching])

        results = [self._with_embeds(row) for row in matching]

        if self._order is not None:
            column, descending = self._order
            results.sort(key=lambda r: str(r.get(column) or ""), reverse=descending)

        if self._limit is not None:
            results = results[:self._limit]

        return SimpleNamespace(data=results)

    def _with_embeds(self, row: Dict[str, Any]) -> Dict[str, Any]:
        result = copy.deepcopy(row)

        for alias, fk, columns in self._embeds:
            if alias in row:
                # Embed seeded directly on the row
                continue
            related_table = EMBED_TABLES.get(alias, alias)
            related = next(
                (
                    r for r in self._db.tables.get(related_table, [])
                    if r.get("id") == row.get(fk)
                ),
                None
            )
            if related is not None and columns != ["*"]:
                related = {c: related.get(c) for c in columns}
            result[alias] = copy.deepcopy(related)

        for alias, column, value in self._embed_filters:
            embedded = result.get(alias)
            if isinstance(embedded, dict) and embedded.get(column) != value:
                result[alias] = None
            elif isinstance(embedded, list):
                result[alias] = [
                    item for item in embedded
                    if isinstance(item, dict) and item.get(column) == value
                ]

        return result


class FakeSupabase:
    """
    In-memory Supabase client: tables are lists of dicts.

    Attributes:
        tables: table name -> rows
        calls: (table, mode, payload) for every executed query
        errors: (table, mode or None) -> exception raised on execute
        auth: MagicMock standing in for the Auth client
    """

    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Any]] = []
        self.errors: Dict[Tuple[str, Optional[str]], Exception] = {}
        self.auth = MagicMock()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def store(self, table: str, record: Dict[str, Any], merge: bool = False) -> Dict[str, Any]:
        rows = self.tables.setdefault(table, [])
        if merge and record.get("id") is not None:
            for row in rows:
                if row.get("id") == record["id"]:
                    row.update(copy.deepcopy(record))
                    return copy.deepcopy(row)
        new_row = copy.deepcopy(record)
        new_row.setdefault("id", str(uuid.uuid4()))
        rows.append(new_row)
        return copy.deepcopy(new_row)

    def seed(self, table: str, rows: List[Dict[str, Any]]) -> None:
        for row in rows:
            self.store(table, row)

    def fail_on(
        self,
        table: str,
        mode: Optional[str] = None,
        error: Optional[Exception] = None
    ) -> None:
        self.errors[(table, mode)] = error or Exception(f"{table} unavailable")

    def row(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self.tables.get(table, []) if r.get("id") == row_id), None)

    def calls_for(self, table: str, mode: Optional[str] = None) -> List[Tuple[str, str, Any]]:
        return [
            call for call in self.calls
            if call[0] == table and (mode is None or call[1] == mode)
        ]


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Empty in-memory Supabase client."""
    return FakeSupabase()


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for tests that only assert on calls.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client
