from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from dsdialect.db.base import Manager, QueryResult, shape_row
from dsdialect.exceptions import DatabaseError


class FakeManager(Manager):
    """In-memory manager recording every statement and read.

    ``responses`` maps a query to ``(columns, rows)``; unknown queries
    return ``default_columns`` / ``default_rows``.
    """

    def __init__(
        self,
        rows: Optional[List[Sequence[Any]]] = None,
        columns: Optional[List[str]] = None,
    ) -> None:
        self.default_rows = rows or []
        self.default_columns = columns or ["name"]
        self.responses: Dict[str, tuple] = {}
        self.executed: List[str] = []
        self.reads: List[tuple] = []
        self.fail_on: Dict[str, Exception] = {}
        self.read_error: Optional[Exception] = None

    def execute(self, statement: str) -> QueryResult:
        if statement in self.fail_on:
            raise self.fail_on[statement]
        self.executed.append(statement)
        return QueryResult(rows_affected=0)

    def read_all(self, query: str, parameters: Optional[Sequence[Any]] = None, into: Any = dict) -> List[Any]:
        self.reads.append((query, parameters, into))
        if self.read_error is not None:
            raise self.read_error
        columns, rows = self.responses.get(query, (self.default_columns, self.default_rows))
        return [shape_row(columns, row, into) for row in rows]


@pytest.fixture
def fake_manager() -> FakeManager:
    return FakeManager()


@pytest.fixture
def failing_manager() -> FakeManager:
    manager = FakeManager()
    manager.read_error = DatabaseError("connection lost")
    return manager


@pytest.fixture
def sqlite_path(tmp_path: Path) -> Path:
    return tmp_path / "shop.db"
