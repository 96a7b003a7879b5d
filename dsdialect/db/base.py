"""Manager contract and result containers shared by all managers."""

import dataclasses
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, List, Optional, Sequence

import pandas as pd


class QueryResult:
    """Container for query results with metadata."""

    def __init__(
        self,
        data: Optional[pd.DataFrame] = None,
        rows_affected: Optional[int] = None,
        execution_time: Optional[float] = None,
        columns: Optional[List[str]] = None,
    ) -> None:
        """Initialize query result.

        Args:
            data: Result data as DataFrame.
            rows_affected: Number of rows affected by the statement.
            execution_time: Execution time in seconds.
            columns: Column names for the result.
        """
        self.data = data
        self.rows_affected = rows_affected or 0
        self.execution_time = execution_time or 0.0
        self.columns = columns or []

    def rows(self) -> List[tuple]:
        """Return result rows as positional tuples of plain Python values.

        Missing values (NULL / NaN) come back as ``None``.
        """
        if self.data is None:
            return []
        frame = self.data.astype(object).where(self.data.notna(), None)
        return list(frame.itertuples(index=False, name=None))


def as_string(value: Any) -> str:
    """Loosely convert a column value to ``str``; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8', errors='replace')
    if isinstance(value, float) and value != value:  # NaN
        return ""
    return str(value)


def as_int(value: Any) -> int:
    """Loosely convert a column value to ``int``; ``None`` becomes ``0``."""
    if value is None:
        return 0
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode('utf-8')
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
        try:
            return int(value)
        except ValueError:
            return int(Decimal(value))
    if isinstance(value, float) and value != value:  # NaN
        return 0
    return int(value)


def shape_row(columns: Sequence[str], values: Sequence[Any], into: Any = dict) -> Any:
    """Convert one positional row into the requested row shape.

    Args:
        columns: Result column labels.
        values: Positional row values.
        into: ``dict``, ``tuple``, ``int`` or ``str`` (first column as scalar),
            or a dataclass type populated from same-named columns.

    Returns:
        The shaped row.
    """
    if into is dict:
        return dict(zip(columns, values))
    if into is tuple:
        return tuple(values)
    if into is int:
        return as_int(values[0]) if values else 0
    if into is str:
        return as_string(values[0]) if values else ""
    if dataclasses.is_dataclass(into) and isinstance(into, type):
        by_label = {str(column).lower(): value for column, value in zip(columns, values)}
        kwargs = {}
        for field in dataclasses.fields(into):
            if field.name.lower() not in by_label:
                continue
            value = by_label[field.name.lower()]
            if field.type in (str, 'str'):
                value = as_string(value)
            elif field.type in (int, 'int'):
                value = as_int(value)
            kwargs[field.name] = value
        return into(**kwargs)
    raise TypeError(f"Unsupported row shape: {into!r}")


class Manager(ABC):
    """Executes statements and reads result rows on behalf of a dialect.

    Implementations raise on failure; dialects let those exceptions
    propagate unchanged.
    """

    @abstractmethod
    def execute(self, statement: str) -> QueryResult:
        """Execute a statement that returns no rows.

        Returns:
            QueryResult carrying the affected row count.
        """

    @abstractmethod
    def read_all(
        self,
        query: str,
        parameters: Optional[Sequence[Any]] = None,
        into: Any = dict,
    ) -> List[Any]:
        """Read every row of ``query``.

        Args:
            query: SQL text; ``?`` marks a positional bound parameter.
            parameters: Values bound to the ``?`` markers, in order.
            into: Row shape, see :func:`shape_row`.

        Returns:
            Rows in result order.
        """

    def read_single(
        self,
        query: str,
        parameters: Optional[Sequence[Any]] = None,
        into: Any = dict,
    ) -> Optional[Any]:
        """Read the first row of ``query``, or ``None`` when there is none."""
        rows = self.read_all(query, parameters, into)
        return rows[0] if rows else None
