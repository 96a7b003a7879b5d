"""SQLAlchemy-backed manager used by dialects to reach a live database."""

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple
from urllib.parse import quote_plus

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from dsdialect.config.models import DatabaseConfig, DatabaseType
from dsdialect.db.base import Manager, QueryResult, shape_row
from dsdialect.exceptions import DatabaseError

logger = logging.getLogger(__name__)

URL_SCHEMES = {
    DatabaseType.MYSQL: "mysql+pymysql",
    DatabaseType.SQLITE: "sqlite",
    DatabaseType.POSTGRESQL: "postgresql+psycopg2",
    DatabaseType.ORACLE: "oracle+oracledb",
    DatabaseType.SQLSERVER: "mssql+pyodbc",
}

_QUOTES = ("'", '"')


def bind_positional(query: str, parameters: Optional[Sequence[Any]]) -> Tuple[str, Dict[str, Any]]:
    """Rewrite ``?`` markers as named binds understood by ``sqlalchemy.text``.

    ``?`` inside single-quoted literals, double-quoted identifiers, ``--``
    line comments and ``/* */`` block comments is left alone. Every colon
    of the original text is escaped so ``text()`` never reads it as a
    bind; backtick and bracket quoting are not tracked.

    Args:
        query: SQL text with positional ``?`` markers.
        parameters: Values for the markers, in order.

    Returns:
        Tuple of rewritten SQL and the named parameter mapping.

    Raises:
        DatabaseError: If the marker count does not match the parameter count.
    """
    values = list(parameters or [])
    parts: List[str] = []
    bound: Dict[str, Any] = {}
    context: Optional[str] = None  # quote char, "--" or "/*"
    i = 0
    while i < len(query):
        char = query[i]
        pair = query[i:i + 2]
        if context is None:
            if char in _QUOTES:
                context = char
            elif pair in ("--", "/*"):
                context = pair
                parts.append(pair)
                i += 2
                continue
            elif char == "?":
                index = len(bound)
                if index >= len(values):
                    raise DatabaseError(
                        f"Query expects more than {len(values)} bound parameter(s)",
                        statement=query,
                    )
                name = f"p{index}"
                bound[name] = values[index]
                parts.append(f":{name}")
                i += 1
                continue
        elif context in _QUOTES:
            # a doubled quote closes and reopens, so toggling handles escapes
            if char == context:
                context = None
        elif context == "--":
            if char == "\n":
                context = None
        elif pair == "*/":
            context = None
            parts.append(pair)
            i += 2
            continue
        parts.append("\\:" if char == ":" else char)
        i += 1
    if len(bound) != len(values):
        raise DatabaseError(
            f"Query binds {len(bound)} parameter(s) but {len(values)} were given",
            statement=query,
        )
    return "".join(parts), bound


class SQLAlchemyManager(Manager):
    """Manager executing statements through a SQLAlchemy engine."""

    def __init__(self, config: DatabaseConfig) -> None:
        """Initialize the manager.
        
        Args:
            config: Database configuration.
        """
        self.config = config
        self._engine: Optional[Engine] = None

        if self.config.port is None and self.config.type.default_port is not None:
            self.config = self.config.model_copy(update={'port': self.config.type.default_port})

    def build_connection_string(self) -> str:
        """Build the SQLAlchemy connection string.
        
        Raises:
            DatabaseError: If required configuration is missing.
        """
        db_type = self.config.type
        options = dict(self.config.options)

        if db_type == DatabaseType.SQLITE:
            if not self.config.path:
                raise DatabaseError("SQLite requires a database file path", database_type=db_type.value)
            if self.config.path == ":memory:":
                return f"{URL_SCHEMES[db_type]}://"
            db_path = Path(self.config.path)
            if not db_path.is_absolute():
                db_path = Path.cwd() / db_path
            db_path.parent.mkdir(parents=True, exist_ok=True)
            return f"{URL_SCHEMES[db_type]}:///{db_path}"

        if not all([self.config.host, self.config.database, self.config.username]):
            raise DatabaseError(
                f"{db_type.value} requires host, database and username",
                database_type=db_type.value,
            )

        credentials = quote_plus(self.config.username)
        if self.config.password:
            credentials += f":{quote_plus(self.config.password)}"
        address = f"{URL_SCHEMES[db_type]}://{credentials}@{self.config.host}:{self.config.port}"

        if db_type == DatabaseType.ORACLE:
            # Oracle names the service in the query string, not the path
            options.setdefault('service_name', self.config.database)
            connection_string = f"{address}/"
        else:
            if db_type == DatabaseType.MYSQL:
                options.setdefault('charset', 'utf8mb4')
            elif db_type == DatabaseType.SQLSERVER:
                options.setdefault('driver', 'ODBC Driver 18 for SQL Server')
            connection_string = f"{address}/{self.config.database}"

        # Engine-level options are not part of the URL
        options.pop('timeout', None)
        options.pop('connect_timeout', None)
        if options:
            option_string = "&".join(f"{k}={quote_plus(str(v))}" for k, v in options.items())
            connection_string += f"?{option_string}"

        return connection_string

    def _get_engine_options(self) -> Dict[str, Any]:
        """Get engine-specific options."""
        if self.config.type == DatabaseType.SQLITE:
            return {
                'connect_args': {
                    'check_same_thread': False,
                    'timeout': self.config.options.get('timeout', 30),
                }
            }
        if self.config.type in (DatabaseType.MYSQL, DatabaseType.POSTGRESQL):
            return {
                'pool_pre_ping': True,
                'connect_args': {
                    'connect_timeout': self.config.options.get('connect_timeout', 10),
                },
            }
        return {'pool_pre_ping': True}

    def get_engine(self) -> Engine:
        """Get or create the SQLAlchemy engine.
        
        Raises:
            DatabaseError: If engine creation fails.
        """
        if self._engine is None:
            try:
                self._engine = create_engine(self.build_connection_string(), **self._get_engine_options())
            except DatabaseError:
                raise
            except Exception as e:
                raise DatabaseError(
                    f"Failed to create database engine: {e}",
                    database_type=self.config.type.value,
                ) from e
        return self._engine

    @contextmanager
    def get_connection(self) -> Generator[Connection, None, None]:
        """Get a database connection that commits on success.
        
        Raises:
            DatabaseError: If the connection or a statement fails.
        """
        engine = self.get_engine()
        with engine.connect() as connection:
            try:
                yield connection
                connection.commit()
            except Exception:
                connection.rollback()
                raise

    def _run(self, query: str, parameters: Optional[Sequence[Any]], fetch_results: bool) -> QueryResult:
        sql, bound = bind_positional(query, parameters)
        start_time = time.time()
        logger.debug("Executing on %s: %s %s", self.config.type.value, query, list(parameters or []))
        try:
            with self.get_connection() as conn:
                result = conn.execute(text(sql), bound)
                execution_time = time.time() - start_time

                if result.returns_rows and fetch_results:
                    rows = result.fetchall()
                    columns = list(result.keys())
                    df = pd.DataFrame(rows, columns=columns) if rows else pd.DataFrame(columns=columns)
                    return QueryResult(
                        data=df,
                        rows_affected=len(rows),
                        execution_time=execution_time,
                        columns=columns,
                    )

                rows_affected = result.rowcount if result.rowcount >= 0 else 0
                return QueryResult(rows_affected=rows_affected, execution_time=execution_time)

        except SQLAlchemyError as e:
            execution_time = time.time() - start_time
            raise DatabaseError(
                f"Query execution failed after {execution_time:.2f}s: {e}",
                database_type=self.config.type.value,
                statement=query,
            ) from e

    def execute(self, statement: str) -> QueryResult:
        """Execute a statement that returns no rows."""
        return self._run(statement, None, fetch_results=False)

    def read_all(
        self,
        query: str,
        parameters: Optional[Sequence[Any]] = None,
        into: Any = dict,
    ) -> List[Any]:
        """Read every row of ``query`` in the requested shape."""
        result = self._run(query, parameters, fetch_results=True)
        return [shape_row(result.columns, row, into) for row in result.rows()]

    def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
