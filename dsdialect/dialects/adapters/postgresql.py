"""PostgreSQL dialect."""

from dsdialect.dialects.adapters.mysql import DEFAULT_ALL_SCHEMA_SQL
from dsdialect.dialects.adapters.sqlite import SQLITE_TABLES_SQL
from dsdialect.dialects.base import DialectConfig
from dsdialect.dialects.sql import SQLDatastoreDialect

PG_SCHEMA_SQL = "SELECT current_schema() AS name"
PG_SEQUENCE_SQL = "SELECT currval({0}) + 1"


class PostgreSQLDialect(SQLDatastoreDialect):
    """PostgreSQL: current_schema() and currval() based lookups."""

    def __init__(self) -> None:
        super().__init__(
            "postgresql",
            DialectConfig(
                tables_sql=SQLITE_TABLES_SQL,
                sequence_sql=PG_SEQUENCE_SQL,
                schema_sql=PG_SCHEMA_SQL,
                all_schema_sql=DEFAULT_ALL_SCHEMA_SQL,
            ),
        )
