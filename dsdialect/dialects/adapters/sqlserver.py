"""SQL Server dialect."""

from dsdialect.dialects.adapters.mysql import DEFAULT_ALL_SCHEMA_SQL, DEFAULT_TABLES_SQL
from dsdialect.dialects.base import DialectConfig
from dsdialect.dialects.sql import SQLDatastoreDialect

MS_SCHEMA_SQL = "SELECT SCHEMA_NAME() AS name"
MS_SEQUENCE_SQL = "SELECT current_value FROM sys.sequences WHERE  name = '{0}'"


class SQLServerDialect(SQLDatastoreDialect):
    """SQL Server: information_schema tables, sys.sequences lookup."""

    def __init__(self) -> None:
        super().__init__(
            "sqlserver",
            DialectConfig(
                tables_sql=DEFAULT_TABLES_SQL,
                sequence_sql=MS_SEQUENCE_SQL,
                schema_sql=MS_SCHEMA_SQL,
                all_schema_sql=DEFAULT_ALL_SCHEMA_SQL,
            ),
        )
