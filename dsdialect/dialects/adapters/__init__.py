"""Engine-specific dialects."""

from dsdialect.dialects.adapters.mysql import MySQLDialect
from dsdialect.dialects.adapters.sqlite import SQLiteDialect
from dsdialect.dialects.adapters.postgresql import PostgreSQLDialect
from dsdialect.dialects.adapters.oracle import OracleDialect
from dsdialect.dialects.adapters.sqlserver import SQLServerDialect

__all__ = [
    "MySQLDialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "OracleDialect",
    "SQLServerDialect",
]
