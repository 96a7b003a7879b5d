"""Datastore dialects for the supported database engines."""

from dsdialect.config.models import DatabaseType
from dsdialect.dialects.adapters import (
    MySQLDialect,
    OracleDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    SQLServerDialect,
)
from dsdialect.dialects.base import DatastoreDialect, DialectConfig, NameRecord, normalize_name
from dsdialect.dialects.registry import DialectRegistry
from dsdialect.dialects.sql import SQLDatastoreDialect

# One shared, immutable instance per engine; names and aliases follow DatabaseType
MYSQL = DialectRegistry.register(MySQLDialect(), aliases=DatabaseType.MYSQL.aliases)
SQLITE = DialectRegistry.register(SQLiteDialect(), aliases=DatabaseType.SQLITE.aliases)
POSTGRESQL = DialectRegistry.register(PostgreSQLDialect(), aliases=DatabaseType.POSTGRESQL.aliases)
ORACLE = DialectRegistry.register(OracleDialect(), aliases=DatabaseType.ORACLE.aliases)
SQLSERVER = DialectRegistry.register(SQLServerDialect(), aliases=DatabaseType.SQLSERVER.aliases)


def get_dialect(name: str) -> DatastoreDialect:
    """Return the shared dialect for an engine name or alias."""
    return DialectRegistry.get(name)


__all__ = [
    "DatastoreDialect",
    "DialectConfig",
    "NameRecord",
    "normalize_name",
    "SQLDatastoreDialect",
    "DialectRegistry",
    "get_dialect",
    "MySQLDialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "OracleDialect",
    "SQLServerDialect",
    "MYSQL",
    "SQLITE",
    "POSTGRESQL",
    "ORACLE",
    "SQLSERVER",
]
