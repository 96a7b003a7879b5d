"""SQLite dialect."""

import logging

from dsdialect.db.base import Manager
from dsdialect.dialects.base import DialectConfig
from dsdialect.dialects.sql import SQLDatastoreDialect

logger = logging.getLogger(__name__)

# LENGTH(?) keeps the datastore parameter bound; it is always true for a non-empty name.
SQLITE_TABLES_SQL = (
    "SELECT name FROM SQLITE_MASTER WHERE type='table' "
    "AND name NOT IN('sqlite_sequence') AND LENGTH(?) > 0"
)
SQLITE_SEQUENCE_SQL = (
    "SELECT COALESCE(MAX(name), 0) + 1   FROM "
    "(SELECT seq AS name FROM SQLITE_SEQUENCE WHERE name = '{0}')"
)
SQLITE_SCHEMA_SQL = "PRAGMA database_list"


class SQLiteDialect(SQLDatastoreDialect):
    """SQLite: a datastore is a file, so create is implicit and drop removes every table."""

    def __init__(self) -> None:
        super().__init__(
            "sqlite",
            DialectConfig(
                tables_sql=SQLITE_TABLES_SQL,
                sequence_sql=SQLITE_SEQUENCE_SQL,
                schema_sql=SQLITE_SCHEMA_SQL,
                all_schema_sql=SQLITE_SCHEMA_SQL,
                schema_resultset_index=2,
            ),
        )

    def create_datastore(self, manager: Manager, datastore: str) -> None:
        """No-op: the database file is created when first opened."""
        return None

    def drop_datastore(self, manager: Manager, datastore: str) -> None:
        """Drop every table of ``datastore``, stopping at the first failure."""
        tables = self.get_tables(manager, datastore)
        logger.info("Dropping %d table(s) from datastore %s on %s", len(tables), datastore, self.name)
        for table in tables:
            self.drop_table(manager, datastore, table)
