"""Oracle dialect."""

from dsdialect.db.base import Manager
from dsdialect.dialects.base import DialectConfig
from dsdialect.dialects.sql import SQLDatastoreDialect

ORA_TABLES_SQL = "SELECT table_name AS name  FROM all_tables WHERE owner = ?"
ORA_SCHEMA_SQL = "SELECT sys_context( 'userenv', 'current_schema' ) AS name FROM dual"
ORA_SEQUENCE_SQL = "SELECT {0}.nextval AS name from dual"
ORA_ALL_SCHEMA_SQL = "SELECT schema_name AS name FROM all_tables GROUP BY 1"


class OracleDialect(SQLDatastoreDialect):
    """Oracle: a datastore is a schema."""

    def __init__(self) -> None:
        super().__init__(
            "oracle",
            DialectConfig(
                tables_sql=ORA_TABLES_SQL,
                sequence_sql=ORA_SEQUENCE_SQL,
                schema_sql=ORA_SCHEMA_SQL,
                all_schema_sql=ORA_ALL_SCHEMA_SQL,
            ),
        )

    def create_datastore(self, manager: Manager, datastore: str) -> None:
        self._execute(manager, "CREATE SCHEMA IF NOT EXISTS " + datastore)

    def drop_datastore(self, manager: Manager, datastore: str) -> None:
        self._execute(manager, "DROP SCHEMA " + datastore)
