"""MySQL dialect."""

from dsdialect.dialects.base import DialectConfig
from dsdialect.dialects.sql import SQLDatastoreDialect

DEFAULT_TABLES_SQL = "SELECT table_name AS name FROM  information_schema.tables WHERE table_schema = ?"
DEFAULT_SEQUENCE_SQL = (
    "SELECT auto_increment FROM information_schema.tables "
    "WHERE table_name = '{0}' AND table_schema = DATABASE()"
)
DEFAULT_KEY_SQL = (
    "SELECT column_name AS name FROM information_schema.key_column_usage "
    "WHERE table_name = '{0}' AND table_schema = '{1}' AND constraint_name='PRIMARY'"
)
DEFAULT_SCHEMA_SQL = "SELECT DATABASE() AS name"
DEFAULT_ALL_SCHEMA_SQL = "SELECT schema_name AS name FROM  information_schema.schemata"

MYSQL_DISABLE_FOREIGN_CHECK = "SET FOREIGN_KEY_CHECKS=0"
MYSQL_ENABLE_FOREIGN_CHECK = "SET FOREIGN_KEY_CHECKS=1"


class MySQLDialect(SQLDatastoreDialect):
    """MySQL: information_schema discovery, auto_increment sequences, FK toggling."""

    def __init__(self) -> None:
        super().__init__(
            "mysql",
            DialectConfig(
                tables_sql=DEFAULT_TABLES_SQL,
                sequence_sql=DEFAULT_SEQUENCE_SQL,
                schema_sql=DEFAULT_SCHEMA_SQL,
                all_schema_sql=DEFAULT_ALL_SCHEMA_SQL,
                key_sql=DEFAULT_KEY_SQL,
                disable_foreign_key_check=MYSQL_DISABLE_FOREIGN_CHECK,
                enable_foreign_key_check=MYSQL_ENABLE_FOREIGN_CHECK,
                schema_resultset_index=0,
            ),
        )
