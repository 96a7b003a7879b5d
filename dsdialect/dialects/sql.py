"""Template-driven SQL dialect shared by every supported engine."""

from __future__ import annotations

import logging

from dsdialect.db.base import Manager, as_string
from dsdialect.dialects.base import DatastoreDialect, DialectConfig, NameRecord, normalize_name

logger = logging.getLogger(__name__)


class SQLDatastoreDialect(DatastoreDialect):
    """Default dialect implementation driven by a :class:`DialectConfig`.

    Table, sequence and key names are formatted into the SQL text; only the
    datastore filter of :meth:`get_tables` is sent as a bound parameter.
    Engine variants subclass this and override the operations whose
    generic statement does not apply.
    """

    def __init__(self, name: str, config: DialectConfig) -> None:
        self._name = name
        self._config = config

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> DialectConfig:
        return self._config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    def can_create_datastore(self, manager: Manager) -> bool:
        return True

    def can_drop_datastore(self, manager: Manager) -> bool:
        return True

    def _execute(self, manager: Manager, statement: str) -> None:
        logger.debug("%s: %s", self._name, statement)
        manager.execute(statement)

    def create_datastore(self, manager: Manager, datastore: str) -> None:
        logger.info("Creating datastore %s on %s", datastore, self._name)
        self._execute(manager, "CREATE DATABASE " + datastore)

    def drop_datastore(self, manager: Manager, datastore: str) -> None:
        logger.info("Dropping datastore %s on %s", datastore, self._name)
        self._execute(manager, "DROP DATABASE " + datastore)

    def drop_table(self, manager: Manager, datastore: str, table: str) -> None:
        self._execute(manager, "DROP TABLE " + table)

    def create_table(self, manager: Manager, datastore: str, table: str, specification: str) -> None:
        self._execute(manager, "CREATE TABLE " + table + "(" + specification + ")")

    def get_tables(self, manager: Manager, datastore: str) -> list[str]:
        logger.debug("%s: %s [%s]", self._name, self._config.tables_sql, datastore)
        rows = manager.read_all(self._config.tables_sql, [datastore], into=NameRecord)
        return [row.name for row in rows if row.name]

    def get_key_name(self, manager: Manager, datastore: str, table: str) -> str:
        """Return the primary key column(s) of ``table`` joined with commas.

        Lookup is best effort: an unsupported lookup and a failed read both
        yield "".
        """
        if not self._config.supports_key_lookup:
            return ""
        query = self._config.key_sql.format(table, datastore)
        logger.debug("%s: %s", self._name, query)
        try:
            records = manager.read_all(query, [], into=dict)
        except Exception as e:
            logger.warning("Key lookup for %s.%s failed on %s: %s", datastore, table, self._name, e)
            return ""
        return ",".join(as_string(record.get("name")) for record in records)

    def get_datastores(self, manager: Manager) -> list[str]:
        logger.debug("%s: %s", self._name, self._config.all_schema_sql)
        rows = manager.read_all(self._config.all_schema_sql, None, into=tuple)
        index = self._config.schema_resultset_index
        return [normalize_name(as_string(row[index])) for row in rows]

    def get_current_datastore(self, manager: Manager) -> str:
        logger.debug("%s: %s", self._name, self._config.schema_sql)
        row = manager.read_single(self._config.schema_sql, None, into=tuple)
        if row is None:
            return ""
        return normalize_name(as_string(row[self._config.schema_resultset_index]))

    def get_sequence(self, manager: Manager, name: str) -> int:
        query = self._config.sequence_sql.format(name)
        logger.debug("%s: %s", self._name, query)
        value = manager.read_single(query, [], into=int)
        if value is None:
            return 0
        return value

    def disable_foreign_key_check(self, manager: Manager) -> None:
        if self._config.disable_foreign_key_check is None:
            return
        self._execute(manager, self._config.disable_foreign_key_check)

    def enable_foreign_key_check(self, manager: Manager) -> None:
        if self._config.enable_foreign_key_check is None:
            return
        self._execute(manager, self._config.enable_foreign_key_check)

    def can_persist_batch(self) -> bool:
        return False
