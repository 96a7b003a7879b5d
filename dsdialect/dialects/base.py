"""Datastore dialect contract, configuration and name normalization."""

from __future__ import annotations

import ntpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from dsdialect.db.base import Manager


@dataclass(frozen=True)
class DialectConfig:
    """SQL templates and result layout for one engine.

    ``sequence_sql`` takes the sequence/table name as ``{0}``; ``key_sql``
    takes the table as ``{0}`` and the schema as ``{1}``. ``tables_sql``
    binds the datastore through a ``?`` marker. Optional statements set to
    ``None`` mark the feature as unsupported; an empty string is accepted
    and treated the same way.
    """

    tables_sql: str
    sequence_sql: str
    schema_sql: str
    all_schema_sql: str
    key_sql: Optional[str] = None
    disable_foreign_key_check: Optional[str] = None
    enable_foreign_key_check: Optional[str] = None
    schema_resultset_index: int = 0

    def __post_init__(self) -> None:
        for field_name in ('key_sql', 'disable_foreign_key_check', 'enable_foreign_key_check'):
            if getattr(self, field_name) == "":
                object.__setattr__(self, field_name, None)
        if self.schema_resultset_index < 0:
            raise ValueError("schema_resultset_index must be >= 0")

    @property
    def supports_key_lookup(self) -> bool:
        return self.key_sql is not None

    @property
    def supports_foreign_key_check(self) -> bool:
        return self.disable_foreign_key_check is not None or self.enable_foreign_key_check is not None


@dataclass
class NameRecord:
    """Row holding a single ``name`` column."""

    name: str = ""


def normalize_name(name: str) -> str:
    """Return the last path segment of ``name`` when it looks like a path.

    Some engines report a database as its file path; both ``/`` and ``\\``
    are treated as separators.

    >>> normalize_name("/var/db/main.sqlite")
    'main.sqlite'
    >>> normalize_name("schema")
    'schema'
    """
    if "/" not in name and "\\" not in name:
        return name
    return ntpath.basename(name)


class DatastoreDialect(ABC):
    """Capabilities every engine dialect provides.

    Each operation receives the manager it should run against; failures
    raised by the manager propagate unchanged unless noted otherwise.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def can_create_datastore(self, manager: Manager) -> bool:
        """Return True if this dialect can create a datastore."""

    @abstractmethod
    def can_drop_datastore(self, manager: Manager) -> bool:
        """Return True if this dialect can drop a datastore."""

    @abstractmethod
    def create_datastore(self, manager: Manager, datastore: str) -> None:
        """Create a datastore (database or schema)."""

    @abstractmethod
    def drop_datastore(self, manager: Manager, datastore: str) -> None:
        """Drop a datastore (database or schema)."""

    @abstractmethod
    def drop_table(self, manager: Manager, datastore: str, table: str) -> None:
        """Drop ``table`` in ``datastore``."""

    @abstractmethod
    def create_table(self, manager: Manager, datastore: str, table: str, specification: str) -> None:
        """Create ``table`` from a column/constraint specification."""

    @abstractmethod
    def get_tables(self, manager: Manager, datastore: str) -> list[str]:
        """Return table names of ``datastore`` in result order."""

    @abstractmethod
    def get_key_name(self, manager: Manager, datastore: str, table: str) -> str:
        """Return comma-joined primary key columns, or "" when unknown."""

    @abstractmethod
    def get_datastores(self, manager: Manager) -> list[str]:
        """Return all datastore names visible to the manager."""

    @abstractmethod
    def get_current_datastore(self, manager: Manager) -> str:
        """Return the current datastore name, or "" when none is reported."""

    @abstractmethod
    def get_sequence(self, manager: Manager, name: str) -> int:
        """Return the sequence value for a table or sequence, or 0 when none."""

    @abstractmethod
    def disable_foreign_key_check(self, manager: Manager) -> None:
        """Disable foreign key checks; no-op when unsupported."""

    @abstractmethod
    def enable_foreign_key_check(self, manager: Manager) -> None:
        """Enable foreign key checks; no-op when unsupported."""

    @abstractmethod
    def can_persist_batch(self) -> bool:
        """Return True if the datastore can persist in batch."""
