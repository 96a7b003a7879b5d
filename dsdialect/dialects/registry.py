"""Dialect registry: look up the shared dialect instance for an engine."""

from __future__ import annotations

from typing import Iterable

from dsdialect.dialects.base import DatastoreDialect
from dsdialect.exceptions import UnsupportedDialectError


class DialectRegistry:
    """Registry of dialect instances keyed by engine name and aliases."""

    _dialects: dict[str, DatastoreDialect] = {}
    _aliases: dict[str, str] = {}

    @classmethod
    def register(cls, dialect: DatastoreDialect, aliases: Iterable[str] = ()) -> DatastoreDialect:
        """Register a dialect under its name and any aliases."""
        name = dialect.name.lower()
        cls._dialects[name] = dialect
        cls._aliases[name] = name
        for alias in aliases:
            cls._aliases[alias.lower()] = name
        return dialect

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a dialect and its aliases."""
        canonical = cls._aliases.get(name.lower(), name.lower())
        cls._dialects.pop(canonical, None)
        for alias in [a for a, target in cls._aliases.items() if target == canonical]:
            del cls._aliases[alias]

    @classmethod
    def get(cls, name: str) -> DatastoreDialect:
        """Get the dialect registered for an engine name or alias."""
        canonical = cls._aliases.get(str(name).strip().lower())
        if canonical is None:
            raise UnsupportedDialectError(name, available=cls.available())
        return cls._dialects[canonical]

    @classmethod
    def available(cls) -> list[str]:
        """List registered dialect names."""
        return sorted(cls._dialects.keys())
