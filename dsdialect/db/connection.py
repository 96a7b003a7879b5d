"""Connection management: named databases paired with their dialect."""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from dsdialect.config.models import DatabaseConfig, DatabaseType, DSDialectConfig
from dsdialect.db.base import Manager
from dsdialect.db.manager import SQLAlchemyManager
from dsdialect.dialects import DatastoreDialect, get_dialect
from dsdialect.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ManagerBuilder = Callable[[DatabaseConfig], Manager]


class ManagerFactory:
    """Factory for creating managers by database type."""

    _managers: Dict[DatabaseType, ManagerBuilder] = {
        db_type: SQLAlchemyManager for db_type in DatabaseType
    }

    @classmethod
    def create_manager(cls, config: DatabaseConfig) -> Manager:
        """Create a manager for a database configuration.

        Raises:
            DatabaseError: If no manager is registered for the database type.
        """
        builder = cls._managers.get(config.type)
        if builder is None:
            supported_types = [db_type.value for db_type in cls._managers]
            raise DatabaseError(
                f"Unsupported database type: {config.type.value}. "
                f"Supported types: {supported_types}",
                database_type=config.type.value,
            )
        return builder(config)

    @classmethod
    def register_manager(cls, db_type: DatabaseType, builder: ManagerBuilder) -> None:
        """Register a custom manager class (or factory callable) for a database type."""
        cls._managers[db_type] = builder

    @classmethod
    def unregister_manager(cls, db_type: DatabaseType) -> None:
        cls._managers.pop(db_type, None)

    @classmethod
    def get_supported_types(cls) -> List[DatabaseType]:
        return list(cls._managers.keys())


class ConnectionManager:
    """Creates one manager per configured database and resolves its dialect."""
    
    def __init__(self, config: DSDialectConfig) -> None:
        """Initialize connection manager.
        
        Args:
            config: dsdialect configuration.
        """
        self.config = config
        self._managers: Dict[str, Manager] = {}

    def _resolve(self, db_name: Optional[str]) -> Tuple[str, DatabaseConfig]:
        if db_name is None:
            db_name = self.config.default_database
            
        if not db_name:
            raise DatabaseError("No database specified and no default database configured")
        
        if db_name not in self.config.databases:
            available_dbs = list(self.config.databases.keys())
            raise DatabaseError(
                f"Database '{db_name}' not found in configuration. "
                f"Available databases: {available_dbs}"
            )
        return db_name, self.config.databases[db_name]
    
    def get_manager(self, db_name: Optional[str] = None) -> Manager:
        """Get the manager for a configured database.
        
        Args:
            db_name: Database connection name. If None, uses default database.
            
        Raises:
            DatabaseError: If the database is not configured.
        """
        db_name, db_config = self._resolve(db_name)
        if db_name not in self._managers:
            logger.debug("Creating manager for %s (%s)", db_name, db_config.type.value)
            self._managers[db_name] = ManagerFactory.create_manager(db_config)
        return self._managers[db_name]

    def get_dialect(self, db_name: Optional[str] = None) -> DatastoreDialect:
        """Get the dialect matching a configured database's engine."""
        _, db_config = self._resolve(db_name)
        return get_dialect(db_config.type.value)

    def get(self, db_name: Optional[str] = None) -> Tuple[DatastoreDialect, Manager]:
        """Get the ``(dialect, manager)`` pair for a configured database."""
        return self.get_dialect(db_name), self.get_manager(db_name)
    
    def close_connection(self, db_name: str) -> None:
        """Dispose a single database's manager."""
        manager = self._managers.pop(db_name, None)
        close = getattr(manager, 'close', None)
        if close is not None:
            close()

    def close_all(self) -> None:
        """Dispose every manager created so far."""
        for db_name in list(self._managers):
            self.close_connection(db_name)


# Global connection manager instance
_connection_manager: Optional[ConnectionManager] = None


def get_connection_manager(config: Optional[DSDialectConfig] = None) -> ConnectionManager:
    """Get the global connection manager instance.
    
    Passing a config different from the current one replaces the instance.
    
    Raises:
        DatabaseError: If no configuration is available.
    """
    global _connection_manager
    
    if _connection_manager is not None and config is not None and _connection_manager.config is not config:
        _connection_manager.close_all()
        _connection_manager = None

    if _connection_manager is None:
        if config is None:
            try:
                from dsdialect.config import get_config
                config = get_config()
            except Exception as e:
                raise DatabaseError("No configuration available for connection manager") from e
        
        _connection_manager = ConnectionManager(config)
    
    return _connection_manager


def reset_connection_manager() -> None:
    """Close and forget the global connection manager."""
    global _connection_manager
    if _connection_manager is not None:
        _connection_manager.close_all()
    _connection_manager = None
