"""Pydantic models for dsdialect configuration."""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    model_validator,
    AliasChoices,
    ConfigDict,
)
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """Supported database engines."""
    MYSQL = "mysql"
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    ORACLE = "oracle"
    SQLSERVER = "sqlserver"

    @property
    def aliases(self) -> Tuple[str, ...]:
        """Alternative names accepted for this engine."""
        return ENGINE_ALIASES.get(self, ())

    @property
    def default_port(self) -> Optional[int]:
        """Default server port, or None for file-based engines."""
        return DEFAULT_PORTS.get(self)

    @classmethod
    def from_name(cls, name: str) -> "DatabaseType":
        """Resolve an engine name or alias, case-insensitively."""
        lowered = name.strip().lower()
        for db_type in cls:
            if lowered == db_type.value or lowered in db_type.aliases:
                return db_type
        raise ValueError(f"Unknown database type '{name}'")


ENGINE_ALIASES: Dict[DatabaseType, Tuple[str, ...]] = {
    DatabaseType.SQLITE: ("sqlite3",),
    DatabaseType.POSTGRESQL: ("postgres", "pg"),
    DatabaseType.ORACLE: ("ora",),
    DatabaseType.SQLSERVER: ("mssql",),
}

DEFAULT_PORTS: Dict[DatabaseType, int] = {
    DatabaseType.MYSQL: 3306,
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.ORACLE: 1521,
    DatabaseType.SQLSERVER: 1433,
}


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    model_config = ConfigDict(populate_by_name=True)

    type: DatabaseType = Field(validation_alias=AliasChoices("type", "driver"))
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    path: Optional[str] = None  # For SQLite
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        """Accept common engine aliases such as 'postgres' or 'mssql'."""
        if isinstance(v, str) and not isinstance(v, DatabaseType):
            try:
                return DatabaseType.from_name(v)
            except ValueError:
                return v
        return v

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        """Validate port number range."""
        if v is not None and (v < 1 or v > 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @model_validator(mode='after')
    def validate_database_config(self):
        """Validate engine-specific required fields."""
        if self.type == DatabaseType.SQLITE:
            if not (self.path or self.database):
                raise ValueError("SQLite databases require a 'path' or 'database' field")
            if not self.path:
                # Allow configs that specify `database` instead of `path`
                object.__setattr__(self, "path", self.database)
            return self

        for field in ('host', 'database', 'username'):
            if not getattr(self, field):
                raise ValueError(f"{self.type.value} databases require '{field}' field")
        return self


class DSDialectConfig(BaseModel):
    """Main configuration model for dsdialect."""
    databases: Dict[str, DatabaseConfig]
    default_database: Optional[str] = None

    @model_validator(mode='after')
    def validate_default_database(self):
        """Ensure default_database exists in databases."""
        if self.default_database and self.default_database not in self.databases:
            raise ValueError(f"default_database '{self.default_database}' not found in databases")
        return self

    @model_validator(mode='after') 
    def set_default_database(self):
        """Set default database if not specified."""
        if not self.default_database and self.databases:
            self.default_database = next(iter(self.databases))
        return self


class EnvironmentSettings(BaseSettings):
    """Environment-specific settings."""

    model_config = SettingsConfigDict(env_prefix="DSDIALECT_", case_sensitive=False)

    log_level: str = Field(default="INFO")
    config_file: Optional[str] = Field(default=None)
