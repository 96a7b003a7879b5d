"""Configuration management for dsdialect."""

from dsdialect.config.models import (
    DatabaseType,
    DatabaseConfig, 
    DSDialectConfig,
    EnvironmentSettings,
)
from dsdialect.config.parser import (
    ConfigParser,
    get_config,
    sample_config,
    create_sample_config,
)

__all__ = [
    # Models
    "DatabaseType",
    "DatabaseConfig",
    "DSDialectConfig",
    "EnvironmentSettings",
    # Parser
    "ConfigParser",
    "get_config",
    "sample_config",
    "create_sample_config",
]
