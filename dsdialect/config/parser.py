"""YAML configuration loading for dsdialect."""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from dsdialect.config.models import DatabaseType, DSDialectConfig, EnvironmentSettings
from dsdialect.exceptions import ConfigurationError

PathLike = Union[str, Path]

CONFIG_FILE_NAMES = ("dsdialect.yaml", "dsdialect.yml", "config/dsdialect.yaml")

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def interpolate(value: Any) -> Any:
    """Expand ``${VAR}`` and ``${VAR:-default}`` in every string of ``value``.

    Raises:
        ConfigurationError: If a variable without default is not set.
    """
    if isinstance(value, dict):
        return {key: interpolate(item) for key, item in value.items()}
    if isinstance(value, list):
        return [interpolate(item) for item in value]
    if not isinstance(value, str):
        return value

    def lookup(match: "re.Match[str]") -> str:
        name, sep, default = match.group(1).partition(':-')
        resolved = os.getenv(name.strip())
        if resolved is not None:
            return resolved
        if sep:
            return default.strip()
        raise ConfigurationError(f"Required environment variable '{name.strip()}' is not set")

    return ENV_VAR_PATTERN.sub(lookup, value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two mappings recursively; ``override`` wins on conflicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file '{path}' not found")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in '{path}': {e}")


def sample_config() -> Dict[str, Any]:
    """Starter configuration with one entry per supported engine."""
    databases: Dict[str, Any] = {}
    for db_type in DatabaseType:
        if db_type.default_port is None:
            databases[db_type.value] = {'type': db_type.value, 'path': f'./{db_type.value}.db'}
            continue
        databases[db_type.value] = {
            'type': db_type.value,
            'host': 'localhost',
            'port': db_type.default_port,
            'database': 'app',
            'username': 'app',
            'password': f'${{{db_type.value.upper()}_PASSWORD:-app}}',
        }
    return {'databases': databases, 'default_database': DatabaseType.SQLITE.value}


class ConfigParser:
    """Loads a YAML file into a validated ``DSDialectConfig``."""

    def __init__(self) -> None:
        self.env_settings = EnvironmentSettings()

    def candidate_paths(self) -> List[Path]:
        """Locations searched when no path is given, in order."""
        paths = [Path.cwd() / name for name in CONFIG_FILE_NAMES]
        if self.env_settings.config_file:
            paths.insert(0, Path(self.env_settings.config_file))
        return paths

    def find_config_file(self, config_path: Optional[PathLike] = None) -> Path:
        """Resolve the file to load.

        Raises:
            ConfigurationError: If no configuration file is found.
        """
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Configuration file '{config_path}' not found")
            return path

        candidates = self.candidate_paths()
        for path in candidates:
            if path.exists():
                return path
        raise ConfigurationError(f"No configuration file found in default locations: {candidates}")

    def load_raw(self, path: Path) -> Dict[str, Any]:
        """Read ``path`` with variables expanded and includes merged underneath."""
        raw = _read_yaml(path)
        if not raw:
            raise ConfigurationError(f"Configuration file '{path}' is empty")
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Configuration file '{path}' must contain a mapping")

        document = interpolate(raw)
        includes = document.pop('include', None) or []
        if not isinstance(includes, list):
            includes = [includes]

        merged: Dict[str, Any] = {}
        for include in includes:
            included = _read_yaml(path.parent / include)
            if included:
                merged = deep_merge(merged, interpolate(included))
        return deep_merge(merged, document)

    def load_config(self, config_path: Optional[PathLike] = None) -> DSDialectConfig:
        """Load and validate a configuration file.

        Args:
            config_path: Explicit file. If None, the default locations are searched.

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid.
        """
        document = self.load_raw(self.find_config_file(config_path))
        try:
            return DSDialectConfig(**document)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")
        except TypeError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}")


_config_parser = ConfigParser()
_loaded_config: Optional[DSDialectConfig] = None


def get_config(config_path: Optional[PathLike] = None, reload: bool = False) -> DSDialectConfig:
    """Get the process-wide configuration.

    An explicit ``config_path`` always reloads.
    """
    global _loaded_config

    if _loaded_config is None or reload or config_path is not None:
        _loaded_config = _config_parser.load_config(config_path)

    return _loaded_config


def create_sample_config(output_path: PathLike) -> None:
    """Write ``sample_config()`` to ``output_path`` as YAML."""
    with open(output_path, 'w', encoding='utf-8') as file:
        yaml.safe_dump(sample_config(), file, default_flow_style=False, sort_keys=False)
