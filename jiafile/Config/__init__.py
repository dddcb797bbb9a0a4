"""
jia-file Configuration Manager.

Centralized configuration with:
- Schema-driven validation
- Environment variable and .env loading
- .env template generation

The core never reads configuration itself: the transport builds a
FileSystemConfig from here once at startup and hands it to the gate.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from dotenv import dotenv_values

from jiafile.shared.gate import GateLogger, PathUtils
from jiafile.FileSystemGate.models import FileSystemConfig

from jiafile.Config.schema import (
    CONFIG_SCHEMA,
    ConfigField,
    ConfigType,
    ConfigCategory,
    get_schema_by_key,
    get_schema_by_category,
)

_log = GateLogger.get("Config")


def default_env_file() -> Path:
    """The nearest .env walking up from the working directory, else ./.env."""
    root = PathUtils.get_project_root(".env")
    return (root or Path.cwd()) / ".env"


class ConfigManager:
    """
    Manages jia-file configuration.

    Priority order:
    1. Environment variables
    2. .env file
    3. Schema defaults
    """

    def __init__(
        self,
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            env_file: .env file to read (default: nearest .env upwards)
            environ: Environment mapping (default: os.environ)
        """
        self._env_file = Path(env_file) if env_file else default_env_file()
        self._environ = os.environ if environ is None else environ
        self._cache: Dict[str, Any] = {}
        self._load()

    @property
    def env_file(self) -> Path:
        return self._env_file

    def _load(self):
        """Load configuration from all sources."""
        file_values: Dict[str, Optional[str]] = {}
        if self._env_file.exists():
            file_values = dotenv_values(self._env_file)
            _log.debug(f"Loaded {len(file_values)} values from {self._env_file}")

        for field in CONFIG_SCHEMA:
            # Priority: env var > .env file > default
            value = self._environ.get(field.env_var)

            if value is None:
                value = file_values.get(field.env_var)

            if value is None:
                value = field.default

            self._cache[field.key] = self._convert_type(value, field)

    def _convert_type(self, value: Any, field: ConfigField) -> Any:
        """Convert value to the field's type, falling back to its default."""
        if value is None:
            return None

        config_type = field.config_type
        try:
            if config_type == ConfigType.INTEGER:
                return int(value)
            elif config_type == ConfigType.BOOLEAN:
                if isinstance(value, bool):
                    return value
                return str(value).lower() in ("true", "1", "yes", "on")
            elif config_type == ConfigType.LIST:
                if isinstance(value, list):
                    return value
                return [v.strip() for v in str(value).split(",") if v.strip()]
            else:
                return str(value).strip() if value else None
        except (ValueError, TypeError):
            _log.warning(f"Invalid value for {field.key}: {value!r}, using default")
            return field.default

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        value = self._cache.get(key)
        return default if value is None else value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return {field.key: self._cache.get(field.key) for field in CONFIG_SCHEMA}

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            (is_valid, list of error messages)
        """
        errors = []

        for field in CONFIG_SCHEMA:
            value = self._cache.get(field.key)

            if field.required and (value is None or value == ""):
                errors.append(f"Required config missing: {field.key}")
                continue

            if value and field.options and str(value).lower() not in field.options:
                errors.append(f"Invalid option for {field.key}: {value}")

        port = self._cache.get("PORT")
        if port is not None and not 0 < port < 65536:
            errors.append(f"PORT out of range: {port}")

        max_size = self._cache.get("MAX_FILE_SIZE")
        if max_size is not None and max_size < 0:
            errors.append(f"MAX_FILE_SIZE must not be negative: {max_size}")

        return len(errors) == 0, errors

    def filesystem_config(self) -> FileSystemConfig:
        """Build the gate's confinement settings."""
        return FileSystemConfig(root_path=self.get("ROOT_PATH") or None)

    def create_env_template(self) -> str:
        """Generate .env.example template."""
        lines = [
            "# jia-file Configuration",
            "# Copy this file to .env and fill in your values",
            "",
        ]

        for category in ConfigCategory:
            fields = get_schema_by_category(category)
            if not fields:
                continue

            lines.append(f"# === {category.value.replace('_', ' ').title()} ===")
            lines.append("")

            for field in fields:
                lines.append(f"# {field.description}")
                if field.options:
                    lines.append(f"# Options: {', '.join(field.options)}")

                default = field.default
                if isinstance(default, list):
                    default = ",".join(default)
                lines.append(f"{field.env_var}={'' if default is None else default}")
                lines.append("")

        return "\n".join(lines)


# Global instance
_manager: Optional[ConfigManager] = None


def get_manager() -> ConfigManager:
    """Get or create the global ConfigManager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def reload(env_file: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Reload configuration from files."""
    global _manager
    _manager = ConfigManager(env_file)
    return _manager


def get(key: str, default: Any = None) -> Any:
    """Get a config value."""
    return get_manager().get(key, default)


__all__ = [
    "ConfigManager",
    "ConfigField",
    "ConfigType",
    "ConfigCategory",
    "CONFIG_SCHEMA",
    "get_schema_by_key",
    "get_manager",
    "reload",
    "get",
]
