"""
Configuration schema for jia-file.

Defines all configurable options with metadata for validation
and documentation.
"""

from enum import Enum
from typing import Optional, List, Any
from dataclasses import dataclass


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    PATH = "path"          # File system path
    LIST = "list"          # Comma-separated values


class ConfigCategory(Enum):
    """Configuration categories for grouping."""
    FILESYSTEM = "filesystem"
    SERVER = "server"
    LOGGING = "logging"


@dataclass
class ConfigField:
    """Definition of a configuration field."""
    key: str
    description: str
    config_type: ConfigType
    category: ConfigCategory
    required: bool = False
    default: Any = None
    env_var: str = None          # Override env var name (defaults to key)
    options: List[str] = None    # For enumerated types

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === Filesystem ===
    ConfigField(
        key="ROOT_PATH",
        description="Directory all file operations are confined to (unset = unconfined, unsafe)",
        config_type=ConfigType.PATH,
        category=ConfigCategory.FILESYSTEM,
    ),
    ConfigField(
        key="MAX_FILE_SIZE",
        description="Maximum request body size in bytes accepted by /touch",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.FILESYSTEM,
        default=10 * 1024 * 1024,
    ),

    # === Server ===
    ConfigField(
        key="HOST",
        description="Server bind address",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        default="0.0.0.0",
    ),
    ConfigField(
        key="PORT",
        description="Server port",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SERVER,
        default=8190,
    ),
    ConfigField(
        key="ALLOWED_ORIGINS",
        description="CORS allowed origins (comma-separated)",
        config_type=ConfigType.LIST,
        category=ConfigCategory.SERVER,
        default=["*"],
    ),

    # === Logging ===
    ConfigField(
        key="LOG_LEVEL",
        description="Logging verbosity",
        config_type=ConfigType.STRING,
        category=ConfigCategory.LOGGING,
        default="info",
        options=["debug", "info", "warning", "error"],
    ),
    ConfigField(
        key="LOG_DIR",
        description="Directory for daily log files (empty = console only)",
        config_type=ConfigType.PATH,
        category=ConfigCategory.LOGGING,
        default="logs",
    ),
]


def get_schema_by_key(key: str) -> Optional[ConfigField]:
    """Get schema field by key."""
    for field in CONFIG_SCHEMA:
        if field.key == key:
            return field
    return None


def get_schema_by_category(category: ConfigCategory) -> List[ConfigField]:
    """Get all fields in a category."""
    return [f for f in CONFIG_SCHEMA if f.category == category]
