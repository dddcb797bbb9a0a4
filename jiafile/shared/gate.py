"""
Shared Gate utilities for jia-file.

Provides consolidated patterns for Gate implementations:
- GateLogger: Unified logging with Python's logging module
- GateHealth: Protocol for health checks
- build_health_status: Standard health status dict
- PathUtils: Common path operations
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import (
    Any,
    Dict,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)


LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(filename)s:%(lineno)d: %(message)s"


# =============================================================================
# GateLogger - Unified logging for all Gates
# =============================================================================


class GateLogger:
    """
    Unified logging for all Gates.

    Each gate gets its own namespaced logger under the "jiafile" root.
    """

    ROOT = "jiafile"

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False
    _file_handler: Optional[logging.Handler] = None

    @classmethod
    def _ensure_configured(cls):
        """Ensure basic logging is configured."""
        if cls._configured:
            return

        root_logger = logging.getLogger(cls.ROOT)
        if not root_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.INFO)

        cls._configured = True

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """
        Get a logger for a specific gate.

        Args:
            gate_name: Name of the gate (e.g., "FileSystemGate", "Config")

        Returns:
            Logger instance for the gate
        """
        cls._ensure_configured()

        logger_name = f"{cls.ROOT}.{gate_name}"
        if logger_name not in cls._loggers:
            cls._loggers[logger_name] = logging.getLogger(logger_name)

        return cls._loggers[logger_name]

    @classmethod
    def set_level(cls, level: int, gate_name: Optional[str] = None):
        """
        Set logging level.

        Args:
            level: Logging level (e.g., logging.DEBUG)
            gate_name: Specific gate to set level for, or None for all
        """
        if gate_name:
            cls.get(gate_name).setLevel(level)
        else:
            logging.getLogger(cls.ROOT).setLevel(level)

    @classmethod
    def configure(
        cls,
        level: Union[int, str] = logging.INFO,
        log_dir: Optional[Union[str, Path]] = None,
    ) -> Optional[Path]:
        """
        Apply the configured level and optionally log to a daily file.

        Args:
            level: Logging level or its name ("debug", "info", ...)
            log_dir: Directory for app-YYYY-MM-DD.log, or None for console only

        Returns:
            Path of the log file if file logging was enabled
        """
        cls._ensure_configured()

        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO
        cls.set_level(level)

        root_logger = logging.getLogger(cls.ROOT)
        if cls._file_handler is not None:
            root_logger.removeHandler(cls._file_handler)
            cls._file_handler.close()
            cls._file_handler = None

        if not log_dir:
            return None

        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"app-{date.today().isoformat()}.log"

        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(handler)
        cls._file_handler = handler
        return log_file


# =============================================================================
# GateHealth - Protocol for health checks
# =============================================================================


@runtime_checkable
class GateHealth(Protocol):
    """
    Protocol for gate health checking.

    Gates implement this to provide consistent health monitoring.
    """

    def is_healthy(self) -> bool:
        """Check if the gate is operational."""
        ...

    def get_health_status(self) -> Dict[str, Any]:
        """
        Get detailed health information.

        Returns:
            Dict with health details including:
            - healthy: bool
            - initialized: bool
            - dependencies: List[str]
            - details: Dict[str, Any]
        """
        ...

    def get_dependencies(self) -> List[str]:
        """List external dependencies (e.g., filesystem)."""
        ...


def build_health_status(
    gate_name: str,
    initialized: bool,
    dependencies: List[str],
    checks: Dict[str, bool],
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a standardized health status dict.

    Args:
        gate_name: Name of the gate
        initialized: Whether the gate is initialized
        dependencies: List of dependency names
        checks: Dict of check name -> passed
        details: Additional details

    Returns:
        Standardized health status dict
    """
    all_checks_passed = all(checks.values()) if checks else True

    return {
        "gate": gate_name,
        "healthy": initialized and all_checks_passed,
        "initialized": initialized,
        "dependencies": dependencies,
        "checks": checks,
        "details": details or {},
    }


# =============================================================================
# PathUtils - Common path operations
# =============================================================================


class PathUtils:
    """Common path utilities for Gates."""

    @staticmethod
    def get_project_root(anchor_file: str = ".env") -> Optional[Path]:
        """
        Find project root by searching up for an anchor file.

        Args:
            anchor_file: File that marks the project root

        Returns:
            Path to project root or None
        """
        current = Path.cwd()

        for parent in [current, *current.parents]:
            if (parent / anchor_file).exists():
                return parent

        return None


# =============================================================================
# Convenience exports
# =============================================================================


def get_logger(gate_name: str) -> logging.Logger:
    """Shortcut for GateLogger.get()."""
    return GateLogger.get(gate_name)
