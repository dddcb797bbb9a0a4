"""
Shared utilities for jia-file.

Provides access to common functionality used across Gate implementations.
"""

from jiafile.shared.gate import (
    GateLogger,
    GateHealth,
    PathUtils,
    build_health_status,
    get_logger,
)

__all__ = [
    "GateLogger",
    "GateHealth",
    "PathUtils",
    "build_health_status",
    "get_logger",
]
