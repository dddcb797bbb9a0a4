from __future__ import annotations

from jiafile.Config import ConfigManager
from jiafile.FileSystemGate import FileSystemGate
from jiafile.shared.gate import GateLogger

# Lifecycle logger
_log = GateLogger.get("Lifecycle")


async def startup(manager: ConfigManager, file_gate: FileSystemGate):
    """Apply logging settings and report the confinement mode."""
    log_file = GateLogger.configure(
        level=manager.get("LOG_LEVEL", "info"),
        log_dir=manager.get("LOG_DIR"),
    )
    if log_file:
        _log.info(f"Logging to {log_file}")

    if file_gate.root:
        _log.info(f"Serving files confined to {file_gate.root}")
    else:
        _log.warning("ROOT_PATH not set - file operations are unconfined (unsafe mode)")

    if not file_gate.is_healthy():
        _log.error("FileSystemGate root is not accessible")


async def shutdown():
    """Cleanup on server shutdown."""
    _log.info("Server stopped")


__all__ = ["startup", "shutdown"]
