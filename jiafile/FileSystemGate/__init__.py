"""
FileSystemGate - Root-confined file system access for jia-file.

Provides:
- Path confinement to a single configured root directory
- File metadata (size, MIME type, hidden/symlink flags, timestamps)
- List, mkdir, touch, delete, move, copy, info and document operations
- Typed error kinds for every failure

Usage:
    from jiafile.FileSystemGate import FileSystemGate
    from jiafile.FileSystemGate.models import FileSystemConfig

    # Build once at startup
    gate = FileSystemGate(FileSystemConfig(root_path="/srv/files"))

    # List files
    result = gate.list("docs")

    # Create a file
    result = gate.create_file("/srv/files/notes.txt", b"Hello world")
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from jiafile.shared.gate import GateLogger, build_health_status

from .errors import (
    ErrorKind,
    FileGateError,
    InvalidArgumentError,
    OutsideRootError,
    NotFoundError,
    AlreadyExistsError,
    FileIOError,
    RootConfigurationError,
)
from .models import FileSystemConfig, FileDescriptor, OperationResult
from .security import PathResolver, validate_request_path
from . import operations as ops

# Logger for this gate
_log = GateLogger.get("FileSystemGate")


@runtime_checkable
class FileService(Protocol):
    """Operations the transport layer may invoke."""

    def list(self, path: str) -> OperationResult:
        ...

    def create_directory(self, path: str) -> OperationResult:
        ...

    def create_file(self, path: str, content: bytes = b"") -> OperationResult:
        ...

    def delete(self, path: str) -> OperationResult:
        ...

    def move(self, src: str, dst: str) -> OperationResult:
        ...

    def copy(self, src: str, dst: str) -> OperationResult:
        ...

    def get_info(self, path: str) -> OperationResult:
        ...

    def create_document(self, path: str, doc_type: str, content: str = "") -> OperationResult:
        ...


class FileSystemGate:
    """
    Main interface for jia-file's file system access.

    Every path argument goes through the PathResolver before the engine
    runs; if resolution fails the operation is never attempted. Without
    a root in the config the gate runs unconfined.
    """

    def __init__(self, config: Optional[FileSystemConfig] = None):
        """
        Args:
            config: Confinement settings (default: unconfined)

        Raises:
            RootConfigurationError: configured root is missing or not a directory
        """
        self._config = config or FileSystemConfig()
        self._resolver = PathResolver(self._config.root_path)

        if self._resolver.is_confined:
            _log.info(f"Confined to root {self._resolver.root}")
        else:
            _log.warning("No root configured - running unconfined")

    @property
    def config(self) -> FileSystemConfig:
        return self._config

    @property
    def root(self) -> Optional[str]:
        """Canonical root directory, or None when unconfined."""
        return self._resolver.root

    def resolve(self, path: str) -> str:
        """Resolve a caller path; raises FileGateError on rejection."""
        return self._resolver.resolve(path)

    def _run(
        self,
        operation: str,
        raw_path: str,
        action: Callable[[], OperationResult],
    ) -> OperationResult:
        """Execute an operation, converting engine errors to a failed result."""
        try:
            return action()
        except FileGateError as e:
            level = logging.ERROR if e.kind == ErrorKind.IO_ERROR else logging.WARNING
            _log.log(level, f"{operation} failed for {raw_path}: {e.message}")
            return OperationResult.from_error(operation, raw_path, e)

    # ==================== File Operations ====================

    def list(self, path: str) -> OperationResult:
        """
        List directory contents.

        Returns:
            OperationResult with a list of FileDescriptor in data
        """
        def action():
            resolved = self.resolve(path)
            files = ops.list_directory(resolved)
            return OperationResult.ok("list", resolved, f"Listed {len(files)} items", files)

        return self._run("list", path, action)

    def create_directory(self, path: str) -> OperationResult:
        """Create a directory and any missing parents."""
        def action():
            resolved = self.resolve(path)
            ops.create_directory(resolved)
            return OperationResult.ok("mkdir", resolved, "Directory created")

        return self._run("mkdir", path, action)

    def create_file(self, path: str, content: bytes = b"") -> OperationResult:
        """Create a new file; fails if the target already exists."""
        def action():
            resolved = self.resolve(path)
            ops.create_file(resolved, content)
            return OperationResult.ok(
                "touch", resolved, f"Created file ({len(content or b'')} bytes)"
            )

        return self._run("touch", path, action)

    def delete(self, path: str) -> OperationResult:
        """Delete a file or a whole directory tree."""
        def action():
            resolved = self.resolve(path)
            ops.delete_path(resolved)
            return OperationResult.ok("delete", resolved, "Deleted")

        return self._run("delete", path, action)

    def move(self, src: str, dst: str) -> OperationResult:
        """Rename src to dst; both must resolve inside the root."""
        def action():
            source, dest = self.resolve(src), self.resolve(dst)
            ops.move_path(source, dest)
            return OperationResult.ok("move", dest, f"Moved from {source} to {dest}")

        return self._run("move", src, action)

    def copy(self, src: str, dst: str) -> OperationResult:
        """Copy a single file from src to dst."""
        def action():
            source, dest = self.resolve(src), self.resolve(dst)
            ops.copy_file(source, dest)
            return OperationResult.ok("copy", dest, f"Copied from {source} to {dest}")

        return self._run("copy", src, action)

    def get_info(self, path: str) -> OperationResult:
        """
        Get information about exactly one path.

        Returns:
            OperationResult with a FileDescriptor in data
        """
        def action():
            resolved = self.resolve(path)
            return OperationResult.ok("info", resolved, data=ops.get_info(resolved))

        return self._run("info", path, action)

    def create_document(self, path: str, doc_type: str, content: str = "") -> OperationResult:
        """
        Create a document, completing the extension from doc_type.

        A path without an extension gets "." + doc_type appended before
        resolution. The content is written as UTF-8.
        """
        def action():
            if not doc_type or not doc_type.strip():
                raise InvalidArgumentError("Document type must not be empty", path)
            target = path
            if path and path.strip() and not os.path.splitext(path)[1]:
                target = f"{path}.{doc_type.strip().lstrip('.')}"
            resolved = self.resolve(target)
            ops.create_document(resolved, content)
            return OperationResult.ok("document", resolved, "Document created")

        return self._run("document", path, action)

    # ==================== Health Checks ====================

    def is_healthy(self) -> bool:
        """Check the root (if any) is still an accessible directory."""
        root = self._resolver.root
        if root is None:
            return True
        return os.path.isdir(root) and os.access(root, os.R_OK)

    def get_health_status(self) -> Dict[str, Any]:
        """Get detailed health information."""
        root = self._resolver.root
        checks = {}
        if root is not None:
            checks["root_accessible"] = self.is_healthy()

        return build_health_status(
            gate_name="FileSystemGate",
            initialized=True,
            dependencies=self.get_dependencies(),
            checks=checks,
            details={
                "confined": root is not None,
                "root_path": root,
            },
        )

    def get_dependencies(self) -> List[str]:
        """List external dependencies."""
        return ["filesystem"]


__all__ = [
    # Main interface
    "FileService",
    "FileSystemGate",
    # Models
    "FileSystemConfig",
    "FileDescriptor",
    "OperationResult",
    # Path handling
    "PathResolver",
    "validate_request_path",
    # Errors
    "ErrorKind",
    "FileGateError",
    "InvalidArgumentError",
    "OutsideRootError",
    "NotFoundError",
    "AlreadyExistsError",
    "FileIOError",
    "RootConfigurationError",
]
