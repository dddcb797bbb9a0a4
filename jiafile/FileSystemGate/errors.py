"""
FileSystemGate error kinds.

The engine raises these; the gate facade turns them into failed
OperationResults and the transport maps the kind to a response code.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a file operation failure."""
    INVALID_ARGUMENT = "invalid_argument"
    OUTSIDE_ROOT = "outside_root"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    IO_ERROR = "io_error"


class FileGateError(Exception):
    """Base class for all file operation errors."""

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        """Convert to dict for logging and JSON serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "path": self.path,
            "cause": str(self.__cause__) if self.__cause__ else None,
        }


class InvalidArgumentError(FileGateError):
    """Raised for an empty or malformed path."""
    kind = ErrorKind.INVALID_ARGUMENT


class OutsideRootError(FileGateError):
    """Raised when a path escapes the configured root."""
    kind = ErrorKind.OUTSIDE_ROOT


class NotFoundError(FileGateError):
    """Raised when a path that must exist is absent."""
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(FileGateError):
    """Raised when creating a file that is already present."""
    kind = ErrorKind.ALREADY_EXISTS


class FileIOError(FileGateError):
    """Wraps any other underlying filesystem failure."""
    kind = ErrorKind.IO_ERROR

    @classmethod
    def wrap(cls, action: str, path: str, exc: OSError) -> "FileIOError":
        """Build an error for a failed action, chaining the native error."""
        error = cls(f"{action}: {exc.strerror or exc}", path)
        error.__cause__ = exc
        return error


class RootConfigurationError(Exception):
    """Raised at startup when the confinement root cannot be resolved."""
    pass
