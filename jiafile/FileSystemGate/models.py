"""
FileSystemGate Pydantic models.

Defines the root confinement config, file descriptors, and operation results.
"""

from datetime import datetime
from typing import Optional, Any, Dict
from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorKind, FileGateError


class FileSystemConfig(BaseModel):
    """Process-wide confinement settings, built once at startup."""
    model_config = ConfigDict(frozen=True)

    root_path: Optional[str] = Field(
        default=None,
        description="Directory all paths are confined to (None = unconfined)"
    )

    @property
    def is_confined(self) -> bool:
        return bool(self.root_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")


class FileDescriptor(BaseModel):
    """Metadata describing a single filesystem entry."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    is_directory: bool = Field(alias="isDir")
    size_bytes: int = Field(default=0, alias="size")
    size_human: str = Field(default="0 B", alias="sizeHuman")
    path: str = Field(description="Resolved, confinement-checked path")
    extension: str = Field(default="", alias="ext")
    mime_type: str = Field(default="application/octet-stream", alias="mimeType")
    created_at: datetime = Field(alias="createTime")
    modified_at: datetime = Field(alias="modTime")
    accessed_at: datetime = Field(alias="accessTime")
    permission_string: str = Field(default="", alias="mode")
    is_hidden: bool = Field(default=False, alias="isHidden")
    is_symlink: bool = Field(default=False, alias="isSymlink")
    symlink_target: str = Field(default="", alias="symlinkTarget")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization (wire field names)."""
        return self.model_dump(mode="json", by_alias=True)


class OperationResult(BaseModel):
    """Result of a file system operation."""
    success: bool
    operation: str = Field(description="list/mkdir/touch/delete/move/copy/info/document")
    path: str
    message: str = ""
    data: Optional[Any] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, operation: str, path: str, message: str = "", data: Any = None) -> "OperationResult":
        return cls(success=True, operation=operation, path=path, message=message, data=data)

    @classmethod
    def from_error(cls, operation: str, path: str, error: FileGateError) -> "OperationResult":
        return cls(
            success=False,
            operation=operation,
            path=error.path or path,
            error=error.message,
            error_kind=error.kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return self.model_dump(mode="json")
