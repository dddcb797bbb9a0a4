"""
FileSystemGate security module.

Provides root confinement for caller paths and the request path guard
used at the HTTP boundary.
"""

import os
import re
from typing import Optional

from .errors import (
    InvalidArgumentError,
    OutsideRootError,
    RootConfigurationError,
)


_SEPARATORS = re.compile(r"[\\/]")


def normalize_path(path: str) -> str:
    """
    Collapse "." and ".." segments and redundant separators.

    Unlike os.path.abspath this never consults the working directory,
    so relative input stays relative.
    """
    return os.path.normpath(path)


def canonicalize_root(root_path: str) -> str:
    """
    Resolve the configured root to an absolute, symlink-free directory path.

    Raises:
        RootConfigurationError: if the root is missing or not a directory
    """
    if not root_path or not root_path.strip():
        raise RootConfigurationError("Root path is empty")

    root = os.path.realpath(os.path.expanduser(root_path))
    if not os.path.exists(root):
        raise RootConfigurationError(f"Root path does not exist: {root}")
    if not os.path.isdir(root):
        raise RootConfigurationError(f"Root path is not a directory: {root}")
    return root


def is_within(root: str, target: str) -> bool:
    """Check that target is root itself or lies beneath it."""
    try:
        return os.path.commonpath([root, target]) == root
    except ValueError:
        # Different drives on Windows
        return False


class PathResolver:
    """
    Resolves caller-supplied paths against an optional confinement root.

    With no root every path passes through unchanged. With a root,
    relative paths are joined onto it and absolute paths must already
    lie inside it, either as configured or in its canonical form.
    """

    def __init__(self, root_path: Optional[str] = None):
        self._root = None
        self._configured_root = None
        if root_path:
            self._root = canonicalize_root(root_path)
            # The configured form may reach the root through a symlink
            self._configured_root = normalize_path(
                os.path.abspath(os.path.expanduser(root_path))
            )

    @property
    def root(self) -> Optional[str]:
        """Canonical (symlink-free) root directory."""
        return self._root

    @property
    def configured_root(self) -> Optional[str]:
        """Root as configured, made absolute but not symlink-resolved."""
        return self._configured_root

    def _contains(self, path: str) -> bool:
        return is_within(self._root, path) or is_within(self._configured_root, path)

    @property
    def is_confined(self) -> bool:
        return self._root is not None

    def resolve(self, raw_path: str) -> str:
        """
        Turn a caller path into the path used for all subsequent I/O.

        Args:
            raw_path: Path as received from the caller

        Returns:
            Resolved path

        Raises:
            InvalidArgumentError: empty path
            OutsideRootError: path escapes the configured root
        """
        if raw_path is None or not raw_path.strip():
            raise InvalidArgumentError("Path must not be empty", raw_path)

        if self._root is None:
            return raw_path

        if os.path.isabs(raw_path):
            resolved = normalize_path(raw_path)
        else:
            resolved = normalize_path(os.path.join(self._configured_root, raw_path))

        if not self._contains(resolved):
            raise OutsideRootError(
                f"Path is outside root directory: {raw_path}", raw_path
            )
        return resolved


def has_traversal_segment(path: str) -> bool:
    """Check for ".." path segments on either separator style."""
    return ".." in _SEPARATORS.split(path)


def validate_request_path(path: str) -> str:
    """
    Guard applied to path parameters before dispatch.

    Independent of root confinement: the path must be absolute and must
    not contain parent-directory segments.

    Returns:
        The path unchanged

    Raises:
        InvalidArgumentError: if the path fails either check
    """
    if not path or not os.path.isabs(path):
        raise InvalidArgumentError("Path must be an absolute path", path)
    if has_traversal_segment(path):
        raise InvalidArgumentError("Path must not contain '..' segments", path)
    return path
