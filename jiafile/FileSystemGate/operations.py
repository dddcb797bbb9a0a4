"""
FileSystemGate file operations.

Provides list, mkdir, touch, delete, move, copy, info and document
operations on already-resolved paths. Confinement is checked by the
gate before any of these run.

Every function raises a FileGateError subclass on failure; nothing is
retried and nothing is rolled back.
"""

import os
import shutil
from typing import List

from jiafile.shared.gate import GateLogger

from .errors import (
    AlreadyExistsError,
    FileIOError,
    NotFoundError,
)
from .inspector import describe_entry, describe_path
from .models import FileDescriptor

_log = GateLogger.get("FileSystemGate")

DIR_MODE = 0o755
FILE_MODE = 0o644


def list_directory(path: str) -> List[FileDescriptor]:
    """
    List the direct children of a directory.

    Entries come back in the filesystem's own order. An entry whose
    metadata cannot be read is left out of the listing.

    Raises:
        NotFoundError: path does not exist
        FileIOError: directory cannot be read
    """
    if not os.path.lexists(path):
        raise NotFoundError(f"Directory does not exist: {path}", path)

    files: List[FileDescriptor] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    files.append(describe_entry(entry))
                except OSError as e:
                    _log.debug(f"Skipping unreadable entry {entry.path}: {e}")
                    continue
    except OSError as e:
        raise FileIOError.wrap("Error reading directory", path, e) from e

    return files


def create_directory(path: str) -> None:
    """
    Create a directory and any missing parents.

    Succeeds if the directory already exists.

    Raises:
        FileIOError: creation failed (including a file in the way)
    """
    try:
        os.makedirs(path, mode=DIR_MODE, exist_ok=True)
    except OSError as e:
        raise FileIOError.wrap("Failed to create directory", path, e) from e


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if not parent:
        return
    try:
        os.makedirs(parent, mode=DIR_MODE, exist_ok=True)
    except OSError as e:
        raise FileIOError.wrap("Failed to create parent directory", path, e) from e


def create_file(path: str, content: bytes = b"") -> None:
    """
    Create a new file with the given content.

    Parent directories are created as needed. An existing file is never
    touched.

    Raises:
        AlreadyExistsError: target already present
        FileIOError: any other failure
    """
    if os.path.lexists(path):
        raise AlreadyExistsError(f"File already exists: {path}", path)

    _ensure_parent(path)

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, FILE_MODE)
    except FileExistsError as e:
        raise AlreadyExistsError(f"File already exists: {path}", path) from e
    except OSError as e:
        raise FileIOError.wrap("Failed to create file", path, e) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content or b"")
    except OSError as e:
        raise FileIOError.wrap("Failed to write file", path, e) from e


def delete_path(path: str) -> None:
    """
    Delete a file, symlink or whole directory tree.

    Raises:
        NotFoundError: nothing at path
        FileIOError: removal failed, possibly part-way through a tree
    """
    if not os.path.lexists(path):
        raise NotFoundError(f"File or directory does not exist: {path}", path)

    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except OSError as e:
        raise FileIOError.wrap("Failed to delete", path, e) from e


def move_path(src: str, dst: str) -> None:
    """
    Rename src to dst.

    Atomic where the filesystem supports it; there is no copy fallback,
    so moves across devices fail.

    Raises:
        FileIOError: rename failed
    """
    try:
        os.rename(src, dst)
    except OSError as e:
        raise FileIOError.wrap(f"Failed to move to {dst}", src, e) from e


def copy_file(src: str, dst: str) -> None:
    """
    Stream-copy a single file byte for byte.

    The destination is created or truncated; its parent must exist.
    Directories are not copied, and a file is never copied onto itself
    (same path, hard link or symlink). A failure part-way may leave a
    partial destination behind.

    Raises:
        NotFoundError: source does not exist
        FileIOError: source is a directory, destination is the source,
            or reading/writing failed
    """
    if not os.path.lexists(src):
        raise NotFoundError(f"Source does not exist: {src}", src)
    if os.path.isdir(src):
        raise FileIOError(f"Source is a directory, only files can be copied: {src}", src)

    try:
        same_file = os.path.exists(dst) and os.path.samefile(src, dst)
    except OSError as e:
        raise FileIOError.wrap("Failed to read source", src, e) from e
    if same_file:
        raise FileIOError(f"Source and destination are the same file: {dst}", dst)

    try:
        with open(src, "rb") as src_file:
            try:
                with open(dst, "wb") as dst_file:
                    shutil.copyfileobj(src_file, dst_file)
            except OSError as e:
                raise FileIOError.wrap("Failed to write destination", dst, e) from e
    except OSError as e:
        raise FileIOError.wrap("Failed to read source", src, e) from e


def get_info(path: str) -> FileDescriptor:
    """
    Describe exactly the given path.

    Raises:
        NotFoundError: path does not exist
        FileIOError: metadata could not be read
    """
    try:
        return describe_path(path)
    except FileNotFoundError as e:
        raise NotFoundError(f"File or directory does not exist: {path}", path) from e
    except OSError as e:
        raise FileIOError.wrap("Failed to get file info", path, e) from e


def create_document(path: str, content: str = "") -> None:
    """
    Create a document file, writing content as UTF-8.

    Parent directories are created; an existing file is overwritten.

    Raises:
        FileIOError: creation or write failed
    """
    _ensure_parent(path)

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content or "")
    except OSError as e:
        raise FileIOError.wrap("Failed to create document", path, e) from e
