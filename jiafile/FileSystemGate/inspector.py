"""
FileSystemGate metadata inspection.

Builds FileDescriptors: human-readable sizes, MIME classification
(extension table, then content sniffing, then name heuristics),
hidden/symlink flags, timestamps and permission strings.
"""

import mimetypes
import os
import re
import stat
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Optional

from .models import FileDescriptor

# Initialize mimetypes
mimetypes.init()

DIRECTORY_MIME_TYPE = "inode/directory"
BINARY_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"
GIT_MIME_TYPE = "application/x-git"
UTF8_TEXT_MIME_TYPE = "text/plain; charset=utf-8"

SNIFF_LENGTH = 512
SIZE_UNITS = "KMGTPE"

# Names that are plain text even without an extension
TEXT_NAME_HINTS = ("readme", "license", "makefile")

_HTML_TAGS = (
    b"!DOCTYPE HTML", b"HTML", b"HEAD", b"SCRIPT", b"IFRAME", b"H1", b"DIV",
    b"FONT", b"TABLE", b"A", b"STYLE", b"TITLE", b"B", b"BODY", b"BR", b"P",
)

# Leading-byte signatures, checked in order. Patterns are anchored at the
# start of the sample; "." stands for any byte.
CONTENT_SIGNATURES = [
    (re.compile(
        rb"\A[\t\n\x0c\r ]*<(?:" + b"|".join(_HTML_TAGS) + rb")[ >]",
        re.IGNORECASE,
    ), "text/html; charset=utf-8"),
    (re.compile(rb"\A[\t\n\x0c\r ]*<!--"), "text/html; charset=utf-8"),
    (re.compile(rb"\A[\t\n\x0c\r ]*<\?xml"), "text/xml; charset=utf-8"),
    (re.compile(rb"\A%PDF-"), "application/pdf"),
    (re.compile(rb"\A%!PS-Adobe-"), "application/postscript"),
    (re.compile(rb"\A\xfe\xff"), "text/plain; charset=utf-16be"),
    (re.compile(rb"\A\xff\xfe"), "text/plain; charset=utf-16le"),
    (re.compile(rb"\A\xef\xbb\xbf"), UTF8_TEXT_MIME_TYPE),
    (re.compile(rb"\A\x00\x00[\x01\x02]\x00"), "image/x-icon"),
    (re.compile(rb"\ABM"), "image/bmp"),
    (re.compile(rb"\AGIF8[79]a"), "image/gif"),
    (re.compile(rb"\ARIFF....WEBPVP", re.DOTALL), "image/webp"),
    (re.compile(rb"\A\x89PNG\r\n\x1a\n"), "image/png"),
    (re.compile(rb"\A\xff\xd8\xff"), "image/jpeg"),
    (re.compile(rb"\AFORM....AIFF", re.DOTALL), "audio/aiff"),
    (re.compile(rb"\AID3"), "audio/mpeg"),
    (re.compile(rb"\AOggS\x00"), "application/ogg"),
    (re.compile(rb"\AMThd\x00\x00\x00\x06"), "audio/midi"),
    (re.compile(rb"\ARIFF....AVI ", re.DOTALL), "video/avi"),
    (re.compile(rb"\ARIFF....WAVE", re.DOTALL), "audio/wave"),
    (re.compile(rb"\A\x1a\x45\xdf\xa3"), "video/webm"),
    (re.compile(rb"\A\x00\x01\x00\x00"), "font/ttf"),
    (re.compile(rb"\AOTTO"), "font/otf"),
    (re.compile(rb"\Attcf"), "font/collection"),
    (re.compile(rb"\AwOFF"), "font/woff"),
    (re.compile(rb"\AwOF2"), "font/woff2"),
    (re.compile(rb"\A\x1f\x8b\x08"), "application/x-gzip"),
    (re.compile(rb"\APK\x03\x04"), "application/zip"),
    (re.compile(rb"\ARar!\x1a\x07(?:\x00|\x01\x00)"), "application/x-rar-compressed"),
    (re.compile(rb"\A\x00asm"), "application/wasm"),
]

# Control bytes that never occur in text
_BINARY_BYTES = re.compile(rb"[\x00-\x08\x0b\x0e-\x1a\x1c-\x1f]")


def format_file_size(size: int) -> str:
    """
    Render a byte count with base-1024 units.

    Examples:
        0 -> "0 B", 1536 -> "1.5 KB", 1048576 -> "1.0 MB"
    """
    unit = 1024
    if size < unit:
        return f"{size} B"

    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {SIZE_UNITS[exp]}B"


def _is_mp4(data: bytes) -> bool:
    if len(data) < 12:
        return False
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return False
    if data[4:8] != b"ftyp":
        return False
    for start in range(8, box_size, 4):
        if start == 12:
            # Skip the minor version field
            continue
        if data[start:start + 3] == b"mp4":
            return True
    return False


def sniff_content_type(data: bytes) -> str:
    """
    Classify content by its leading bytes.

    Args:
        data: Up to SNIFF_LENGTH bytes from the start of the file

    Returns:
        MIME type; "application/octet-stream" when nothing matched and
        the sample looks binary
    """
    data = data[:SNIFF_LENGTH]

    for pattern, mime_type in CONTENT_SIGNATURES:
        if pattern.match(data):
            return mime_type

    if _is_mp4(data):
        return "video/mp4"

    if not _BINARY_BYTES.search(data):
        return UTF8_TEXT_MIME_TYPE

    return BINARY_MIME_TYPE


def guess_type_by_extension(extension: str) -> Optional[str]:
    """Look an extension (with leading dot) up in the standard table."""
    if not extension:
        return None
    return mimetypes.types_map.get(extension) or mimetypes.types_map.get(extension.lower())


def classify_by_name(path: str) -> Optional[str]:
    """Name-based overrides for well-known extensionless files."""
    name = os.path.basename(path)
    lowered = name.lower()

    if name.startswith("."):
        return TEXT_MIME_TYPE
    if any(hint in lowered for hint in TEXT_NAME_HINTS):
        return TEXT_MIME_TYPE
    if ".git" in PurePath(path).parts:
        return GIT_MIME_TYPE
    return None


def detect_mime_type(path: str, is_dir: bool = False) -> str:
    """
    Best-effort MIME classification for a path.

    Directories first, then the extension table, then content sniffing
    with name heuristics when the content looks like generic binary.
    Unreadable files are generic binary.
    """
    if is_dir:
        return DIRECTORY_MIME_TYPE

    _, ext = os.path.splitext(path)
    mime_type = guess_type_by_extension(ext)
    if mime_type:
        return mime_type

    try:
        with open(path, "rb") as f:
            sample = f.read(SNIFF_LENGTH)
    except OSError:
        return BINARY_MIME_TYPE

    mime_type = sniff_content_type(sample)
    if mime_type == BINARY_MIME_TYPE:
        return classify_by_name(path) or BINARY_MIME_TYPE
    return mime_type


def read_symlink_target(path: str) -> str:
    """Read a link target, returning "" when it cannot be read."""
    try:
        return os.readlink(path)
    except OSError:
        return ""


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def build_descriptor(path: str, st: os.stat_result, name: Optional[str] = None) -> FileDescriptor:
    """
    Build a descriptor from an lstat result.

    Creation time comes from st_birthtime where the platform has it and
    falls back to modification time elsewhere.
    """
    name = name if name is not None else os.path.basename(os.path.normpath(path))
    is_dir = stat.S_ISDIR(st.st_mode)
    is_symlink = stat.S_ISLNK(st.st_mode)

    modified_at = _timestamp(st.st_mtime)
    birthtime = getattr(st, "st_birthtime", None)
    created_at = _timestamp(birthtime) if birthtime else modified_at
    accessed_at = _timestamp(st.st_atime) if st.st_atime else modified_at

    return FileDescriptor(
        name=name,
        is_directory=is_dir,
        size_bytes=st.st_size,
        size_human=format_file_size(st.st_size),
        path=path,
        extension=os.path.splitext(name)[1],
        mime_type=detect_mime_type(path, is_dir),
        created_at=created_at,
        modified_at=modified_at,
        accessed_at=accessed_at,
        permission_string=stat.filemode(st.st_mode),
        is_hidden=name.startswith("."),
        is_symlink=is_symlink,
        symlink_target=read_symlink_target(path) if is_symlink else "",
    )


def describe_path(path: str) -> FileDescriptor:
    """
    Describe exactly one path without following a final symlink.

    Raises:
        OSError: if the path cannot be stat-ed
    """
    return build_descriptor(path, os.lstat(path))


def describe_entry(entry: os.DirEntry) -> FileDescriptor:
    """
    Describe a directory entry produced by os.scandir.

    Raises:
        OSError: if the entry's metadata cannot be read
    """
    return build_descriptor(entry.path, entry.stat(follow_symlinks=False), name=entry.name)
