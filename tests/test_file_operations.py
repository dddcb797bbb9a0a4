"""
Tests for FileSystemGate file operations on resolved paths.
"""

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from jiafile.FileSystemGate import operations as ops
from jiafile.FileSystemGate.errors import (
    AlreadyExistsError,
    FileIOError,
    NotFoundError,
)
from jiafile.FileSystemGate.inspector import describe_entry


class TestListDirectory:
    """Tests for listing."""

    def test_list_children(self, sample_folder: Path):
        """Listing returns exactly the direct children."""
        files = ops.list_directory(str(sample_folder))

        assert {f.name for f in files} == {"readme.txt", "data.json", "subfolder"}

    def test_list_matches_scandir_order(self, sample_folder: Path):
        """Entries keep the filesystem's own order."""
        expected = [entry.name for entry in os.scandir(sample_folder)]

        files = ops.list_directory(str(sample_folder))

        assert [f.name for f in files] == expected

    def test_list_entry_paths(self, sample_folder: Path):
        files = ops.list_directory(str(sample_folder))

        for f in files:
            assert f.path == str(sample_folder / f.name)

    def test_list_flags_directories(self, sample_folder: Path):
        files = {f.name: f for f in ops.list_directory(str(sample_folder))}

        assert files["subfolder"].is_directory is True
        assert files["readme.txt"].is_directory is False

    def test_list_empty_directory(self, temp_dir: Path):
        empty = temp_dir / "empty"
        empty.mkdir()

        assert ops.list_directory(str(empty)) == []

    def test_list_nonexistent(self, temp_dir: Path):
        with pytest.raises(NotFoundError):
            ops.list_directory(str(temp_dir / "missing"))

    def test_list_file_fails(self, sample_folder: Path):
        """Listing a file is an I/O error."""
        with pytest.raises(FileIOError):
            ops.list_directory(str(sample_folder / "readme.txt"))

    def test_unreadable_entry_skipped(self, sample_folder: Path):
        """An entry whose metadata cannot be read is left out."""
        def flaky_describe(entry):
            if entry.name == "data.json":
                raise PermissionError("denied")
            return describe_entry(entry)

        with patch.object(ops, "describe_entry", side_effect=flaky_describe):
            files = ops.list_directory(str(sample_folder))

        assert {f.name for f in files} == {"readme.txt", "subfolder"}

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="Needs POSIX permissions enforced for a non-root user",
    )
    def test_entries_without_search_permission_skipped(self, temp_dir: Path):
        """Children of a readable but unsearchable directory are dropped."""
        locked = temp_dir / "locked"
        locked.mkdir()
        (locked / "a.txt").write_text("a")
        (locked / "b.txt").write_text("b")
        os.chmod(locked, 0o444)

        try:
            files = ops.list_directory(str(locked))
        finally:
            os.chmod(locked, 0o755)

        assert files == []


class TestCreateDirectory:
    """Tests for mkdir."""

    def test_create_nested(self, temp_dir: Path):
        """Missing parents are created too."""
        target = temp_dir / "a" / "b" / "c"

        ops.create_directory(str(target))

        assert target.is_dir()

    def test_create_existing_is_idempotent(self, sample_folder: Path):
        target = sample_folder / "subfolder"

        ops.create_directory(str(target))
        ops.create_directory(str(target))

        assert target.is_dir()
        assert (target / "nested.txt").exists()

    def test_file_in_the_way(self, sample_folder: Path):
        with pytest.raises(FileIOError):
            ops.create_directory(str(sample_folder / "readme.txt"))


class TestCreateFile:
    """Tests for touch."""

    def test_create_empty(self, temp_dir: Path):
        target = temp_dir / "new.txt"

        ops.create_file(str(target))

        assert target.exists()
        assert target.read_bytes() == b""

    def test_create_with_content(self, temp_dir: Path):
        target = temp_dir / "new.txt"

        ops.create_file(str(target), b"hello")

        assert target.read_bytes() == b"hello"

    def test_create_makes_parents(self, temp_dir: Path):
        target = temp_dir / "x" / "y" / "new.txt"

        ops.create_file(str(target))

        assert target.exists()

    def test_existing_file_untouched(self, sample_folder: Path):
        """Creating over an existing file fails and keeps its content."""
        target = sample_folder / "readme.txt"

        with pytest.raises(AlreadyExistsError):
            ops.create_file(str(target), b"overwrite")

        assert target.read_text() == "Hello World"

    def test_existing_directory(self, sample_folder: Path):
        with pytest.raises(AlreadyExistsError):
            ops.create_file(str(sample_folder / "subfolder"))


class TestDeletePath:
    """Tests for delete."""

    def test_delete_file(self, sample_folder: Path):
        target = sample_folder / "readme.txt"

        ops.delete_path(str(target))

        assert not target.exists()

    def test_delete_tree(self, sample_folder: Path):
        """Directories are removed with all their contents."""
        target = sample_folder / "subfolder"

        ops.delete_path(str(target))

        assert not target.exists()

    def test_delete_missing(self, temp_dir: Path):
        with pytest.raises(NotFoundError):
            ops.delete_path(str(temp_dir / "missing"))

    @pytest.mark.skipif(os.name == "nt", reason="Symlinks not available")
    def test_delete_symlink_keeps_target(self, sample_folder: Path):
        link = sample_folder / "link"
        link.symlink_to(sample_folder / "subfolder", target_is_directory=True)

        ops.delete_path(str(link))

        assert not os.path.lexists(link)
        assert (sample_folder / "subfolder" / "nested.txt").exists()


class TestMovePath:
    """Tests for move."""

    def test_move_file(self, sample_folder: Path):
        """After a move the source is gone and the destination exists."""
        src = sample_folder / "readme.txt"
        dst = sample_folder / "moved.txt"

        ops.move_path(str(src), str(dst))

        assert not src.exists()
        assert dst.read_text() == "Hello World"

    def test_move_directory(self, sample_folder: Path):
        src = sample_folder / "subfolder"
        dst = sample_folder / "renamed"

        ops.move_path(str(src), str(dst))

        assert not src.exists()
        assert (dst / "nested.txt").exists()

    def test_move_missing_source(self, temp_dir: Path):
        """Every rename failure is an I/O error."""
        with pytest.raises(FileIOError):
            ops.move_path(str(temp_dir / "missing"), str(temp_dir / "dst"))

    def test_move_into_missing_parent(self, sample_folder: Path):
        with pytest.raises(FileIOError):
            ops.move_path(
                str(sample_folder / "readme.txt"),
                str(sample_folder / "no" / "such" / "dir.txt"),
            )


class TestCopyFile:
    """Tests for copy."""

    def test_copy_bytes(self, sample_folder: Path):
        """The copy is byte-identical and the source remains."""
        payload = bytes(range(256)) * 64
        src = sample_folder / "blob.bin"
        src.write_bytes(payload)
        dst = sample_folder / "blob-copy.bin"

        ops.copy_file(str(src), str(dst))

        assert src.read_bytes() == payload
        assert dst.read_bytes() == payload

    def test_copy_overwrites(self, sample_folder: Path):
        ops.copy_file(str(sample_folder / "readme.txt"), str(sample_folder / "data.json"))

        assert (sample_folder / "data.json").read_text() == "Hello World"

    def test_copy_missing_source(self, temp_dir: Path):
        with pytest.raises(NotFoundError):
            ops.copy_file(str(temp_dir / "missing"), str(temp_dir / "dst"))

    def test_copy_directory_rejected(self, sample_folder: Path):
        with pytest.raises(FileIOError):
            ops.copy_file(str(sample_folder / "subfolder"), str(sample_folder / "copy"))

        assert not (sample_folder / "copy").exists()

    def test_copy_into_missing_parent(self, sample_folder: Path):
        with pytest.raises(FileIOError):
            ops.copy_file(
                str(sample_folder / "readme.txt"),
                str(sample_folder / "no" / "such" / "copy.txt"),
            )

    def test_copy_onto_itself_rejected(self, sample_folder: Path):
        """Copying a file onto itself fails and leaves it intact."""
        target = sample_folder / "readme.txt"

        with pytest.raises(FileIOError):
            ops.copy_file(str(target), str(target))

        assert target.read_text() == "Hello World"

    @pytest.mark.skipif(os.name == "nt", reason="Symlinks not available")
    def test_copy_onto_symlink_to_source_rejected(self, sample_folder: Path):
        target = sample_folder / "readme.txt"
        link = sample_folder / "readme-link.txt"
        link.symlink_to(target)

        with pytest.raises(FileIOError):
            ops.copy_file(str(target), str(link))

        assert target.read_text() == "Hello World"

    def test_copy_onto_hard_link_rejected(self, sample_folder: Path):
        target = sample_folder / "readme.txt"
        link = sample_folder / "readme-hard.txt"
        os.link(target, link)

        with pytest.raises(FileIOError):
            ops.copy_file(str(target), str(link))

        assert target.read_text() == "Hello World"

    def test_stream_failure_is_io_error(self, sample_folder: Path):
        """A failure part-way through the copy is reported, not swallowed."""
        with patch("shutil.copyfileobj", side_effect=OSError(5, "Input/output error")):
            with pytest.raises(FileIOError) as exc_info:
                ops.copy_file(str(sample_folder / "readme.txt"), str(sample_folder / "copy.txt"))

        assert isinstance(exc_info.value.__cause__, OSError)
        assert (sample_folder / "readme.txt").read_text() == "Hello World"


class TestGetInfo:
    """Tests for info."""

    def test_info_file(self, sample_folder: Path):
        info = ops.get_info(str(sample_folder / "readme.txt"))

        assert info.name == "readme.txt"
        assert info.size_bytes == len("Hello World")

    def test_info_missing(self, temp_dir: Path):
        with pytest.raises(NotFoundError):
            ops.get_info(str(temp_dir / "missing"))


class TestCreateDocument:
    """Tests for document creation."""

    def test_writes_content(self, temp_dir: Path):
        target = temp_dir / "docs" / "plan.md"

        ops.create_document(str(target), "# Plan\n\nnaïve café")

        assert target.read_text(encoding="utf-8") == "# Plan\n\nnaïve café"

    def test_empty_content(self, temp_dir: Path):
        target = temp_dir / "empty.md"

        ops.create_document(str(target))

        assert target.read_bytes() == b""

    def test_overwrites_existing(self, sample_folder: Path):
        target = sample_folder / "readme.txt"

        ops.create_document(str(target), "replaced")

        assert target.read_text() == "replaced"

    def test_directory_in_the_way(self, sample_folder: Path):
        with pytest.raises(FileIOError):
            ops.create_document(str(sample_folder / "subfolder"), "x")
