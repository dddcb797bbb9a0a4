"""
Pytest configuration and fixtures for jia-file tests.
"""

import sys
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from jiafile.FileSystemGate import FileSystemGate
from jiafile.FileSystemGate.models import FileSystemConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests (symlinks resolved)."""
    temp_path = Path(tempfile.mkdtemp()).resolve()
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_folder(temp_dir: Path) -> Path:
    """Create a sample folder with test files."""
    folder = temp_dir / "sample_folder"
    folder.mkdir(parents=True, exist_ok=True)

    # Create some test files
    (folder / "readme.txt").write_text("Hello World")
    (folder / "data.json").write_text('{"key": "value"}')

    subfolder = folder / "subfolder"
    subfolder.mkdir()
    (subfolder / "nested.txt").write_text("Nested content")

    return folder


@pytest.fixture
def gate(sample_folder: Path) -> FileSystemGate:
    """A gate confined to the sample folder."""
    return FileSystemGate(FileSystemConfig(root_path=str(sample_folder)))


@pytest.fixture
def open_gate() -> FileSystemGate:
    """An unconfined gate."""
    return FileSystemGate(FileSystemConfig())


@pytest.fixture
def env_file(temp_dir: Path) -> Path:
    """Path for a .env file that tests may write."""
    return temp_dir / ".env"


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level state between tests."""
    yield

    # Reset Config
    try:
        import jiafile.Config as config_module
        config_module._manager = None
    except (ImportError, AttributeError):
        pass
