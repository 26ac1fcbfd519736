"""
pytest configuration and fixtures.
"""

from pathlib import Path
from typing import Generator
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpmessage import ByteStream, MessageConfig, configure, get_config


@pytest.fixture
def memory_stream() -> Generator[ByteStream, None, None]:
    """Empty in-memory stream, readable and writable."""
    stream = ByteStream("memory:")
    yield stream
    stream.close()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """A file on disk with known contents."""
    path = tmp_path / "data.bin"
    path.write_bytes(b"hello world")
    return path


@pytest.fixture
def restore_config() -> Generator[MessageConfig, None, None]:
    """Put the process-wide configuration back after the test."""
    original = get_config()
    yield original
    configure(original)
