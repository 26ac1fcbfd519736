"""
Unit tests for ByteStream.
"""

import io
import os

import pytest

from httpmessage.core.stream import ByteStream
from httpmessage.errors import (
    InvalidInput,
    IOFailure,
    NotReadable,
    NotSeekable,
    NotWritable,
    StreamError,
)


@pytest.fixture
def pipe():
    """(reader, writer) binary handles of an OS pipe."""
    read_fd, write_fd = os.pipe()
    reader = open(read_fd, "rb")
    writer = open(write_fd, "wb")
    yield reader, writer
    for handle in (reader, writer):
        if not handle.closed:
            handle.close()


class TestAttach:
    """Tests for opening locators and attaching handles."""

    def test_memory_locator(self):
        stream = ByteStream("memory:")
        assert stream.is_readable()
        assert stream.is_writable()
        assert stream.is_seekable()

    def test_temp_locator(self):
        with ByteStream("temp:") as stream:
            stream.write(b"abc")
            stream.rewind()
            assert stream.read(3) == b"abc"

    def test_path_locator(self, data_file):
        with ByteStream(str(data_file)) as stream:
            assert stream.get_contents() == b"hello world"

    def test_attach_handle(self):
        handle = io.BytesIO(b"data")
        stream = ByteStream(handle)
        assert stream.read(4) == b"data"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInput, match="Cannot open"):
            ByteStream(str(tmp_path / "missing"), "rb")

    def test_empty_locator(self):
        with pytest.raises(InvalidInput):
            ByteStream("")

    @pytest.mark.parametrize("source", [None, 1, False, [], b"memory:"])
    def test_wrong_source_type(self, source):
        with pytest.raises(InvalidInput):
            ByteStream(source)


class TestModes:
    """Readability and writability follow the open mode."""

    @pytest.mark.parametrize("mode,readable,writable", [
        ("r", True, False),
        ("r+", True, True),
        ("w", False, True),
        ("w+", True, True),
        ("a", False, True),
        ("a+", True, True),
        ("rb", True, False),
        ("r+b", True, True),
        ("wb", False, True),
        ("w+b", True, True),
        ("ab", False, True),
        ("a+b", True, True),
    ])
    def test_existing_file(self, data_file, mode, readable, writable):
        with ByteStream(str(data_file), mode) as stream:
            assert stream.is_readable() is readable
            assert stream.is_writable() is writable

    @pytest.mark.parametrize("mode,readable", [
        ("x", False),
        ("x+", True),
        ("xb", False),
        ("x+b", True),
    ])
    def test_exclusive_create(self, tmp_path, mode, readable):
        with ByteStream(str(tmp_path / "new"), mode) as stream:
            assert stream.is_readable() is readable
            assert stream.is_writable() is True

    def test_buffer_without_mode_attribute(self):
        """BytesIO has no mode; it is derived from its capabilities."""
        stream = ByteStream(io.BytesIO())
        assert stream.get_metadata("mode") == "rb+"

    def test_unattached_has_no_capabilities(self, memory_stream):
        memory_stream.close()
        assert not memory_stream.is_readable()
        assert not memory_stream.is_writable()
        assert not memory_stream.is_seekable()

    def test_seekable(self, data_file, pipe):
        reader, _ = pipe
        assert ByteStream("memory:").is_seekable()
        assert ByteStream(str(data_file)).is_seekable()
        assert not ByteStream(reader).is_seekable()


class TestLifecycle:
    """Tests for detach and close."""

    def test_detach_returns_handle_once(self):
        handle = io.BytesIO()
        stream = ByteStream(handle)

        assert stream.detach() is handle
        assert stream.detach() is None
        assert not handle.closed

    def test_close_closes_handle(self, data_file):
        handle = open(data_file, "rb")
        stream = ByteStream(handle)
        stream.close()

        assert handle.closed
        assert stream.get_metadata() is None

    def test_close_twice_is_noop(self, memory_stream):
        memory_stream.close()
        memory_stream.close()

    def test_context_manager_closes(self, data_file):
        handle = open(data_file, "rb")
        with ByteStream(handle):
            pass
        assert handle.closed

    def test_closed_stream_rejects_io(self, memory_stream):
        """After close() every operation fails and the stream looks empty."""
        memory_stream.write(b"data")
        memory_stream.close()

        with pytest.raises(NotReadable):
            memory_stream.read(1)
        with pytest.raises(NotWritable):
            memory_stream.write(b"x")
        with pytest.raises(NotSeekable):
            memory_stream.seek(0)
        with pytest.raises(IOFailure):
            memory_stream.tell()
        assert memory_stream.eof() is True
        assert memory_stream.get_size() is None

    def test_collected_stream_closes_handle(self, data_file):
        handle = open(data_file, "rb")
        stream = ByteStream(handle)
        del stream
        assert handle.closed

    def test_collected_detached_stream_leaves_handle_open(self, data_file):
        handle = open(data_file, "rb")
        stream = ByteStream(handle)
        stream.detach()
        del stream
        assert not handle.closed
        handle.close()


class TestMetadata:
    """Metadata and size."""

    def test_metadata(self, data_file):
        with ByteStream(str(data_file), "rb") as stream:
            metadata = stream.get_metadata()
            assert metadata["mode"] == "rb"
            assert metadata["seekable"] is True
            assert metadata["closed"] is False
            assert metadata["name"] == str(data_file)

    def test_unknown_key(self, memory_stream):
        assert memory_stream.get_metadata("foo_bar") is None

    def test_size(self, data_file):
        with ByteStream(str(data_file)) as stream:
            assert stream.get_size() == 11

    def test_size_includes_pending_writes(self, tmp_path):
        """Buffered data is flushed before measuring."""
        with ByteStream(str(tmp_path / "out"), "wb") as stream:
            stream.write(b"12345")
            assert stream.get_size() == 5

    def test_size_of_memory_buffer(self, memory_stream):
        memory_stream.write(b"abc")
        assert memory_stream.get_size() == 3
        assert memory_stream.tell() == 3

    def test_size_unattached(self, memory_stream):
        memory_stream.detach()
        assert memory_stream.get_size() is None


class TestPosition:
    """tell, eof, seek and rewind."""

    def test_tell(self, data_file):
        handle = open(data_file, "rb")
        handle.read(7)
        with ByteStream(handle) as stream:
            assert stream.tell() == 7

    def test_tell_unattached(self, memory_stream):
        memory_stream.detach()
        with pytest.raises(IOFailure):
            memory_stream.tell()

    def test_eof(self, data_file):
        handle = open(data_file, "rb")
        stream = ByteStream(handle)

        assert not stream.eof()
        handle.read()
        assert stream.eof()

        stream.detach()
        assert stream.eof()
        handle.close()

    def test_eof_on_pipe(self, pipe):
        """Non-seekable handles peek one byte ahead."""
        reader, writer = pipe
        writer.write(b"x")
        writer.close()

        stream = ByteStream(reader)
        assert not stream.eof()
        stream.read(1)
        assert stream.eof()

    def test_seek_and_rewind(self, data_file):
        with ByteStream(str(data_file)) as stream:
            stream.seek(6)
            assert stream.read(5) == b"world"
            stream.seek(-5, os.SEEK_END)
            assert stream.read(5) == b"world"
            stream.rewind()
            assert stream.tell() == 0

    def test_seek_not_seekable(self, pipe):
        reader, _ = pipe
        with pytest.raises(NotSeekable):
            ByteStream(reader).seek(0)

    def test_seek_negative(self, memory_stream):
        with pytest.raises(IOFailure):
            memory_stream.seek(-1)


class TestReadWrite:
    """Tests for reading and writing."""

    def test_read(self, tmp_path):
        handle = open(tmp_path / "rw", "w+b")
        stream = ByteStream(handle)
        handle.write(b"test")
        handle.seek(0)

        assert stream.read(4) == b"test"
        stream.close()

    def test_short_read(self, memory_stream):
        memory_stream.write(b"ab")
        memory_stream.rewind()
        assert memory_stream.read(10) == b"ab"
        assert memory_stream.read(10) == b""

    def test_read_not_readable(self, tmp_path):
        with ByteStream(str(tmp_path / "out"), "wb") as stream:
            with pytest.raises(NotReadable):
                stream.read(1)

    def test_write_returns_count(self, memory_stream):
        assert memory_stream.write(b"hello") == 5

    def test_write_str_is_utf8(self, memory_stream):
        assert memory_stream.write("益") == 3
        memory_stream.rewind()
        assert memory_stream.get_contents() == "益".encode("utf-8")

    def test_write_not_writable(self, data_file):
        with ByteStream(str(data_file), "rb") as stream:
            with pytest.raises(NotWritable):
                stream.write(b"x")

    def test_get_contents_from_position(self, data_file):
        with ByteStream(str(data_file)) as stream:
            stream.seek(6)
            assert stream.get_contents() == b"world"

    def test_get_contents_not_readable(self, tmp_path):
        with ByteStream(str(tmp_path / "out"), "wb") as stream:
            with pytest.raises(NotReadable):
                stream.get_contents()

    def test_errors_share_a_base(self):
        assert issubclass(NotReadable, StreamError)
        assert issubclass(NotSeekable, RuntimeError)


class TestConversions:
    """bytes(), str() and repr()."""

    def test_bytes_reads_from_start(self, data_file):
        with ByteStream(str(data_file)) as stream:
            stream.seek(6)
            assert bytes(stream) == b"hello world"

    def test_str(self, data_file):
        with ByteStream(str(data_file)) as stream:
            assert str(stream) == "hello world"

    def test_not_readable_is_empty(self, tmp_path):
        with ByteStream(str(tmp_path / "out"), "wb") as stream:
            stream.write(b"foo")
            assert str(stream) == ""
            assert bytes(stream) == b""

    def test_unattached_is_empty(self, memory_stream):
        memory_stream.write(b"foo")
        memory_stream.close()
        assert bytes(memory_stream) == b""

    def test_repr(self, memory_stream):
        assert "ByteStream" in repr(memory_stream)
        memory_stream.close()
        assert repr(memory_stream) == "<ByteStream unattached>"
