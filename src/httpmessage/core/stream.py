"""
=============================================================================
BYTE STREAM
=============================================================================

Wraps an open file-like handle (a file, an in-memory buffer, a pipe, a
socket file) behind one small interface used for message bodies.

=============================================================================
LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        STREAM STATES                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   attach(handle | locator)                                          │
    │          │                                                          │
    │          ▼                                                          │
    │     ┌──────────┐   detach()   ┌────────────┐                        │
    │     │ ATTACHED │ ───────────► │ UNATTACHED │  handle returned,      │
    │     └──────────┘              └────────────┘  still open            │
    │          │                          ▲                                │
    │          │ close()                  │                                │
    │          └──────────────────────────┘  handle closed                │
    │                                                                      │
    │   Unattached: read/write/seek/tell fail, eof() is True,             │
    │               get_size() is None, get_metadata() is None.           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
MODES
=============================================================================

Readability and writability are worked out from the handle's open mode
every time they are asked for, never cached:

    mode contains "r" or "+"             → readable
    mode contains "w", "a", "x" or "+"   → writable

    "rb"   → readable             "wb"   → writable
    "rb+"  → both                 "ab+"  → both

In-memory buffers have no mode attribute; theirs is derived from
readable()/writable() instead.

=============================================================================
SHARING
=============================================================================

A ByteStream is deliberately a reference type. Messages derived from one
another with with_header(), with_uri() and friends all hold the SAME
stream object, so reading from (or closing) the body of one message is
visible through all of them. Only with_body() swaps it out.

A stream owns its handle. When the last reference to a ByteStream goes
away the handle is closed; call detach() first to keep it open.

=============================================================================
"""

import io
import logging
import os
import tempfile
from typing import Any, Optional, Union

from ..errors import (
    InvalidInput,
    IOFailure,
    NotReadable,
    NotSeekable,
    NotWritable,
    StreamError,
    assert_type_in,
)


logger = logging.getLogger(__name__)

# Special locators understood by attach()
MEMORY = "memory:"   # io.BytesIO
TEMP = "temp:"       # anonymous temporary file, deleted on close


class ByteStream:
    """
    A readable/writable/seekable view of an open handle.

    Example:
        stream = ByteStream("memory:")
        stream.write(b"hello")
        stream.rewind()
        stream.read(5)      # b"hello"
        stream.close()
    """

    READ_SIGNS = ("r", "+")
    WRITE_SIGNS = ("w", "a", "x", "+")

    def __init__(self, source: Union[str, io.IOBase], mode: str = "rb"):
        """
        Args:
            source: An open handle (any io.IOBase), or a locator string:
                    "memory:", "temp:" or a filesystem path.
            mode: Mode for opening a locator (ignored for handles).

        Raises:
            InvalidInput: Wrong source type, or the locator can't be opened.
        """
        self._handle: Optional[Any] = None
        self.attach(source, mode)

    # =========================================================================
    # ATTACH / DETACH / CLOSE
    # =========================================================================

    def attach(self, source: Union[str, io.IOBase], mode: str = "rb") -> None:
        """
        Attach a handle, or open a locator and attach the result.

        Any previously attached handle is replaced without being closed.
        """
        assert_type_in(source, (str, io.IOBase), "source")

        if isinstance(source, io.IOBase):
            self._handle = source
            logger.debug(f"Attached handle {source!r}")
            return

        self._handle = self._open(source, mode)
        logger.debug(f"Opened '{source}' with mode '{mode}'")

    @staticmethod
    def _open(locator: str, mode: str) -> Any:
        try:
            if locator == MEMORY:
                return io.BytesIO()
            if locator == TEMP:
                return tempfile.TemporaryFile(mode="w+b")
            return open(locator, mode)
        except (OSError, ValueError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise InvalidInput(f"Cannot open '{locator}', Error: {reason}") from e

    def detach(self) -> Optional[Any]:
        """
        Separate the handle from the stream without closing it.

        The caller owns the returned handle. The stream is left unusable.
        Returns None if nothing was attached.
        """
        handle, self._handle = self._handle, None
        if handle is not None:
            logger.debug(f"Detached handle {handle!r}")
        return handle

    def close(self) -> None:
        """Detach and close the handle. No-op if already unattached."""
        if self._handle is None:
            return

        handle = self.detach()
        try:
            handle.close()
        except OSError as e:
            raise IOFailure(f"Couldn't close the resource: {e}") from e

    # =========================================================================
    # METADATA
    # =========================================================================

    def get_metadata(self, key: Optional[str] = None) -> Any:
        """
        Describe the attached handle.

        Returns:
            None if unattached. Otherwise a dict with "mode", "seekable",
            "closed" and "name", or the single value for key (None if
            key is unknown).
        """
        if self._handle is None:
            return None

        metadata = {
            "mode": self._mode(),
            "seekable": self._seekable(),
            "closed": self._handle.closed,
            "name": getattr(self._handle, "name", None),
        }

        if key is None:
            return metadata

        return metadata.get(key)

    def _mode(self) -> Optional[str]:
        mode = getattr(self._handle, "mode", None)
        if isinstance(mode, str):
            return mode

        try:
            readable = self._handle.readable()
            writable = self._handle.writable()
        except ValueError:
            # closed behind our back
            return None

        if readable and writable:
            return "rb+"
        if readable:
            return "rb"
        if writable:
            return "wb"
        return None

    def _seekable(self) -> bool:
        try:
            return bool(self._handle.seekable())
        except (OSError, ValueError):
            return False

    def is_readable(self) -> bool:
        mode = self.get_metadata("mode")
        if mode is None:
            return False
        return any(sign in mode for sign in self.READ_SIGNS)

    def is_writable(self) -> bool:
        mode = self.get_metadata("mode")
        if mode is None:
            return False
        return any(sign in mode for sign in self.WRITE_SIGNS)

    def is_seekable(self) -> bool:
        return bool(self.get_metadata("seekable"))

    def get_size(self) -> Optional[int]:
        """
        Size of the underlying resource in bytes, or None if unknown.

        Pending writes are flushed first so the size includes them.
        """
        if self._handle is None:
            return None

        handle = self._handle
        try:
            handle.flush()
            return os.fstat(handle.fileno()).st_size
        except (OSError, ValueError):
            pass

        # No file descriptor (in-memory buffer): measure by seeking
        if not self.is_seekable():
            return None

        try:
            position = handle.tell()
            size = handle.seek(0, os.SEEK_END)
            handle.seek(position)
        except (OSError, ValueError):
            return None
        return size

    # =========================================================================
    # POSITION
    # =========================================================================

    def tell(self) -> int:
        """Current position of the handle."""
        if self._handle is None:
            raise IOFailure("There's no resource to tell the position of")

        try:
            return self._handle.tell()
        except (OSError, ValueError) as e:
            raise IOFailure(f"Cannot tell the position: {e}") from e

    def eof(self) -> bool:
        """
        True when no more data can be read.

        Always True when unattached. Seekable handles compare the position
        with the size; non-seekable buffered handles peek one byte ahead.
        """
        if self._handle is None:
            return True

        try:
            if self.is_seekable():
                size = self.get_size()
                return size is not None and self._handle.tell() >= size

            peek = getattr(self._handle, "peek", None)
            if peek is not None:
                return not peek(1)
        except (OSError, ValueError):
            return True

        return False

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> None:
        """
        Move the position (whence is os.SEEK_SET, SEEK_CUR or SEEK_END).

        Raises:
            NotSeekable: The handle can't seek (pipes, sockets, unattached).
            IOFailure: The seek itself failed.
        """
        if not self.is_seekable():
            raise NotSeekable("The stream is not seekable")

        try:
            self._handle.seek(offset, whence)
        except (OSError, ValueError) as e:
            raise IOFailure(f"Seeking error: {e}") from e

    def rewind(self) -> None:
        self.seek(0)

    # =========================================================================
    # READ / WRITE
    # =========================================================================

    def read(self, length: int) -> bytes:
        """
        Read up to length bytes. Fewer may be returned (short reads).

        Raises:
            NotReadable: The mode doesn't allow reading.
            IOFailure: The handle failed to read.
        """
        if not self.is_readable():
            raise NotReadable("The stream is not readable")

        try:
            data = self._handle.read(length)
        except (OSError, ValueError) as e:
            raise IOFailure(f"Couldn't read the resource: {e}") from e

        # Non-blocking handles return None when no data is ready
        return b"" if data is None else data

    def write(self, data: Union[bytes, str]) -> int:
        """
        Write data and return the number of bytes written.

        str is encoded as UTF-8 unless the handle is a text stream.

        Raises:
            NotWritable: The mode doesn't allow writing.
            IOFailure: The handle failed to write.
        """
        if not self.is_writable():
            raise NotWritable("The stream is not writable")

        if isinstance(data, str) and not isinstance(self._handle, io.TextIOBase):
            data = data.encode("utf-8")

        try:
            written = self._handle.write(data)
        except (OSError, ValueError, TypeError) as e:
            raise IOFailure(f"Couldn't write into the stream: {e}") from e

        return len(data) if written is None else written

    def get_contents(self) -> bytes:
        """Read everything from the current position to the end."""
        if not self.is_readable():
            raise NotReadable("The stream is not readable")

        try:
            return self._handle.read()
        except (OSError, ValueError) as e:
            raise IOFailure(f"An error occurred while reading the resource: {e}") from e

    # =========================================================================
    # CONVERSIONS
    # =========================================================================

    def __bytes__(self) -> bytes:
        """
        The whole stream, read from offset 0 when the handle can seek.

        Best effort: an unreadable stream or a failing read yields b""
        instead of raising. Conversions have no way to report errors.
        """
        if not self.is_readable():
            return b""

        try:
            if self.is_seekable():
                self.seek(0)
            data = self.get_contents()
        except StreamError as e:
            logger.warning(f"Returning empty contents, read failed: {e}")
            return b""

        return data.encode("utf-8") if isinstance(data, str) else data

    def __str__(self) -> str:
        return bytes(self).decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        if self._handle is None:
            return "<ByteStream unattached>"
        return f"<ByteStream mode={self.get_metadata('mode')!r} handle={self._handle!r}>"

    def __enter__(self) -> "ByteStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_handle", None) is None:
            return

        try:
            self.close()
        except StreamError as e:
            logger.warning(f"Couldn't close the stream on collection: {e}")
