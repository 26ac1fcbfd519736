"""
=============================================================================
UPLOADED FILES
=============================================================================

A file received in a request, before the application has decided where
it goes.

An upload arrives either as a stream (data already in memory or in a
spooled temp file) or as a path to a temporary file on disk. move_to()
handles both:

    ┌──────────────┬──────────────────────────────────────────────────────┐
    │ source       │ move_to(target)                                      │
    ├──────────────┼──────────────────────────────────────────────────────┤
    │ ByteStream / │ rewind, copy chunk by chunk into a new file opened  │
    │ open handle  │ with mode "wb"                                       │
    │ path string  │ shutil.move (rename, or copy + delete across disks) │
    └──────────────┴──────────────────────────────────────────────────────┘

A file can be moved once. After that, and whenever the client reported an
upload error, get_stream() and move_to() raise.

=============================================================================
"""

import io
import logging
import os
import shutil
from typing import Optional, Union

from ..config import get_config
from ..core.stream import ByteStream
from ..errors import AlreadyMoved, InvalidInput, StreamError, UploadError, assert_type_in


logger = logging.getLogger(__name__)

# Upload status codes, as reported by the code that received the upload
UPLOAD_ERR_OK = 0
UPLOAD_ERR_INI_SIZE = 1
UPLOAD_ERR_FORM_SIZE = 2
UPLOAD_ERR_PARTIAL = 3
UPLOAD_ERR_NO_FILE = 4
UPLOAD_ERR_NO_TMP_DIR = 6
UPLOAD_ERR_CANT_WRITE = 7
UPLOAD_ERR_EXTENSION = 8

UPLOAD_ERRORS = {
    UPLOAD_ERR_OK: "There is no error, the file uploaded with success",
    UPLOAD_ERR_INI_SIZE: "The uploaded file exceeds the server's maximum upload size",
    UPLOAD_ERR_FORM_SIZE: "The uploaded file exceeds the maximum size specified in the form",
    UPLOAD_ERR_PARTIAL: "The uploaded file was only partially uploaded",
    UPLOAD_ERR_NO_FILE: "No file was uploaded",
    UPLOAD_ERR_NO_TMP_DIR: "Missing a temporary folder",
    UPLOAD_ERR_CANT_WRITE: "Failed to write file to disk",
    UPLOAD_ERR_EXTENSION: "An extension stopped the file upload",
}


class UploadedFile:
    """
    A single uploaded file.

    Example:
        upload = UploadedFile(ByteStream("memory:"), size=0,
                              client_filename="avatar.png",
                              client_media_type="image/png")
        upload.move_to("/srv/avatars/42.png")
    """

    def __init__(
        self,
        source: Union[ByteStream, io.IOBase, str],
        size: Optional[int],
        error: int = UPLOAD_ERR_OK,
        client_filename: Optional[str] = None,
        client_media_type: Optional[str] = None,
    ):
        """
        Args:
            source: The uploaded data: a ByteStream, an open handle, or
                    the path of a temporary file.
            size: Size in bytes as reported by the client (may be None).
            error: One of the UPLOAD_ERR_* codes.
            client_filename: File name sent by the client. Don't trust it.
            client_media_type: Media type sent by the client. Don't trust it.

        Raises:
            InvalidInput: Wrong argument types or an unknown error code.
        """
        assert_type_in(source, (ByteStream, io.IOBase, str), "source")
        assert_type_in(size, (int, type(None)), "size")
        assert_type_in(error, (int,), "error")
        assert_type_in(client_filename, (str, type(None)), "client filename")
        assert_type_in(client_media_type, (str, type(None)), "client media type")

        if error not in UPLOAD_ERRORS:
            raise InvalidInput(f"Unknown upload error code: {error}")

        self._size = size
        self._error = error
        self._client_filename = client_filename
        self._client_media_type = client_media_type
        self._stream: Optional[ByteStream] = None
        self._file: Optional[str] = None
        self._moved = False

        if not self.has_error:
            self._apply_source(source)

    def _apply_source(self, source: Union[ByteStream, io.IOBase, str]) -> None:
        if isinstance(source, ByteStream):
            self._stream = source
        elif isinstance(source, io.IOBase):
            self._stream = ByteStream(source)
        else:
            self._file = source

    # =========================================================================
    # CLIENT-REPORTED DETAILS
    # =========================================================================

    @property
    def size(self) -> Optional[int]:
        return self._size

    @property
    def error(self) -> int:
        return self._error

    @property
    def has_error(self) -> bool:
        return self._error != UPLOAD_ERR_OK

    @property
    def client_filename(self) -> Optional[str]:
        return self._client_filename

    @property
    def client_media_type(self) -> Optional[str]:
        return self._client_media_type

    # =========================================================================
    # ACCESS
    # =========================================================================

    def _assert_available(self) -> None:
        if self.has_error:
            raise UploadError(f"The upload failed: {UPLOAD_ERRORS[self._error]}")
        if self._moved:
            raise AlreadyMoved("The uploaded file has already been moved")

    def get_stream(self) -> ByteStream:
        """
        The uploaded data as a stream.

        Path sources are opened (read-only) on first access.

        Raises:
            UploadError: The client reported an upload error.
            AlreadyMoved: move_to() already succeeded.
        """
        self._assert_available()

        if self._stream is None:
            self._stream = ByteStream(self._file, "rb")

        return self._stream

    def move_to(self, target_path: str) -> None:
        """
        Move the uploaded file to target_path. Can only be done once.

        Raises:
            InvalidInput: target_path is not a str, is blank, or can't be
                          opened for writing.
            UploadError: The client reported an upload error, or the move
                         itself failed.
            AlreadyMoved: The file was moved before.
        """
        assert_type_in(target_path, (str,), "target path")
        self._assert_available()

        if not target_path.strip():
            raise InvalidInput("target path must not be an empty string")

        if self._stream is not None:
            self._copy_stream(target_path)
        else:
            try:
                shutil.move(self._file, target_path)
            except OSError as e:
                raise UploadError(f"Couldn't move to {target_path}") from e

        self._moved = True
        logger.debug(f"Moved upload {self._client_filename!r} to {target_path}")

    def _copy_stream(self, target_path: str) -> None:
        """
        Copy the stream into a new file at target_path.

        The source is rewound before the target is created, so a source
        that can't seek never leaves an empty file behind. A failure
        while copying removes the partial target.
        """
        chunk_size = get_config().upload_chunk_size
        source = self._stream

        try:
            source.rewind()
        except StreamError as e:
            raise UploadError(f"Couldn't move to {target_path}") from e

        target = ByteStream(target_path, "wb")
        try:
            while not source.eof():
                chunk = source.read(chunk_size)
                if not chunk:
                    break
                target.write(chunk)
        except StreamError as e:
            target.close()
            self._remove_partial(target_path)
            raise UploadError(f"Couldn't move to {target_path}") from e

        target.close()

    @staticmethod
    def _remove_partial(target_path: str) -> None:
        try:
            os.remove(target_path)
        except OSError as e:
            logger.warning(f"Couldn't remove partial upload {target_path}: {e}")

    def __repr__(self) -> str:
        return (
            f"<UploadedFile {self._client_filename!r} size={self._size} "
            f"error={self._error} moved={self._moved}>"
        )
