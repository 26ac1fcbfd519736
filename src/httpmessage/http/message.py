"""
=============================================================================
HTTP MESSAGE BASE
=============================================================================

The part every HTTP message has: a protocol version, headers and a body.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          MESSAGE                                    │
    ├─────────────────────────────────────────────────────────────────────┤
    │   protocol_version   "1.1"                      value               │
    │   headers            HeaderBag                  value (immutable)   │
    │   body               ByteStream                 SHARED reference    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
COPY-ON-WRITE
=============================================================================

Messages are never modified. Every with_*() method copies the message,
changes the copy and returns it; the original is untouched:

    base = Request("http://example.com")
    authed = base.with_header("Authorization", "Bearer abc")

    base.has_header("Authorization")     # False
    authed.has_header("Authorization")   # True
    authed.body is base.body             # True, the stream is shared

Unlike Uri, messages ALWAYS return a new object, even when nothing
changed. Arguments are validated before the copy is made, so a failed
call never leaves a half-built message behind.

=============================================================================
"""

import copy
import io
from typing import Dict, List, Mapping, Optional, Union

from ..config import get_config
from ..core.stream import ByteStream
from ..errors import assert_type_in
from .headers import HeaderBag, HeaderValue


BodySource = Union[ByteStream, io.IOBase, str]


class Message:
    """
    Immutable HTTP message: protocol version, headers and body.

    Request and Response build on this class.
    """

    # Mode used when the body is given as a locator string
    BODY_MODE = "rb"

    def __init__(
        self,
        body: Optional[BodySource] = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        protocol_version: Optional[str] = None,
    ):
        """
        Args:
            body: A ByteStream, an open handle, a locator string, or None
                  for the configured default body.
            headers: Mapping of header name → value or list of values.
            protocol_version: e.g. "1.1"; None uses the configured default.

        Raises:
            InvalidInput: Any argument has the wrong shape.
        """
        config = get_config()
        if protocol_version is None:
            protocol_version = config.protocol_version
        assert_type_in(protocol_version, (str,), "protocol version")

        self._protocol_version = protocol_version
        self._headers = HeaderBag(headers)
        # Opened last: everything else has been validated by now
        self._body = self._open_body(body)

    def _open_body(self, body: Optional[BodySource]) -> ByteStream:
        if body is None:
            config = get_config()
            return ByteStream(config.default_body, config.default_body_mode)

        assert_type_in(body, (ByteStream, io.IOBase, str), "body")
        if isinstance(body, ByteStream):
            return body
        return ByteStream(body, self.BODY_MODE)

    def _clone(self, **changes) -> "Message":
        message = copy.copy(self)
        for name, value in changes.items():
            setattr(message, name, value)
        return message

    # =========================================================================
    # PROTOCOL VERSION
    # =========================================================================

    @property
    def protocol_version(self) -> str:
        return self._protocol_version

    def with_protocol_version(self, version: str) -> "Message":
        assert_type_in(version, (str,), "protocol version")
        return self._clone(_protocol_version=version)

    # =========================================================================
    # HEADERS
    # =========================================================================

    @property
    def headers(self) -> Dict[str, List[str]]:
        """All headers, keyed by their most recent spelling."""
        return self._headers.all()

    def has_header(self, name: str) -> bool:
        return self._headers.has(name)

    def get_header(self, name: str) -> List[str]:
        """
        All values of a header (case-insensitive lookup).

        Returns [] if the header isn't present.
        """
        return self._headers.get(name)

    def get_header_line(self, name: str) -> str:
        """
        Values of a header joined with ", ".

        Example:
            msg.with_header("Accept", ["text/html", "text/plain"])
               .get_header_line("accept")    # "text/html, text/plain"
        """
        return self._headers.get_line(name)

    def with_header(self, name: str, value: HeaderValue) -> "Message":
        """Copy with name's values replaced by value."""
        return self._clone(_headers=self._headers.set(name, value))

    def with_added_header(self, name: str, value: HeaderValue) -> "Message":
        """Copy with value appended to name's existing values."""
        return self._clone(_headers=self._headers.append(name, value))

    def without_header(self, name: str) -> "Message":
        return self._clone(_headers=self._headers.remove(name))

    # =========================================================================
    # BODY
    # =========================================================================

    @property
    def body(self) -> ByteStream:
        return self._body

    def with_body(self, body: ByteStream) -> "Message":
        """Copy using a different body stream."""
        assert_type_in(body, (ByteStream,), "body")
        return self._clone(_body=body)
