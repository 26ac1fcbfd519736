"""
=============================================================================
HTTP RESPONSE
=============================================================================

A status code and reason phrase on top of a Message.

    HTTP/1.1 404 Not Found
             ─┬─ ────┬────
              │      └── reason phrase (defaults from the status table)
              └───────── status code (100-599)

=============================================================================
REASON PHRASES
=============================================================================

    Response(status_code=200)                       → "OK"
    Response(status_code=200, reason_phrase="Okay") → "Okay"
    Response(status_code=110)                       → ""   (unregistered)
    Response(status_code=110, reason_phrase="foo")  → "foo"

=============================================================================
"""

from typing import Mapping, Optional

from ..errors import assert_in_range, assert_type_in
from .headers import HeaderValue
from .message import BodySource, Message
from .status_codes import MAX_STATUS_CODE, MIN_STATUS_CODE, reason_phrase


def _check_status(status_code: int, phrase: str) -> str:
    """Validate a status code and return the reason phrase to store."""
    assert_type_in(status_code, (int,), "status code")
    assert_in_range(status_code, MIN_STATUS_CODE, MAX_STATUS_CODE, "status code")
    assert_type_in(phrase, (str,), "reason phrase")

    if phrase == "":
        return reason_phrase(status_code)
    return phrase


class Response(Message):
    """
    Immutable HTTP response.

    Example:
        response = Response("memory:", 201).with_header("Location", "/users/7")
        response.reason_phrase     # "Created"
        response.status_line       # "HTTP/1.1 201 Created"
    """

    # Response bodies are written to, so locators are opened for writing
    BODY_MODE = "wb+"

    def __init__(
        self,
        body: Optional[BodySource] = None,
        status_code: int = 200,
        reason_phrase: str = "",
        headers: Optional[Mapping[str, HeaderValue]] = None,
        protocol_version: Optional[str] = None,
    ):
        """
        Raises:
            InvalidInput: status_code isn't an int in 100-599, or another
                          argument has the wrong shape.
        """
        self._reason_phrase = _check_status(status_code, reason_phrase)
        self._status_code = int(status_code)

        super().__init__(body, headers, protocol_version)

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def reason_phrase(self) -> str:
        """The phrase given, the registered default, or ""."""
        return self._reason_phrase

    @property
    def status_line(self) -> str:
        """
        Status line for an external serializer, e.g. "HTTP/1.1 200 OK".

        The trailing phrase is left out when it is empty.
        """
        line = f"HTTP/{self._protocol_version} {self._status_code}"
        if self._reason_phrase:
            line += f" {self._reason_phrase}"
        return line

    def with_status(self, code: int, reason_phrase: str = "") -> "Response":
        """Copy with a new status; an empty phrase uses the default."""
        phrase = _check_status(code, reason_phrase)
        return self._clone(_status_code=int(code), _reason_phrase=phrase)
