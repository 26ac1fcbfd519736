"""
=============================================================================
ERROR TAXONOMY
=============================================================================

Every failure raised by this package derives from HTTPMessageError, so a
caller can catch the whole family in one place.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        EXCEPTION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTPMessageError                                                  │
    │   ├── InvalidInput          (also a ValueError)                     │
    │   ├── StreamError           (also a RuntimeError)                   │
    │   │   ├── NotReadable                                               │
    │   │   ├── NotWritable                                               │
    │   │   ├── NotSeekable                                               │
    │   │   └── IOFailure                                                 │
    │   └── UploadError           (also a RuntimeError)                   │
    │       └── AlreadyMoved                                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

InvalidInput is always raised before an object is copied or changed, so a
failed with_*() call leaves the receiver exactly as it was.

=============================================================================
"""

from typing import Any, Iterable


class HTTPMessageError(Exception):
    """Base class for all errors raised by httpmessage."""


class InvalidInput(HTTPMessageError, ValueError):
    """
    An argument has the wrong type or is outside its allowed range.

    Examples: a port of 70000, an unsupported URI scheme, a header value
    that is neither a string nor a list of strings, whitespace inside a
    request target.
    """


class StreamError(HTTPMessageError, RuntimeError):
    """Base class for failures of a ByteStream operation."""


class NotReadable(StreamError):
    """The stream's mode does not allow reading."""


class NotWritable(StreamError):
    """The stream's mode does not allow writing."""


class NotSeekable(StreamError):
    """The underlying handle cannot seek."""


class IOFailure(StreamError):
    """The underlying handle reported an error (read, write, seek, tell...)."""


class UploadError(HTTPMessageError, RuntimeError):
    """
    An uploaded file cannot be accessed.

    Raised when the upload itself failed (the client sent an error code)
    or when moving the file to its destination failed.
    """


class AlreadyMoved(UploadError):
    """The uploaded file has already been moved."""


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def type_name(value: Any) -> str:
    """Short type name used in error messages ("str", "NoneType", ...)."""
    return type(value).__name__


def assert_type_in(value: Any, types: Iterable[type], what: str = "value") -> None:
    """
    Raise InvalidInput unless value is an instance of one of types.

    bool is rejected wherever int is expected, since True/False are not
    meaningful ports or status codes.

    Example:
        assert_type_in(port, (int, type(None)), "port")
    """
    types = tuple(types)
    if isinstance(value, bool) and bool not in types:
        ok = False
    else:
        ok = isinstance(value, types)

    if not ok:
        expected = " or ".join(t.__name__ for t in types)
        raise InvalidInput(f"{what}: {expected} expected, {type_name(value)} given")


def assert_in_range(value: int, low: int, high: int, what: str = "value") -> None:
    """Raise InvalidInput unless low <= value <= high."""
    if value < low or value > high:
        raise InvalidInput(f"{what}: {value} is outside the range ({low}, {high})")
