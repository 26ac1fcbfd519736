"""
=============================================================================
HTTPMESSAGE - Immutable HTTP Messages and URIs
=============================================================================

Value objects for the HTTP layer of an application: requests, responses,
URIs, headers and message bodies. Nothing here talks to the network; a
server or client builds these objects and serializes them on its own.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       HTTPMESSAGE ARCHITECTURE                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   1. IMMUTABLE VALUES                                               │
    │      - Uri, HeaderBag, Request, Response never change in place      │
    │      - with_*() methods return modified copies                      │
    │                                                                     │
    │   2. BYTE STREAMS                                                   │
    │      - ByteStream wraps files, in-memory buffers and temp files     │
    │      - Capability checks: readable / writable / seekable            │
    │                                                                     │
    │   3. VALIDATION AT THE BOUNDARY                                     │
    │      - Bad arguments raise InvalidInput before anything is built    │
    │      - Stream misuse raises NotReadable, NotWritable, ...          │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpmessage/
    ├── __init__.py          # This file - package exports
    ├── config.py            # MessageConfig dataclass, logging setup
    ├── errors.py            # Exception hierarchy
    ├── core/
    │   └── stream.py        # ByteStream
    └── http/
        ├── headers.py       # HeaderBag
        ├── uri.py           # Uri
        ├── status_codes.py  # HTTPStatus enum
        ├── message.py       # Message base class
        ├── request.py       # Request
        ├── response.py      # Response
        ├── server_request.py  # ServerRequest
        └── uploaded_file.py   # UploadedFile

=============================================================================
QUICK START
=============================================================================

    from httpmessage import Request, Response, Uri

    request = Request("https://example.com/users?page=2", "GET")
    request = request.with_header("Accept", "application/json")
    request.request_target                # "/users?page=2"

    response = Response("memory:", 201)
    response.body.write(b'{"id": 7}')
    response.status_line                  # "HTTP/1.1 201 Created"

    uri = Uri("http://example.com:80/a b")
    str(uri)                              # "http://example.com/a%20b"

=============================================================================
"""

__version__ = "1.0.0"

from .config import MessageConfig, configure, get_config, setup_logging
from .core import ByteStream
from .errors import (
    AlreadyMoved,
    HTTPMessageError,
    InvalidInput,
    IOFailure,
    NotReadable,
    NotSeekable,
    NotWritable,
    StreamError,
    UploadError,
)
from .http import (
    HeaderBag,
    HTTPStatus,
    Message,
    Request,
    Response,
    ServerRequest,
    UploadedFile,
    Uri,
)

__all__ = [
    "AlreadyMoved",
    "ByteStream",
    "HeaderBag",
    "HTTPMessageError",
    "HTTPStatus",
    "InvalidInput",
    "IOFailure",
    "Message",
    "MessageConfig",
    "NotReadable",
    "NotSeekable",
    "NotWritable",
    "Request",
    "Response",
    "ServerRequest",
    "StreamError",
    "UploadError",
    "UploadedFile",
    "Uri",
    "configure",
    "get_config",
    "setup_logging",
    "__version__",
]
