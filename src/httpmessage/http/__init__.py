"""
HTTP message components.

    headers.py         HeaderBag, case-insensitive ordered header storage
    uri.py             Uri, parsed and normalized URI value
    status_codes.py    HTTPStatus enum and reason phrases
    message.py         Message base (version, headers, body)
    request.py         Request (method, URI, request target)
    response.py        Response (status code, reason phrase)
    server_request.py  ServerRequest (params, uploads, attributes)
    uploaded_file.py   UploadedFile
"""

from .headers import HeaderBag
from .message import Message
from .request import Request
from .response import Response
from .server_request import ServerRequest
from .status_codes import HTTPStatus, reason_phrase
from .uploaded_file import UPLOAD_ERRORS, UploadedFile
from .uri import Uri

__all__ = [
    "HeaderBag",
    "HTTPStatus",
    "Message",
    "Request",
    "Response",
    "ServerRequest",
    "UPLOAD_ERRORS",
    "UploadedFile",
    "Uri",
    "reason_phrase",
]
