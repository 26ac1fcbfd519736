"""
=============================================================================
HTTP REQUEST
=============================================================================

An outgoing (client side) request: method, URI, optional request target,
plus everything a Message has.

=============================================================================
REQUEST TARGET
=============================================================================

The request target is what goes between the method and the version on
the request line:

    GET /api/users?page=1 HTTP/1.1
        ─────────┬───────
                 └── request target

Unless one was set explicitly with with_request_target(), it is derived
from the URI:

    Request("http://example.com/p?q=1").request_target   → "/p?q=1"
    Request("http://example.com").request_target         → "/"
    Request("").with_request_target("*").request_target  → "*"

=============================================================================
HOST HEADER
=============================================================================

with_uri() keeps the Host header in sync with the new URI:

    ┌──────────────────────────┬────────────────┬────────────────────────┐
    │ new URI                  │ preserve_host  │ Host header afterwards │
    ├──────────────────────────┼────────────────┼────────────────────────┤
    │ http://bar.foo:81        │ False          │ bar.foo:81             │
    │ http://bar.foo:80        │ False          │ bar.foo                │
    │ http://bar.foo:81        │ True           │ unchanged if present,  │
    │                          │                │ bar.foo:81 otherwise   │
    │ ?bar=foo  (no host)      │ either         │ unchanged              │
    └──────────────────────────┴────────────────┴────────────────────────┘

=============================================================================
"""

import re
from typing import Mapping, Optional, Union

from ..errors import InvalidInput, assert_type_in
from .headers import HeaderValue
from .message import BodySource, Message
from .uri import Uri


_WHITESPACE = re.compile(r"\s")


class Request(Message):
    """
    Immutable HTTP request.

    Example:
        request = Request("https://example.com/search?q=python", "GET")
        request = request.with_header("Accept", "application/json")
        request.request_target     # "/search?q=python"
    """

    def __init__(
        self,
        uri: Union[Uri, str] = "",
        method: str = "GET",
        body: Optional[BodySource] = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        protocol_version: Optional[str] = None,
    ):
        """
        Args:
            uri: A Uri, or a string to parse into one.
            method: HTTP method, case-sensitive ("GET", "post", ...).
            body: See Message.
            headers: See Message.
            protocol_version: See Message.

        Raises:
            InvalidInput: Bad uri, method, headers or body.
        """
        assert_type_in(uri, (Uri, str), "uri")
        assert_type_in(method, (str,), "method")

        self._uri = uri if isinstance(uri, Uri) else Uri(uri)
        self._method = method
        self._request_target: Optional[str] = None

        super().__init__(body, headers, protocol_version)

    # =========================================================================
    # METHOD
    # =========================================================================

    @property
    def method(self) -> str:
        return self._method

    def with_method(self, method: str) -> "Request":
        assert_type_in(method, (str,), "method")
        return self._clone(_method=method)

    # =========================================================================
    # URI
    # =========================================================================

    @property
    def uri(self) -> Uri:
        return self._uri

    def with_uri(self, uri: Uri, preserve_host: bool = False) -> "Request":
        """
        Copy with a different URI, updating the Host header.

        Passing the very same Uri object returns this request unchanged.

        Args:
            uri: The new Uri.
            preserve_host: Keep an existing Host header as it is.
        """
        assert_type_in(uri, (Uri,), "uri")

        if uri is self._uri:
            return self

        request = self._clone(_uri=uri)

        if preserve_host and self.has_header("Host"):
            return request

        if not uri.host:
            return request

        host = uri.host
        if uri.port is not None:
            host += f":{uri.port}"

        request._headers = request._headers.set("Host", host)
        return request

    # =========================================================================
    # REQUEST TARGET
    # =========================================================================

    @property
    def request_target(self) -> str:
        """Explicit target if one was set, else path[?query], else "/"."""
        if self._request_target is not None:
            return self._request_target

        target = self._uri.path
        if self._uri.query:
            target += f"?{self._uri.query}"

        return target or "/"

    def with_request_target(self, request_target: str) -> "Request":
        """
        Copy with an explicit request target (e.g. "*" or an absolute URI).

        Raises:
            InvalidInput: The target contains whitespace.
        """
        assert_type_in(request_target, (str,), "request target")

        if _WHITESPACE.search(request_target):
            raise InvalidInput("Request target can't contain whitespace")

        return self._clone(_request_target=request_target)
