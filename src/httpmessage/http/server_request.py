"""
=============================================================================
SERVER-SIDE REQUEST
=============================================================================

An incoming request as seen by application code. On top of Request it
carries the data the server already extracted:

    ┌──────────────────┬────────────────────────────────────────────────┐
    │ server_params    │ environment of the server (read-only)          │
    │ cookie_params    │ parsed Cookie header                           │
    │ query_params     │ parsed query string                            │
    │ uploaded_files   │ tree of UploadedFile (dicts/lists as branches) │
    │ parsed_body      │ decoded body: dict, list, object or None       │
    │ attributes       │ anything the application derives (route args,  │
    │                  │ the authenticated user, ...)                   │
    └──────────────────┴────────────────────────────────────────────────┘

None of these are parsed here; they are plain containers, validated for
shape only. Like every message, a ServerRequest is immutable and the
with_*() methods return copies.

=============================================================================
"""

from typing import Any, Dict, Mapping, Optional, Union

from ..errors import InvalidInput, assert_type_in, type_name
from .headers import HeaderValue
from .message import BodySource
from .request import Request
from .uploaded_file import UploadedFile
from .uri import Uri


# Values a parsed body can't be: it must be structured data or None
_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def _assert_uploaded_files_tree(tree: Any) -> None:
    leaves = tree.values() if isinstance(tree, dict) else tree

    for leaf in leaves:
        if isinstance(leaf, (dict, list)):
            _assert_uploaded_files_tree(leaf)
            continue

        if not isinstance(leaf, UploadedFile):
            raise InvalidInput(
                f"uploaded files: every leaf must be an UploadedFile, {type_name(leaf)} given"
            )


def _assert_parsed_body(data: Any) -> None:
    if isinstance(data, _SCALARS):
        raise InvalidInput(f"parsed body: dict, list, object or None expected, {type_name(data)} given")


class ServerRequest(Request):
    """
    Immutable server-side request.

    Example:
        request = ServerRequest(
            "https://example.com/users?page=2",
            "GET",
            query_params={"page": "2"},
            server_params={"REMOTE_ADDR": "10.0.0.7"},
        )
        request = request.with_attribute("user_id", 42)
        request.get_attribute("user_id")      # 42
    """

    def __init__(
        self,
        uri: Union[Uri, str] = "",
        method: str = "GET",
        body: Optional[BodySource] = None,
        headers: Optional[Mapping[str, HeaderValue]] = None,
        cookies: Optional[Dict[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
        server_params: Optional[Dict[str, Any]] = None,
        uploaded_files: Optional[Dict[str, Any]] = None,
        parsed_body: Any = None,
        protocol_version: Optional[str] = None,
    ):
        cookies = {} if cookies is None else cookies
        query_params = {} if query_params is None else query_params
        server_params = {} if server_params is None else server_params
        uploaded_files = {} if uploaded_files is None else uploaded_files

        assert_type_in(cookies, (dict,), "cookies")
        assert_type_in(query_params, (dict,), "query params")
        assert_type_in(server_params, (dict,), "server params")
        assert_type_in(uploaded_files, (dict,), "uploaded files")
        _assert_uploaded_files_tree(uploaded_files)
        _assert_parsed_body(parsed_body)

        self._cookie_params = dict(cookies)
        self._query_params = dict(query_params)
        self._server_params = dict(server_params)
        self._uploaded_files = dict(uploaded_files)
        self._parsed_body = parsed_body
        self._attributes: Dict[str, Any] = {}

        super().__init__(uri, method, body, headers, protocol_version)

    # =========================================================================
    # SERVER PARAMS
    # =========================================================================

    @property
    def server_params(self) -> Dict[str, Any]:
        return dict(self._server_params)

    # =========================================================================
    # COOKIES / QUERY
    # =========================================================================

    @property
    def cookie_params(self) -> Dict[str, Any]:
        return dict(self._cookie_params)

    def with_cookie_params(self, cookies: Dict[str, Any]) -> "ServerRequest":
        assert_type_in(cookies, (dict,), "cookies")
        return self._clone(_cookie_params=dict(cookies))

    @property
    def query_params(self) -> Dict[str, Any]:
        return dict(self._query_params)

    def with_query_params(self, query: Dict[str, Any]) -> "ServerRequest":
        assert_type_in(query, (dict,), "query params")
        return self._clone(_query_params=dict(query))

    # =========================================================================
    # UPLOADED FILES
    # =========================================================================

    @property
    def uploaded_files(self) -> Dict[str, Any]:
        return dict(self._uploaded_files)

    def with_uploaded_files(self, uploaded_files: Dict[str, Any]) -> "ServerRequest":
        """
        Copy with a new tree of uploaded files.

        Raises:
            InvalidInput: A leaf of the tree is not an UploadedFile.
        """
        assert_type_in(uploaded_files, (dict,), "uploaded files")
        _assert_uploaded_files_tree(uploaded_files)
        return self._clone(_uploaded_files=dict(uploaded_files))

    # =========================================================================
    # PARSED BODY
    # =========================================================================

    @property
    def parsed_body(self) -> Any:
        return self._parsed_body

    def with_parsed_body(self, data: Any) -> "ServerRequest":
        """
        Copy with new deserialized body data.

        Raises:
            InvalidInput: data is a scalar (str, bytes, number, bool).
        """
        _assert_parsed_body(data)
        return self._clone(_parsed_body=data)

    # =========================================================================
    # ATTRIBUTES
    # =========================================================================

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> "ServerRequest":
        return self._clone(_attributes={**self._attributes, name: value})

    def without_attribute(self, name: str) -> "ServerRequest":
        attributes = {key: value for key, value in self._attributes.items() if key != name}
        return self._clone(_attributes=attributes)
