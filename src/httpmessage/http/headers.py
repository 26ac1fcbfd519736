"""
=============================================================================
HEADER COLLECTION
=============================================================================

Case-insensitive, multi-valued, order-preserving HTTP header storage that
remembers how each field name was spelled.

=============================================================================
CASE-INSENSITIVE BUT CASE-PRESERVING
=============================================================================

HTTP field names are case-insensitive (RFC 7230 section 3.2), but callers
expect to get back the spelling they used. The bag keeps two dicts:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   _values  (canonical name → values)   _names (lowercase → canonical)│
    ├─────────────────────────────────────────────────────────────────────┤
    │   "Content-Type" → ("text/html",)      "content-type" → "Content-Type"│
    │   "x-trace"      → ("a", "b")          "x-trace"      → "x-trace"   │
    └─────────────────────────────────────────────────────────────────────┘

The most recent spelling used in set() or append() becomes canonical:

    bag = HeaderBag().append("b", "bb").append("B", "bbb")
    bag.all()        # {"B": ["bb", "bbb"]}
    bag.get("b")     # ["bb", "bbb"]

Re-keying removes the old entry and inserts the new one, so the field
moves to the end of the iteration order.

=============================================================================
IMMUTABILITY
=============================================================================

A HeaderBag never changes after construction. set(), append() and
remove() return a NEW bag, which is what lets messages share bags freely
and still behave as values.

=============================================================================
"""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..errors import InvalidInput, assert_type_in


HeaderValue = Union[str, List[str], Tuple[str, ...]]

# Characters trimmed from both ends of every value
_OWS = " \t"


class HeaderBag:
    """
    Immutable header collection.

    Example:
        bag = HeaderBag({"Accept": "text/html"})
        bag = bag.append("accept", ["application/json"])
        bag.get_line("ACCEPT")    # "text/html, application/json"
    """

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None):
        """
        Build a bag from a mapping of name → value(s).

        Names that differ only by case are merged in order, exactly as if
        append() had been called for each entry.

        Raises:
            InvalidInput: A name isn't a str, or a value isn't a str or a
                          list/tuple of str.
        """
        self._values: Dict[str, Tuple[str, ...]] = {}
        self._names: Dict[str, str] = {}

        if headers is None:
            return

        if not isinstance(headers, Mapping):
            raise InvalidInput(f"headers: mapping expected, {type(headers).__name__} given")

        # Validate everything before storing anything
        entries = [self._normalize(name, value) for name, value in headers.items()]
        for name, values in entries:
            self._store(name, values, keep_existing=True)

    # =========================================================================
    # COPY-ON-WRITE MUTATORS
    # =========================================================================

    def set(self, name: str, value: HeaderValue) -> "HeaderBag":
        """Return a bag where name's values are replaced by value."""
        name, values = self._normalize(name, value)
        bag = self._copy()
        bag._store(name, values, keep_existing=False)
        return bag

    def append(self, name: str, value: HeaderValue) -> "HeaderBag":
        """
        Return a bag with value added after name's existing values.

        Behaves like set() when name isn't present yet.
        """
        name, values = self._normalize(name, value)
        bag = self._copy()
        bag._store(name, values, keep_existing=True)
        return bag

    def remove(self, name: str) -> "HeaderBag":
        """Return a bag without name (any case). Missing names are ignored."""
        bag = self._copy()
        canonical = bag._names.pop(name.lower(), None) if isinstance(name, str) else None
        if canonical is not None:
            del bag._values[canonical]
        return bag

    def _copy(self) -> "HeaderBag":
        bag = HeaderBag.__new__(HeaderBag)
        bag._values = dict(self._values)
        bag._names = dict(self._names)
        return bag

    def _store(self, name: str, values: Tuple[str, ...], keep_existing: bool) -> None:
        key = name.lower()
        previous = self._names.get(key)

        if previous is not None:
            prior_values = self._values.pop(previous)
            if keep_existing:
                values = prior_values + values

        self._names[key] = name
        self._values[name] = values

    @staticmethod
    def _normalize(name: str, value: HeaderValue) -> Tuple[str, Tuple[str, ...]]:
        assert_type_in(name, (str,), "header name")
        assert_type_in(value, (str, list, tuple), "header value")

        values = [value] if isinstance(value, str) else list(value)
        for item in values:
            assert_type_in(item, (str,), "header value")

        return name, tuple(item.strip(_OWS) for item in values)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def has(self, name: str) -> bool:
        return isinstance(name, str) and name.lower() in self._names

    def get(self, name: str) -> List[str]:
        """All values of name (any case), or [] if absent."""
        if not self.has(name):
            return []
        return list(self._values[self._names[name.lower()]])

    def get_line(self, name: str) -> str:
        """Values of name joined with ", " ("" if absent)."""
        return ", ".join(self.get(name))

    def all(self) -> Dict[str, List[str]]:
        """Canonical name → values, in insertion order."""
        return {name: list(values) for name, values in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderBag):
            return NotImplemented
        return list(self._values.items()) == list(other._values.items())

    def __repr__(self) -> str:
        return f"HeaderBag({self.all()!r})"
