"""
Unit tests for the header collection.
"""

import pytest

from httpmessage.errors import InvalidInput
from httpmessage.http.headers import HeaderBag


class TestHeaderBagConstruction:
    """Tests for building a bag from a mapping."""

    def test_empty(self):
        bag = HeaderBag()
        assert len(bag) == 0
        assert bag.all() == {}

    def test_values_are_trimmed(self):
        bag = HeaderBag({"foo": " bar", "hello": "\t   world  "})
        assert bag.all() == {"foo": ["bar"], "hello": ["world"]}

    def test_names_differing_by_case_are_merged(self):
        """Later spellings win and values accumulate."""
        bag = HeaderBag({"Host": "example.com", "Foo": "bar", "foo": "baz"})
        assert bag.all() == {"Host": ["example.com"], "foo": ["bar", "baz"]}

    def test_list_values(self):
        bag = HeaderBag({"Accept": ["text/html", "text/plain"]})
        assert bag.get("accept") == ["text/html", "text/plain"]

    @pytest.mark.parametrize("headers", [
        {1: "a"},
        {"a": 1},
        {"a": False},
        {"a": ["ok", 2]},
        ["a", "b"],
    ])
    def test_invalid_entries_rejected(self, headers):
        with pytest.raises(InvalidInput):
            HeaderBag(headers)


class TestHeaderBagMutators:
    """set/append/remove return new bags."""

    def test_set_returns_new_bag(self):
        bag = HeaderBag()
        other = bag.set("a", "aaa")

        assert other is not bag
        assert "a" not in bag
        assert other.get("a") == ["aaa"]

    def test_set_replaces_and_rekeys(self):
        bag = HeaderBag().set("a", "aaa").set("b", "bb").set("B", "bbb")

        assert bag.get("A") == ["aaa"]
        assert bag.get("b") == ["bbb"]
        assert bag.all() == {"a": ["aaa"], "B": ["bbb"]}

    def test_append_accumulates_and_rekeys(self):
        bag = HeaderBag().append("a", "aaa").append("b", "bb").append("B", "bbb")

        assert bag.get("b") == ["bb", "bbb"]
        assert bag.all() == {"a": ["aaa"], "B": ["bb", "bbb"]}

    def test_rekey_moves_field_to_end(self):
        """A re-keyed field is reinserted at the end."""
        bag = HeaderBag().set("a", "1").set("b", "2").set("A", "3")
        assert list(bag) == ["b", "A"]

    def test_remove_any_case(self):
        bag = HeaderBag({"X-Trace": "abc"}).remove("x-trace")
        assert "X-Trace" not in bag
        assert bag.all() == {}

    def test_remove_missing_is_ignored(self):
        bag = HeaderBag({"a": "1"})
        assert bag.remove("b") == bag

    def test_empty_list_keeps_name(self):
        bag = HeaderBag().set("a", [])
        assert bag.has("a")
        assert bag.get_line("a") == ""


class TestHeaderBagLookups:
    """Tests for case-insensitive lookups."""

    def test_has(self):
        bag = HeaderBag({"test": "a"})
        assert bag.has("test")
        assert bag.has("tEsT")
        assert not bag.has("test1")

    def test_get_missing(self):
        assert HeaderBag().get("c") == []

    def test_get_line(self):
        bag = HeaderBag({"b": ["bb", "bbb"]})
        assert bag.get_line("B") == "bb, bbb"
        assert bag.get_line("missing") == ""

    def test_returned_lists_are_copies(self):
        bag = HeaderBag({"a": "1"})
        bag.get("a").append("2")
        assert bag.get("a") == ["1"]
