"""Tests for StringTable construction and read-only mapping behavior.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from loctable.diagnostics import DuplicateKeyError
from loctable.runtime.table import StringTable


class TestStringTableBuild:
    """Test StringTable.build() validation."""

    def test_build_from_mapping(self) -> None:
        """Mapping input builds a table with the same entries."""
        table = StringTable.build({"greeting": "Hello", "farewell": "Goodbye"})
        assert dict(table) == {"greeting": "Hello", "farewell": "Goodbye"}

    def test_build_from_pairs(self) -> None:
        """Iterable of pairs builds a table in pair order."""
        table = StringTable.build([("b", "2"), ("a", "1")])
        assert list(table) == ["b", "a"]

    def test_duplicate_key_rejected(self) -> None:
        """Repeated keys raise instead of last-write-wins."""
        with pytest.raises(DuplicateKeyError) as exc_info:
            StringTable.build([("greeting", "Hello"), ("greeting", "Hi")], locale="en")
        assert exc_info.value.key == "greeting"
        assert exc_info.value.locale == "en"
        assert "for locale 'en'" in str(exc_info.value)

    def test_duplicate_key_without_locale(self) -> None:
        """Message omits the locale when none was given."""
        with pytest.raises(DuplicateKeyError, match="^Duplicate key 'k' in string table$"):
            StringTable.build([("k", "1"), ("k", "2")])

    def test_non_string_value_rejected(self) -> None:
        """Values must be str."""
        with pytest.raises(TypeError, match="Translation for key 'count' must be str"):
            StringTable.build({"count": 3})  # type: ignore[dict-item]

    def test_non_string_key_rejected(self) -> None:
        """Keys must be str."""
        with pytest.raises(TypeError, match="Translation key must be str"):
            StringTable.build({1: "one"})  # type: ignore[dict-item]

    def test_empty_table(self) -> None:
        """Empty tables are valid."""
        table = StringTable.build({})
        assert len(table) == 0
        assert table.get("anything") is None


class TestStringTableReads:
    """Test lookups on a built table."""

    def test_get_present_and_absent(self) -> None:
        """get() returns text or None."""
        table = StringTable.build({"greeting": "Hello"})
        assert table.get("greeting") == "Hello"
        assert table.get("farewell") is None

    def test_get_with_default(self) -> None:
        """get() honors a default like dict.get()."""
        table = StringTable.build({"greeting": "Hello"})
        assert table.get("farewell", "?") == "?"

    def test_placeholders_returned_verbatim(self) -> None:
        """Placeholder markers are not interpreted."""
        table = StringTable.build({"welcome": "Hi, {name}! {{ $count }}"})
        assert table["welcome"] == "Hi, {name}! {{ $count }}"

    def test_mapping_protocol(self) -> None:
        """StringTable is a read-only Mapping."""
        table = StringTable.build({"a": "1"})
        assert isinstance(table, Mapping)
        assert "a" in table
        assert "b" not in table
        with pytest.raises(KeyError):
            table["b"]

    def test_immutable(self) -> None:
        """Item assignment is not supported."""
        table = StringTable.build({"a": "1"})
        with pytest.raises(TypeError):
            table["a"] = "2"  # type: ignore[index]

    def test_source_mapping_copied(self) -> None:
        """Mutating the source after build does not affect the table."""
        source = {"a": "1"}
        table = StringTable.build(source)
        source["a"] = "changed"
        assert table["a"] == "1"

    def test_locale_and_repr(self) -> None:
        """locale is recorded and shown in repr."""
        table = StringTable.build({"a": "1"}, locale="en-US")
        assert table.locale == "en-US"
        assert repr(table) == "StringTable(locale='en-US', keys=1)"
