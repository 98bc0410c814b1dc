"""Immutable string table for a single locale.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from loctable.diagnostics import DuplicateKeyError
from loctable.localization.types import TranslationKey, TranslationText

__all__ = ["StringTable"]


class StringTable(Mapping[TranslationKey, TranslationText]):
    """Read-only mapping from translation key to localized text.

    One StringTable holds the strings of exactly one locale. Values are
    returned exactly as registered; placeholder markers are not interpreted.

    Tables are immutable after construction and safe to share between
    threads without synchronization.

    Example:
        >>> table = StringTable.build({"greeting": "Hello"}, locale="en")
        >>> table.get("greeting")
        'Hello'
        >>> table.get("farewell") is None
        True
    """

    __slots__ = ("_entries", "_locale")

    def __init__(self, entries: Mapping[TranslationKey, TranslationText], locale: str = "") -> None:
        """Wrap an already validated mapping.

        Use StringTable.build() for untrusted input; it enforces key
        uniqueness and value types.
        """
        self._entries: Mapping[TranslationKey, TranslationText] = MappingProxyType(dict(entries))
        self._locale = locale

    @classmethod
    def build(
        cls,
        entries: Mapping[TranslationKey, TranslationText]
        | Iterable[tuple[TranslationKey, TranslationText]],
        *,
        locale: str = "",
    ) -> StringTable:
        """Build a table, rejecting duplicate keys.

        Args:
            entries: Mapping or iterable of (key, text) pairs
            locale: Locale tag used in error messages (optional)

        Returns:
            New StringTable

        Raises:
            DuplicateKeyError: If two pairs share a key
            TypeError: If a key or value is not a str
        """
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        collected: dict[TranslationKey, TranslationText] = {}
        for key, text in pairs:
            if not isinstance(key, str):
                msg = f"Translation key must be str, got {type(key).__name__}"
                raise TypeError(msg)
            if not isinstance(text, str):
                msg = f"Translation for key '{key}' must be str, got {type(text).__name__}"
                raise TypeError(msg)
            if key in collected:
                raise DuplicateKeyError(key, locale)
            collected[key] = text
        return cls(collected, locale)

    @property
    def locale(self) -> str:
        """Locale tag the table was built for (empty if not given)."""
        return self._locale

    def get(self, key: TranslationKey, default: TranslationText | None = None) -> TranslationText | None:  # type: ignore[override]
        return self._entries.get(key, default)

    def __getitem__(self, key: TranslationKey) -> TranslationText:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[TranslationKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StringTable(locale={self._locale!r}, keys={len(self._entries)})"
