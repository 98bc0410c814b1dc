"""Registry of per-locale string tables.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from loctable.diagnostics import DuplicateLocaleError, MissingDefaultLocaleError
from loctable.locale_utils import LocaleId
from loctable.runtime.table import StringTable

__all__ = ["LocaleRegistry"]

logger = logging.getLogger(__name__)


class LocaleRegistry:
    """Owns one StringTable per registered locale.

    Lifecycle:
        1. Construct with the default locale
        2. register() every (locale, table) pair
        3. seal() - validates the default locale and freezes the registry

    After seal() the registry is read-only and safe for concurrent access
    without locking. Reloading means building a new registry, never
    mutating a sealed one.

    Example:
        >>> registry = LocaleRegistry.build(
        ...     [("en", StringTable.build({"greeting": "Hello"}))], "en"
        ... )
        >>> registry.lookup_table("EN").get("greeting")
        'Hello'
    """

    __slots__ = ("_default_locale", "_sealed", "_tables")

    def __init__(self, default_locale: LocaleId | str) -> None:
        """Initialize an empty, unsealed registry.

        Raises:
            InvalidLocaleError: If default_locale is malformed
        """
        self._default_locale = LocaleId.coerce(default_locale)
        self._tables: dict[LocaleId, StringTable] = {}
        self._sealed = False

    @classmethod
    def build(
        cls,
        tables: Iterable[tuple[LocaleId | str, StringTable]],
        default_locale: LocaleId | str,
    ) -> LocaleRegistry:
        """Register every pair and seal.

        Raises:
            DuplicateLocaleError: If two pairs normalize to the same locale
            MissingDefaultLocaleError: If no pair is for default_locale
            InvalidLocaleError: If any locale is malformed
        """
        registry = cls(default_locale)
        for locale, table in tables:
            registry.register(locale, table)
        registry.seal()
        return registry

    def register(self, locale: LocaleId | str, table: StringTable) -> None:
        """Register the string table for a locale.

        Raises:
            DuplicateLocaleError: If the normalized locale is already registered
            InvalidLocaleError: If locale is malformed
            RuntimeError: If the registry has been sealed
        """
        if self._sealed:
            msg = "Cannot register locales on a sealed LocaleRegistry"
            raise RuntimeError(msg)

        locale_id = LocaleId.coerce(locale)
        if locale_id in self._tables:
            raise DuplicateLocaleError(str(locale_id))

        self._tables[locale_id] = table
        logger.debug("Registered locale %s (%d keys)", locale_id, len(table))

    def seal(self) -> None:
        """Validate the default locale and make the registry read-only.

        Idempotent.

        Raises:
            MissingDefaultLocaleError: If the default locale has no table
        """
        if self._sealed:
            return
        if self._default_locale not in self._tables:
            raise MissingDefaultLocaleError(str(self._default_locale))
        self._sealed = True

    @property
    def sealed(self) -> bool:
        """Whether seal() has completed."""
        return self._sealed

    def lookup_table(self, locale: LocaleId | str) -> StringTable | None:
        """Return the table registered for locale, or None.

        Malformed locale strings return None.
        """
        locale_id = locale if isinstance(locale, LocaleId) else LocaleId.try_parse(locale)
        if locale_id is None:
            return None
        return self._tables.get(locale_id)

    def default_locale(self) -> LocaleId:
        """Return the default locale, fixed at construction."""
        return self._default_locale

    @property
    def locales(self) -> tuple[LocaleId, ...]:
        """Registered locales in registration order."""
        return tuple(self._tables)

    def __contains__(self, locale: object) -> bool:
        if isinstance(locale, str):
            locale = LocaleId.try_parse(locale)
        return isinstance(locale, LocaleId) and locale in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return (
            f"LocaleRegistry(default={str(self._default_locale)!r}, "
            f"locales={len(self._tables)}, sealed={self._sealed})"
        )
