"""Entry point: building the localization system and issuing handles.

Key architectural decisions:
- Eager validation: every table, locale and the default locale are checked
  in build(); no partially valid LocalizationTable can exist
- Immutable data: registry and string tables never change after build
- Handle cache: chains are computed once per distinct normalized locale
  instead of once per lookup

Cache discipline:
    Handles for all registered locales (and CacheConfig.preload) are built
    eagerly and pinned in a dict that is never mutated after __init__, so
    the common case is a lock-free dict read. Other tags are memoized
    lazily behind an RWLock with double-checked insertion: two threads may
    compute the same handle, but both receive an equal handle and the cache
    keeps exactly one. The lazy cache is bounded (CacheConfig.size) with
    oldest-first eviction.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from loctable.diagnostics import MissingKeyError
from loctable.locale_utils import LocaleId, parse_accept_language
from loctable.localization.types import LocaleCode, TableEntries, TranslationKey, TranslationText
from loctable.runtime.cache_config import CacheConfig
from loctable.runtime.fallback import FallbackResolver
from loctable.runtime.handle import LocaleHandle
from loctable.runtime.registry import LocaleRegistry
from loctable.runtime.rwlock import RWLock
from loctable.runtime.table import StringTable

__all__ = ["LocalizationTable"]

logger = logging.getLogger(__name__)

type TablesInput = (
    Mapping[LocaleId | LocaleCode, TableEntries | StringTable]
    | Iterable[tuple[LocaleId | LocaleCode, TableEntries | StringTable]]
)


class LocalizationTable:
    """Per-locale string tables with locale fallback.

    Build once at startup, pass the instance to every consumer, and look
    strings up through handles:

    Example:
        >>> l10n = LocalizationTable.build(
        ...     {"en": {"greeting": "Hello"}, "en-US": {"color": "color"}},
        ...     default_locale="en",
        ... )
        >>> handle = l10n.handle_for("en-US-posix")
        >>> handle.resolve("greeting")
        'Hello'
        >>> l10n.lookup("en-US", "farewell")
        Traceback (most recent call last):
        ...
        loctable.diagnostics.errors.MissingKeyError: Key 'farewell' not found for locale 'en-US'

    Thread Safety:
        All public methods are safe to call concurrently after construction.
    """

    __slots__ = (
        "_cache_config",
        "_handles",
        "_lock",
        "_pinned",
        "_registry",
        "_resolver",
    )

    def __init__(self, registry: LocaleRegistry, *, cache: CacheConfig | None = None) -> None:
        """Wrap a sealed registry.

        Most callers should use LocalizationTable.build() instead.

        Args:
            registry: Sealed LocaleRegistry
            cache: Handle cache configuration (default: CacheConfig())

        Raises:
            ValueError: If registry is not sealed
        """
        if not registry.sealed:
            msg = "LocalizationTable requires a sealed LocaleRegistry"
            raise ValueError(msg)

        self._registry = registry
        self._resolver = FallbackResolver(registry)
        self._cache_config = cache if cache is not None else CacheConfig()
        self._lock = RWLock()
        self._handles: dict[LocaleId, LocaleHandle] = {}

        pinned: dict[LocaleId, LocaleHandle] = {}
        for locale in registry.locales:
            pinned[locale] = self._create_handle(locale)
        for tag in self._cache_config.preload:
            locale = LocaleId.parse(tag)
            if locale not in pinned:
                pinned[locale] = self._create_handle(locale)
        self._pinned = pinned

    @classmethod
    def build(
        cls,
        tables: TablesInput,
        default_locale: LocaleId | LocaleCode,
        *,
        cache: CacheConfig | None = None,
    ) -> LocalizationTable:
        """Validate build-time input and construct the table.

        Args:
            tables: Mapping or iterable of (locale, entries) pairs. entries is
                a mapping, an iterable of (key, text) pairs or a StringTable.
            default_locale: Locale every chain ends with; must be in tables
            cache: Handle cache configuration

        Returns:
            Fully validated LocalizationTable

        Raises:
            DuplicateKeyError: If one locale's entries repeat a key
            DuplicateLocaleError: If two locales normalize to the same identifier
            MissingDefaultLocaleError: If default_locale has no entries
            InvalidLocaleError: If a locale tag is malformed
        """
        pairs = tables.items() if isinstance(tables, Mapping) else tables
        registry = LocaleRegistry(default_locale)
        for locale, entries in pairs:
            locale_id = LocaleId.coerce(locale)
            if isinstance(entries, StringTable):
                table = entries
            else:
                table = StringTable.build(entries, locale=str(locale_id))
            registry.register(locale_id, table)
        registry.seal()

        l10n = cls(registry, cache=cache)
        logger.info(
            "Built LocalizationTable with %d locales (default: %s)",
            len(registry),
            registry.default_locale(),
        )
        return l10n

    def _create_handle(self, locale: LocaleId | LocaleCode | None) -> LocaleHandle:
        return LocaleHandle(self._registry, self._resolver.resolve(locale))

    def handle_for(self, locale: LocaleId | LocaleCode | None) -> LocaleHandle:
        """Return a handle bound to the fallback chain of locale.

        Empty, None and malformed tags yield a handle whose chain is the
        default locale only; such handles are not cached.

        Args:
            locale: Requested locale in any case/separator style

        Returns:
            LocaleHandle; equal handles for equal normalized locales
        """
        locale_id = locale if isinstance(locale, LocaleId) else LocaleId.try_parse(locale)
        if locale_id is None:
            return self._create_handle(locale)

        handle = self._pinned.get(locale_id)
        if handle is not None:
            return handle

        with self._lock.read():
            handle = self._handles.get(locale_id)
        if handle is not None:
            return handle

        # Computed outside the lock; a racing thread may do the same work.
        handle = self._create_handle(locale_id)
        with self._lock.write():
            existing = self._handles.get(locale_id)
            if existing is not None:
                return existing
            if len(self._handles) >= self._cache_config.size:
                evicted = next(iter(self._handles))
                del self._handles[evicted]
                logger.debug("Evicted cached handle for %s", evicted)
            self._handles[locale_id] = handle
            logger.debug("Cached handle for %s: %s", locale_id, handle.chain)
        return handle

    def lookup(self, locale: LocaleId | LocaleCode | None, key: TranslationKey) -> TranslationText:
        """Resolve key for locale without holding a handle.

        Equivalent to handle_for(locale).resolve(key).

        Raises:
            MissingKeyError: If no locale in the chain contains key
        """
        try:
            return self.handle_for(locale).resolve(key)
        except MissingKeyError:
            logger.debug("Key '%s' not found for locale '%s'", key, locale)
            raise

    def negotiate(self, preferred: str | Iterable[LocaleCode]) -> LocaleHandle:
        """Pick a handle for the first preferred locale the table can serve.

        A preferred tag can be served if it, or one of its truncations, is a
        registered locale. When none can, the default locale's handle is
        returned.

        Args:
            preferred: Locale tags in preference order, or an HTTP
                Accept-Language header value

        Example:
            >>> l10n.negotiate("fr-CH, de;q=0.9, en;q=0.5").locale
            LocaleId(subtags=('de',))
        """
        if isinstance(preferred, str):
            preferred = parse_accept_language(preferred)
        for tag in preferred:
            locale_id = LocaleId.try_parse(tag)
            if locale_id is None:
                continue
            if any(candidate in self._registry for candidate in locale_id.truncations()):
                return self.handle_for(locale_id)
        return self.handle_for(self._registry.default_locale())

    @property
    def registry(self) -> LocaleRegistry:
        """Underlying sealed registry."""
        return self._registry

    @property
    def default_locale(self) -> LocaleId:
        """Locale every fallback chain ends with."""
        return self._registry.default_locale()

    @property
    def locales(self) -> tuple[LocaleId, ...]:
        """Registered locales in registration order."""
        return self._registry.locales

    @property
    def cache_config(self) -> CacheConfig:
        """Handle cache configuration (read-only)."""
        return self._cache_config

    def cache_info(self) -> dict[str, int | tuple[str, ...]]:
        """Get handle cache statistics.

        Returns:
            Dictionary with:
            - pinned: Number of eagerly built handles
            - size: Current number of lazily cached handles
            - max_size: Maximum lazily cached handles
            - locales: Lazily cached locale tags (oldest first)
        """
        with self._lock.read():
            return {
                "pinned": len(self._pinned),
                "size": len(self._handles),
                "max_size": self._cache_config.size,
                "locales": tuple(str(locale) for locale in self._handles),
            }

    def clear_cache(self) -> None:
        """Drop lazily cached handles. Pinned handles are kept."""
        with self._lock.write():
            self._handles.clear()

    def __contains__(self, locale: object) -> bool:
        return locale in self._registry

    def __repr__(self) -> str:
        return (
            f"LocalizationTable(default={str(self.default_locale)!r}, "
            f"locales={tuple(str(locale) for locale in self.locales)!r})"
        )
