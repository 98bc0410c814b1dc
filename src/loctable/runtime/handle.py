"""Pre-resolved lookup handle bound to one fallback chain.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loctable.diagnostics import MissingKeyError
from loctable.locale_utils import LocaleId, locale_display_name
from loctable.localization.types import TranslationKey, TranslationText
from loctable.runtime.fallback import FallbackChain
from loctable.runtime.registry import LocaleRegistry
from loctable.runtime.table import StringTable

__all__ = ["LocaleHandle"]


@dataclass(frozen=True, slots=True)
class LocaleHandle:
    """Lookup context for one requested locale.

    The fallback chain is resolved once, when the handle is created; the
    string tables of every chain entry are fetched from the registry at the
    same time. resolve() then only walks a short tuple of mappings.

    Handles do not own string data. They are immutable, safe to share
    between threads, and compare equal when bound to the same registry and
    chain. Obtain them from LocalizationTable.handle_for().

    Example:
        >>> handle = l10n.handle_for("en-US-posix")
        >>> str(handle.chain)
        'en-US -> en'
        >>> handle.resolve("greeting")
        'Hello'
    """

    registry: LocaleRegistry
    chain: FallbackChain
    _tables: tuple[StringTable, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Fetch the tables of every chain entry.

        Raises:
            ValueError: If a chain entry is not registered
        """
        tables: list[StringTable] = []
        for locale in self.chain:
            table = self.registry.lookup_table(locale)
            if table is None:
                msg = f"Chain locale '{locale}' is not registered"
                raise ValueError(msg)
            tables.append(table)
        object.__setattr__(self, "_tables", tuple(tables))

    @property
    def requested(self) -> str:
        """Requested locale tag."""
        return self.chain.requested

    @property
    def locale(self) -> LocaleId:
        """Most specific registered locale this handle answers from."""
        return self.chain.head

    def resolve(self, key: TranslationKey) -> TranslationText:
        """Return the text for key from the first chain locale that has it.

        Raises:
            MissingKeyError: If no locale in the chain, including the
                default, contains key
        """
        for table in self._tables:
            text = table.get(key)
            if text is not None:
                return text
        raise MissingKeyError(key, self.chain.requested, self.chain)

    def get(self, key: TranslationKey, default: TranslationText | None = None) -> TranslationText | None:
        """Like resolve(), returning default instead of raising."""
        for table in self._tables:
            text = table.get(key)
            if text is not None:
                return text
        return default

    def locate(self, key: TranslationKey) -> LocaleId | None:
        """Return the chain locale that answers key, or None."""
        for locale, table in zip(self.chain.locales, self._tables, strict=True):
            if key in table:
                return locale
        return None

    @property
    def display_name(self) -> str | None:
        """CLDR display name of the handle's locale, in that locale."""
        return locale_display_name(str(self.chain.head))

    def __contains__(self, key: object) -> bool:
        return any(key in table for table in self._tables)

    def __str__(self) -> str:
        return str(self.chain.head)
