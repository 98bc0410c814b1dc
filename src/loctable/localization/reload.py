"""Atomic reload of a LocalizationTable.

A live LocalizationTable is never mutated. Reloading builds a complete new
table and swaps the reference in one step; readers see either the old or
the new table, never a mix.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from loctable.locale_utils import LocaleId
from loctable.localization.orchestrator import LocalizationTable
from loctable.localization.types import LocaleCode, TranslationKey, TranslationText
from loctable.runtime.handle import LocaleHandle

__all__ = ["LocalizationReference"]

logger = logging.getLogger(__name__)


class LocalizationReference:
    """Shared, swappable reference to the current LocalizationTable.

    Pass one LocalizationReference to every consumer instead of a module
    global. Handles taken before a swap keep answering from the table that
    issued them; take a new handle to observe a reload.

    Example:
        >>> ref = LocalizationReference(LocalizationTable.build(tables, "en"))
        >>> ref.lookup("en", "greeting")
        'Hello'
        >>> _ = ref.reload(lambda: LocalizationTable.build(new_tables, "en"))
        >>> ref.lookup("en", "greeting")
        'Hello again'
    """

    __slots__ = ("_current", "_swap_lock")

    def __init__(self, table: LocalizationTable) -> None:
        self._current = table
        # Serializes writers only; reading self._current is a single atomic load
        self._swap_lock = threading.Lock()

    @property
    def current(self) -> LocalizationTable:
        """The table currently in effect."""
        return self._current

    def swap(self, table: LocalizationTable) -> LocalizationTable:
        """Replace the current table, returning the previous one."""
        with self._swap_lock:
            previous = self._current
            self._current = table
        logger.info("Swapped LocalizationTable: %r -> %r", previous, table)
        return previous

    def reload(self, factory: Callable[[], LocalizationTable]) -> LocalizationTable:
        """Build a new table with factory and swap it in.

        factory runs before any lock is taken. If it raises, the current
        table stays in place and the exception propagates.

        Returns:
            The newly installed table
        """
        table = factory()
        self.swap(table)
        return table

    def handle_for(self, locale: LocaleId | LocaleCode | None) -> LocaleHandle:
        """Delegate to the current table's handle_for()."""
        return self._current.handle_for(locale)

    def lookup(self, locale: LocaleId | LocaleCode | None, key: TranslationKey) -> TranslationText:
        """Delegate to the current table's lookup()."""
        return self._current.lookup(locale, key)

    def __repr__(self) -> str:
        return f"LocalizationReference({self._current!r})"
