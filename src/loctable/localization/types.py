"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating LocalizationTable call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Mapping

__all__ = [
    "LocaleCode",
    "TableEntries",
    "TranslationKey",
    "TranslationText",
]

type TranslationKey = str
"""Identifier of a translatable string (e.g., 'greeting', 'error.not_found')."""

type TranslationText = str
"""Localized text, returned verbatim (placeholder markers are not interpreted)."""

type LocaleCode = str
"""Locale tag in BCP-47 or POSIX form (e.g., 'en', 'pt-BR', 'zh_Hans_CN')."""

type TableEntries = Mapping[str, str] | Iterable[tuple[str, str]]
"""Build input for one locale: a mapping or an iterable of (key, text) pairs."""
