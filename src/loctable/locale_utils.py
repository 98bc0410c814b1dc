"""Locale identifier normalization and locale utilities.

Centralizes locale tag handling used throughout the codebase. All locale
input is normalized at the system boundary so registry keys, cache keys and
fallback truncation operate on one canonical form.

Canonical form:
    - Subtags separated by "-" ("_" accepted on input)
    - Language subtag lowercase, 2-letter alphabetic subtags uppercase
      (region), 4-letter alphabetic subtags titlecase (script), everything
      else lowercase: "EN_us_POSIX" -> "en-US-posix"

Casing depends only on subtag position and shape, so two tags that differ
only in case or separator normalize to the same identifier.

Python 3.13+. Uses Babel for CLDR display names.
"""

from __future__ import annotations

import functools
import math
import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loctable.constants import (
    FALLBACK_SYSTEM_LOCALE,
    LOCALE_SEPARATOR,
    MAX_LOCALE_LENGTH,
    MAX_SUBTAG_LENGTH,
    POSIX_SEPARATOR,
)
from loctable.diagnostics import InvalidLocaleError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "LocaleId",
    "get_babel_locale",
    "get_system_locale",
    "locale_display_name",
    "normalize_locale",
    "parse_accept_language",
]


def _canonical_subtag(subtag: str, position: int) -> str:
    if position == 0:
        return subtag.lower()
    if subtag.isalpha():
        if len(subtag) == 2:
            return subtag.upper()
        if len(subtag) == 4:
            return subtag.title()
    return subtag.lower()


def _split_subtags(code: str) -> tuple[str, ...] | None:
    """Split and canonicalize a locale tag; None if malformed."""
    code = code.strip()
    if not code or len(code) > MAX_LOCALE_LENGTH:
        return None

    parts = code.replace(POSIX_SEPARATOR, LOCALE_SEPARATOR).split(LOCALE_SEPARATOR)
    language = parts[0]
    if not (2 <= len(language) <= MAX_SUBTAG_LENGTH and language.isascii() and language.isalpha()):
        return None
    for part in parts[1:]:
        if not (1 <= len(part) <= MAX_SUBTAG_LENGTH and part.isascii() and part.isalnum()):
            return None

    return tuple(_canonical_subtag(part, i) for i, part in enumerate(parts))


@dataclass(frozen=True, slots=True)
class LocaleId:
    """Normalized locale identifier.

    An ordered, non-empty tuple of canonically cased subtags. Two LocaleIds
    are equal iff their subtag tuples are equal, which makes LocaleId safe
    to use as a dict key for registry and cache lookups.

    Construct through LocaleId.parse() or LocaleId.try_parse(); direct
    construction skips normalization.

    Example:
        >>> locale = LocaleId.parse("en_us_POSIX")
        >>> str(locale)
        'en-US-posix'
        >>> [str(loc) for loc in locale.truncations()]
        ['en-US-posix', 'en-US', 'en']
    """

    subtags: tuple[str, ...]

    @classmethod
    def parse(cls, code: str) -> LocaleId:
        """Parse and normalize a locale tag.

        Raises:
            InvalidLocaleError: If the tag is empty or malformed
        """
        subtags = _split_subtags(code) if isinstance(code, str) else None
        if subtags is None:
            raise InvalidLocaleError(code)
        return cls(subtags)

    @classmethod
    def try_parse(cls, code: str | None) -> LocaleId | None:
        """Parse a locale tag, returning None instead of raising."""
        if not isinstance(code, str):
            return None
        subtags = _split_subtags(code)
        return cls(subtags) if subtags is not None else None

    @classmethod
    def coerce(cls, value: LocaleId | str) -> LocaleId:
        """Return value unchanged if already a LocaleId, else parse it."""
        if isinstance(value, LocaleId):
            return value
        return cls.parse(value)

    @property
    def language(self) -> str:
        """Language subtag."""
        return self.subtags[0]

    @property
    def parent(self) -> LocaleId | None:
        """Identifier with the rightmost subtag dropped, or None for a bare language."""
        if len(self.subtags) == 1:
            return None
        return LocaleId(self.subtags[:-1])

    def truncations(self) -> Iterator[LocaleId]:
        """Yield this identifier, then each progressively shorter prefix."""
        for length in range(len(self.subtags), 0, -1):
            yield LocaleId(self.subtags[:length])

    def __str__(self) -> str:
        return LOCALE_SEPARATOR.join(self.subtags)

    def __len__(self) -> int:
        return len(self.subtags)


def normalize_locale(locale_code: str) -> str:
    """Normalize a locale tag to its canonical string form.

    Total and idempotent: malformed input (empty, non-ASCII, bad subtag
    lengths) maps to the empty string, which normalizes to itself.

    Args:
        locale_code: Locale tag in BCP-47 or POSIX form (e.g., "en-US", "pt_br")

    Returns:
        Canonical tag (e.g., "en-US", "pt-BR"), or "" if malformed

    Example:
        >>> normalize_locale("pt_br")
        'pt-BR'
        >>> normalize_locale("zh-hans-cn")
        'zh-Hans-CN'
        >>> normalize_locale("not a locale")
        ''
    """
    locale = LocaleId.try_parse(locale_code)
    return str(locale) if locale is not None else ""


def parse_accept_language(header: str) -> tuple[str, ...]:
    """Parse an HTTP Accept-Language header into language ranges by preference.

    Ranges are ordered by descending quality; ties keep header order.
    A quality value must be a finite number in (0, 1]; ranges whose value is
    0, out of range (negative, above 1, inf) or not a number (nan, "abc")
    are dropped, as are wildcards. Ranges are returned as written;
    normalization happens at lookup.

    Example:
        >>> parse_accept_language("fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5")
        ('fr-CH', 'fr', 'en')
    """
    weighted: list[tuple[float, int, str]] = []
    for index, item in enumerate(header.split(",")):
        language, _, params = item.partition(";")
        language = language.strip()
        if not language or language == "*":
            continue
        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = 0.0
        if not (math.isfinite(quality) and 0 < quality <= 1):
            continue
        weighted.append((-quality, index, language))
    weighted.sort()
    return tuple(language for _, _, language in weighted)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale tag (BCP-47 or POSIX form accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not known to CLDR
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code, sep=LOCALE_SEPARATOR)


def locale_display_name(locale_code: str, display_locale: str | None = None) -> str | None:
    """Return the CLDR display name of a locale.

    Args:
        locale_code: Locale to describe
        display_locale: Locale to describe it in. Defaults to locale_code
            itself, which is also used when display_locale is malformed or
            unknown to CLDR.

    Returns:
        Display name (e.g., "English (United States)"), or None when
        locale_code is malformed or unknown to CLDR.

    Example:
        >>> locale_display_name("de-AT", "en")
        'German (Austria)'
    """
    from babel import UnknownLocaleError  # noqa: PLC0415

    normalized = normalize_locale(locale_code)
    if not normalized:
        return None
    try:
        locale = get_babel_locale(normalized)
    except (UnknownLocaleError, ValueError):
        return None

    display_normalized = normalize_locale(display_locale) if display_locale is not None else ""
    if not display_normalized:
        return locale.get_display_name()
    try:
        return locale.get_display_name(get_babel_locale(display_normalized))
    except (UnknownLocaleError, ValueError):
        return locale.get_display_name()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Encoding suffixes (".UTF-8") and modifiers ("@euro") are stripped and the
    result is normalized. "C" and "POSIX" pseudo-locales are ignored.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en-US" as fallback.

    Returns:
        Canonical locale tag.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str | None] = []
    try:
        candidates.append(locale_module.getlocale()[0])
    except (ValueError, AttributeError):
        pass
    candidates.extend(os.environ.get(var) for var in ("LC_ALL", "LC_MESSAGES", "LANG"))

    for value in candidates:
        if not value or value in ("C", "POSIX"):
            continue
        normalized = normalize_locale(value.split(".")[0].split("@")[0])
        if normalized:
            return normalized

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return FALLBACK_SYSTEM_LOCALE
