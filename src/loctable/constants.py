"""Shared constants for loctable.

Centralizes configuration constants used by the runtime and localization
packages. Placing them here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- Locale identifiers: separators and size limits for normalization
- Cache limits: memory bounds for the handle cache
- System locale: fallback used when the OS locale cannot be detected

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale identifiers
    "LOCALE_SEPARATOR",
    "POSIX_SEPARATOR",
    "MAX_LOCALE_LENGTH",
    "MAX_SUBTAG_LENGTH",
    # Cache limits
    "MAX_HANDLE_CACHE_SIZE",
    # System locale
    "FALLBACK_SYSTEM_LOCALE",
]

# ============================================================================
# LOCALE IDENTIFIERS
# ============================================================================

# Canonical subtag separator (BCP-47 style: en-US).
LOCALE_SEPARATOR: str = "-"

# Accepted alternative separator (POSIX style: en_US). Rewritten to "-".
POSIX_SEPARATOR: str = "_"

# Longest accepted locale tag, in characters. Longer input is malformed.
MAX_LOCALE_LENGTH: int = 255

# Longest accepted subtag (BCP-47 allows at most 8 characters).
MAX_SUBTAG_LENGTH: int = 8

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum lazily cached LocaleHandle instances per LocalizationTable.
# Handles for registered locales are pinned and do not count against this.
# Requests for arbitrary, unregistered tags (e.g. from Accept-Language
# headers) would otherwise grow the cache without bound.
MAX_HANDLE_CACHE_SIZE: int = 128

# ============================================================================
# SYSTEM LOCALE
# ============================================================================

# Returned by get_system_locale() when nothing can be detected.
FALLBACK_SYSTEM_LOCALE: str = "en-US"
