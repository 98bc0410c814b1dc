"""loctable - Precompiled localized string tables with locale fallback.

Lookup of localized strings by locale and key. String tables are built once,
validated eagerly, and then only read; lookups go through handles that carry
a pre-resolved fallback chain (en-US-posix -> en-US -> en).

Public API:
    LocalizationTable - Build the system, issue handles, look strings up
    LocaleHandle - Pre-resolved lookup context for one requested locale
    LocalizationReference - Atomic swap of a table for reloads
    StringTable - Immutable key -> text mapping for one locale
    LocaleId - Normalized locale identifier
    CacheConfig - Handle cache configuration
    load_localization / PathTableLoader / tables_from_definition - Build-time loading

Exceptions:
    LocalizeError - Base exception class
    BuildError - Invalid build input (DuplicateKeyError, DuplicateLocaleError,
        MissingDefaultLocaleError, InvalidLocaleError)
    MissingKeyError - Key absent from every locale of the fallback chain

Submodules:
    loctable.runtime - StringTable, LocaleRegistry, FallbackResolver, LocaleHandle
    loctable.localization - LocalizationTable, loading, reload
    loctable.locale_utils - Locale normalization, Accept-Language, system locale
    loctable.diagnostics - Error types and diagnostic codes
"""

from .diagnostics import (
    BuildError,
    DuplicateKeyError,
    DuplicateLocaleError,
    InvalidLocaleError,
    LocalizeError,
    MissingDefaultLocaleError,
    MissingKeyError,
)
from .locale_utils import LocaleId, normalize_locale
from .localization import (
    LocalizationReference,
    LocalizationTable,
    PathTableLoader,
    load_localization,
    tables_from_definition,
)
from .runtime import CacheConfig, FallbackChain, LocaleHandle, StringTable

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("loctable")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BuildError",
    "CacheConfig",
    "DuplicateKeyError",
    "DuplicateLocaleError",
    "FallbackChain",
    "InvalidLocaleError",
    "LocaleHandle",
    "LocaleId",
    "LocalizationReference",
    "LocalizationTable",
    "LocalizeError",
    "MissingDefaultLocaleError",
    "MissingKeyError",
    "PathTableLoader",
    "StringTable",
    "__version__",
    "load_localization",
    "normalize_locale",
    "tables_from_definition",
]
