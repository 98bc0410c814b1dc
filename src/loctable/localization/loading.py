"""Build-time loading of string table definitions.

Turns source definitions into the build input of LocalizationTable.build():

Components:
    tables_from_definition - Transpose a key-major definition
        ({key: {locale: text}}) into per-locale entries
    TableLoader - Protocol for loading one locale's entries
    PathTableLoader - JSON file loader with path-traversal prevention
    load_localization - Load every locale through a loader and build

All loading happens once, before build(); the runtime never touches files.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from loctable.diagnostics import DuplicateKeyError, DuplicateLocaleError
from loctable.locale_utils import LocaleId, normalize_locale
from loctable.localization.orchestrator import LocalizationTable
from loctable.localization.types import LocaleCode, TranslationKey, TranslationText

if TYPE_CHECKING:
    from loctable.runtime.cache_config import CacheConfig

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Definition transposition
    "tables_from_definition",
    # Loader protocol and implementation
    "TableLoader",
    "PathTableLoader",
    # Build helper
    "load_localization",
]

logger = logging.getLogger(__name__)


def tables_from_definition(
    definition: Mapping[TranslationKey, Mapping[LocaleCode, TranslationText]],
) -> dict[LocaleId, dict[TranslationKey, TranslationText]]:
    """Transpose a key-major definition into per-locale entries.

    Definitions are usually written key by key, with one translation per
    locale; the runtime stores strings locale by locale.

    Args:
        definition: Mapping of key to {locale: text}

    Returns:
        Mapping of normalized locale to {key: text}, locales in first-seen order

    Raises:
        DuplicateLocaleError: If two locales of one key normalize to the same
            identifier (e.g. "en-US" and "en_us")
        InvalidLocaleError: If a locale tag is malformed

    Example:
        >>> tables = tables_from_definition({
        ...     "greeting": {"en": "Hello", "es": "Hola"},
        ...     "apple": {"en": "Apple", "fr": "Pomme"},
        ... })
        >>> {str(locale): entries for locale, entries in tables.items()}
        {'en': {'greeting': 'Hello', 'apple': 'Apple'}, 'es': {'greeting': 'Hola'}, 'fr': {'apple': 'Pomme'}}
    """
    tables: dict[LocaleId, dict[TranslationKey, TranslationText]] = {}
    for key, translations in definition.items():
        seen: set[LocaleId] = set()
        for locale, text in translations.items():
            locale_id = LocaleId.coerce(locale)
            if locale_id in seen:
                raise DuplicateLocaleError(str(locale_id))
            seen.add(locale_id)
            tables.setdefault(locale_id, {})[key] = text
    return tables


class TableLoader(Protocol):
    """Protocol for loading the string entries of one locale.

    This is a Protocol (structural typing) rather than ABC so any object
    with matching methods works as a loader.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, data): self.data = data
        ...     def load(self, locale): return self.data[locale]
        ...     def describe_path(self, locale): return f"<memory>/{locale}"
    """

    def load(self, locale: LocaleCode) -> Mapping[TranslationKey, TranslationText]:
        """Load the entries for locale.

        Raises:
            FileNotFoundError: If no definition exists for locale
            OSError: If the definition cannot be read
            ValueError: If the definition is invalid
        """

    def describe_path(self, locale: LocaleCode) -> str:
        """Return a human-readable source description for diagnostics."""
        return f"{locale}"


def _reject_duplicate_keys(
    locale: LocaleCode,
) -> Callable[[list[tuple[str, object]]], dict[str, object]]:
    """Build a json object_pairs_hook that rejects repeated keys."""

    def hook(pairs: list[tuple[str, object]]) -> dict[str, object]:
        result: dict[str, object] = {}
        for key, value in pairs:
            if key in result:
                raise DuplicateKeyError(key, locale)
            result[key] = value
        return result

    return hook


@dataclass(frozen=True, slots=True)
class PathTableLoader:
    """File system loader for per-locale JSON string tables.

    Each locale is one UTF-8 JSON file holding a flat object of string keys
    to string values. The {locale} placeholder in path_template is replaced
    by the locale tag as given.

    Security:
        Locale tags containing path separators or ".." are rejected, and the
        resolved path must stay inside root_dir.

    Example:
        >>> loader = PathTableLoader("locales/{locale}.json")
        >>> loader.load("en")
        # Reads locales/en.json

    Attributes:
        path_template: File path template with {locale} placeholder
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix directory of path_template.
    """

    path_template: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the template and cache the resolved root directory.

        Raises:
            ValueError: If path_template does not contain {locale}
        """
        if "{locale}" not in self.path_template:
            msg = (
                f"path_template must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.path_template}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.path_template.split("{locale}")[0]
            prefix_dir = static_prefix if static_prefix.endswith(("/", "\\")) else str(
                Path(static_prefix).parent
            )
            resolved = Path(prefix_dir).resolve() if prefix_dir else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleCode) -> str:
        """Return the locale-substituted file path."""
        return self.path_template.replace("{locale}", locale)

    def load(self, locale: LocaleCode) -> Mapping[TranslationKey, TranslationText]:
        """Read and validate the JSON table for locale.

        Raises:
            ValueError: On unsafe locale, path escaping root_dir, invalid JSON,
                or content that is not a flat object of strings
            DuplicateKeyError: If the JSON object repeats a key
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        self._validate_locale(locale)
        full_path = Path(self.describe_path(locale)).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}'"
            )
            raise ValueError(msg)

        source = full_path.read_text(encoding="utf-8")
        try:
            data = json.loads(source, object_pairs_hook=_reject_duplicate_keys(locale))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in {full_path}: {e}"
            raise ValueError(msg) from e

        if not isinstance(data, dict):
            msg = f"Expected a JSON object in {full_path}, got {type(data).__name__}"
            raise ValueError(msg)
        for key, value in data.items():
            if not isinstance(value, str):
                msg = f"Value for key '{key}' in {full_path} must be a string"
                raise ValueError(msg)

        logger.debug("Loaded %d keys for %s from %s", len(data), locale, full_path)
        return data


def load_localization(
    loader: TableLoader,
    locales: Iterable[LocaleCode],
    default_locale: LocaleCode,
    *,
    cache: CacheConfig | None = None,
) -> LocalizationTable:
    """Load every locale through loader and build a LocalizationTable.

    The default locale is loaded even when missing from locales. Loading
    and validation errors propagate unchanged (fail fast).

    Raises:
        FileNotFoundError, OSError, ValueError: From the loader
        DuplicateKeyError, DuplicateLocaleError, MissingDefaultLocaleError,
        InvalidLocaleError: From LocalizationTable.build()
    """
    requested = list(locales)
    if normalize_locale(default_locale) not in {normalize_locale(locale) for locale in requested}:
        requested.append(default_locale)

    tables: list[tuple[LocaleCode, Mapping[TranslationKey, TranslationText]]] = []
    for locale in requested:
        logger.debug("Loading %s from %s", locale, loader.describe_path(locale))
        tables.append((locale, loader.load(locale)))

    return LocalizationTable.build(tables, default_locale, cache=cache)
