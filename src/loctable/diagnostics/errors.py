"""loctable exception hierarchy.

Hierarchy:
    LocalizeError (base)
    ├─ BuildError (build time, fatal to construction)
    │  ├─ DuplicateKeyError
    │  ├─ DuplicateLocaleError
    │  ├─ MissingDefaultLocaleError
    │  └─ InvalidLocaleError (also ValueError)
    └─ LookupFailure (lookup time, recoverable)
       └─ MissingKeyError (also KeyError)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .codes import DiagnosticCode, ErrorCategory

if TYPE_CHECKING:
    from loctable.runtime.fallback import FallbackChain

__all__ = [
    "BuildError",
    "DuplicateKeyError",
    "DuplicateLocaleError",
    "InvalidLocaleError",
    "LocalizeError",
    "LookupFailure",
    "MissingDefaultLocaleError",
    "MissingKeyError",
]


class LocalizeError(Exception):
    """Base exception for all loctable errors.

    Attributes:
        code: Diagnostic code identifying the failure
        category: Build-time or lookup-time failure
    """

    code: ClassVar[DiagnosticCode]
    category: ClassVar[ErrorCategory]

    def format_error(self) -> str:
        """Format the error with its diagnostic code.

        Example:
            >>> MissingKeyError("farewell", "en-US").format_error()
            "error[MISSING_KEY]: Key 'farewell' not found for locale 'en-US'"
        """
        return f"error[{self.code.name}]: {self}"


class BuildError(LocalizeError):
    """Invalid build-time input.

    Raised only while constructing StringTable, LocaleRegistry or
    LocalizationTable. Never produces a partially valid table.
    """

    category = ErrorCategory.BUILD


class DuplicateKeyError(BuildError):
    """Two entries of one string table share a key.

    Attributes:
        key: The duplicated key
        locale: Locale of the table being built (empty if unknown)
    """

    code = DiagnosticCode.DUPLICATE_KEY

    def __init__(self, key: str, locale: str = "") -> None:
        self.key = key
        self.locale = locale
        if locale:
            msg = f"Duplicate key '{key}' in string table for locale '{locale}'"
        else:
            msg = f"Duplicate key '{key}' in string table"
        super().__init__(msg)

    def __reduce__(self) -> tuple[type[DuplicateKeyError], tuple[str, str]]:
        return (type(self), (self.key, self.locale))


class DuplicateLocaleError(BuildError):
    """A locale was registered twice (after normalization).

    Attributes:
        locale: Canonical tag of the duplicated locale
    """

    code = DiagnosticCode.DUPLICATE_LOCALE

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"Locale '{locale}' is already registered")

    def __reduce__(self) -> tuple[type[DuplicateLocaleError], tuple[str]]:
        return (type(self), (self.locale,))


class MissingDefaultLocaleError(BuildError):
    """The declared default locale has no registered table.

    Attributes:
        locale: Canonical tag of the default locale
    """

    code = DiagnosticCode.MISSING_DEFAULT_LOCALE

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"No string table registered for default locale '{locale}'")

    def __reduce__(self) -> tuple[type[MissingDefaultLocaleError], tuple[str]]:
        return (type(self), (self.locale,))


class InvalidLocaleError(BuildError, ValueError):
    """A locale identifier could not be normalized.

    Attributes:
        locale: The malformed input, as given
    """

    code = DiagnosticCode.INVALID_LOCALE

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"Malformed locale identifier: {locale!r}")

    def __reduce__(self) -> tuple[type[InvalidLocaleError], tuple[str]]:
        return (type(self), (self.locale,))


class LookupFailure(LocalizeError):
    """A lookup could not be satisfied."""

    category = ErrorCategory.LOOKUP


class MissingKeyError(LookupFailure, KeyError):
    """No locale in the fallback chain contains the key.

    Subclasses KeyError so mapping-style callers can catch it; unlike
    KeyError, str() returns the plain message rather than its repr.

    Attributes:
        key: The key that was looked up
        locale: The requested locale tag
        chain: The fallback chain that was searched (None if unknown)
    """

    code = DiagnosticCode.MISSING_KEY

    def __init__(self, key: str, locale: str, chain: FallbackChain | None = None) -> None:
        self.key = key
        self.locale = locale
        self.chain = chain
        super().__init__(f"Key '{key}' not found for locale '{locale}'")

    def __str__(self) -> str:
        return str(self.args[0])

    def __reduce__(
        self,
    ) -> tuple[type[MissingKeyError], tuple[str, str, FallbackChain | None]]:
        # Rebuild from fields; args only holds the formatted message
        return (type(self), (self.key, self.locale, self.chain))
