"""Tests for the loctable exception hierarchy and diagnostic codes.

Python 3.13+.
"""

from __future__ import annotations

import pickle

import pytest

from loctable import LocalizationTable
from loctable.diagnostics import (
    BuildError,
    DiagnosticCode,
    DuplicateKeyError,
    DuplicateLocaleError,
    ErrorCategory,
    InvalidLocaleError,
    LocalizeError,
    LookupFailure,
    MissingDefaultLocaleError,
    MissingKeyError,
)


class TestDiagnosticCodes:
    """Code numbering and categories."""

    def test_codes_unique(self) -> None:
        """Every code has a distinct value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.DUPLICATE_KEY, 1000, 1999),
            (DiagnosticCode.DUPLICATE_LOCALE, 1000, 1999),
            (DiagnosticCode.MISSING_DEFAULT_LOCALE, 1000, 1999),
            (DiagnosticCode.INVALID_LOCALE, 1000, 1999),
            (DiagnosticCode.MISSING_KEY, 2000, 2999),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        """Build codes are 1xxx, lookup codes 2xxx."""
        assert low <= code.value <= high

    def test_category_str(self) -> None:
        """StrEnum categories stringify to their value."""
        assert str(ErrorCategory.BUILD) == "build"
        assert f"{ErrorCategory.LOOKUP}" == "lookup"


class TestErrorHierarchy:
    """Base classes, attributes and messages."""

    @pytest.mark.parametrize(
        ("error", "code", "message"),
        [
            (
                DuplicateKeyError("a", "en"),
                DiagnosticCode.DUPLICATE_KEY,
                "Duplicate key 'a' in string table for locale 'en'",
            ),
            (
                DuplicateKeyError("a"),
                DiagnosticCode.DUPLICATE_KEY,
                "Duplicate key 'a' in string table",
            ),
            (
                DuplicateLocaleError("en-US"),
                DiagnosticCode.DUPLICATE_LOCALE,
                "Locale 'en-US' is already registered",
            ),
            (
                MissingDefaultLocaleError("en"),
                DiagnosticCode.MISSING_DEFAULT_LOCALE,
                "No string table registered for default locale 'en'",
            ),
            (
                InvalidLocaleError("e!"),
                DiagnosticCode.INVALID_LOCALE,
                "Malformed locale identifier: 'e!'",
            ),
        ],
    )
    def test_build_errors(self, error: BuildError, code: DiagnosticCode, message: str) -> None:
        """Build errors carry their code, category and message."""
        assert isinstance(error, BuildError)
        assert isinstance(error, LocalizeError)
        assert error.code is code
        assert error.category is ErrorCategory.BUILD
        assert str(error) == message
        assert error.format_error() == f"error[{code.name}]: {message}"

    def test_invalid_locale_is_value_error(self) -> None:
        """InvalidLocaleError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Malformed locale"):
            raise InvalidLocaleError("??")

    def test_missing_key_error(self) -> None:
        """MissingKeyError is a lookup failure and a KeyError with a plain message."""
        error = MissingKeyError("farewell", "en-US")
        assert isinstance(error, LookupFailure)
        assert isinstance(error, KeyError)
        assert error.category is ErrorCategory.LOOKUP
        assert error.chain is None
        assert str(error) == "Key 'farewell' not found for locale 'en-US'"
        assert error.format_error() == (
            "error[MISSING_KEY]: Key 'farewell' not found for locale 'en-US'"
        )

    def test_missing_key_carries_chain(self, spanglish: LocalizationTable) -> None:
        """Errors from handles carry the searched chain."""
        with pytest.raises(MissingKeyError) as exc_info:
            spanglish.lookup("en-US", "nope")
        chain = exc_info.value.chain
        assert chain is not None
        assert str(chain) == "en-US -> en"

    def test_catch_all_base(self) -> None:
        """Every loctable failure is a LocalizeError."""
        with pytest.raises(LocalizeError):
            LocalizationTable.build({"de": {}}, "en")


class TestErrorPickling:
    """Errors survive pickling, e.g. across process pools."""

    @pytest.mark.parametrize(
        "error",
        [
            DuplicateKeyError("a", "en"),
            DuplicateKeyError("a"),
            DuplicateLocaleError("en-US"),
            MissingDefaultLocaleError("en"),
            InvalidLocaleError("e!"),
            MissingKeyError("farewell", "en-US"),
        ],
    )
    def test_round_trip_keeps_fields(self, error: LocalizeError) -> None:
        """Type, message and context attributes are preserved."""
        restored = pickle.loads(pickle.dumps(error))
        assert type(restored) is type(error)
        assert str(restored) == str(error)
        assert vars(restored) == vars(error)

    def test_missing_key_with_chain(self, spanglish: LocalizationTable) -> None:
        """MissingKeyError raised by a handle keeps its chain."""
        with pytest.raises(MissingKeyError) as exc_info:
            spanglish.lookup("en-US", "nope")
        restored = pickle.loads(pickle.dumps(exc_info.value))
        assert restored.key == "nope"
        assert restored.locale == "en-US"
        assert restored.chain == exc_info.value.chain
