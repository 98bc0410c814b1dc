"""Diagnostic codes for loctable errors.

Every loctable exception carries a DiagnosticCode and an ErrorCategory so
callers and log aggregation can classify failures without string matching.

Python 3.13+. Zero external dependencies.
"""

from enum import Enum, StrEnum

__all__ = [
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for LocalizeError.

    Inherits from ``StrEnum`` so that ``str(category)`` yields the plain
    value (``"build"``, ``"lookup"``) for logging and serialization.

    Categories:
        BUILD: Invalid build-time input; fatal to table construction
        LOOKUP: Key could not be resolved; recoverable by the caller
    """

    BUILD = "build"
    LOOKUP = "lookup"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Build errors (table and registry construction)
        2000-2999: Lookup errors (runtime resolution)
    """

    # Build errors (1000-1999)
    DUPLICATE_KEY = 1001
    DUPLICATE_LOCALE = 1002
    MISSING_DEFAULT_LOCALE = 1003
    INVALID_LOCALE = 1004

    # Lookup errors (2000-2999)
    MISSING_KEY = 2001
