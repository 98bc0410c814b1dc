"""Error types and diagnostic codes.

Python 3.13+. Zero external dependencies.
"""

from .codes import DiagnosticCode, ErrorCategory
from .errors import (
    BuildError,
    DuplicateKeyError,
    DuplicateLocaleError,
    InvalidLocaleError,
    LocalizeError,
    LookupFailure,
    MissingDefaultLocaleError,
    MissingKeyError,
)

__all__ = [
    "BuildError",
    "DiagnosticCode",
    "DuplicateKeyError",
    "DuplicateLocaleError",
    "ErrorCategory",
    "InvalidLocaleError",
    "LocalizeError",
    "LookupFailure",
    "MissingDefaultLocaleError",
    "MissingKeyError",
]
