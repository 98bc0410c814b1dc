"""Localization package: table orchestration, loading and reload.

Submodules:
    types        - PEP 695 type aliases (TranslationKey, TranslationText, LocaleCode)
    orchestrator - LocalizationTable (build, handle_for, lookup, negotiate)
    loading      - tables_from_definition, TableLoader, PathTableLoader,
                   load_localization
    reload       - LocalizationReference (atomic swap)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

# types must be imported before the runtime modules that use it
from loctable.localization.types import LocaleCode, TableEntries, TranslationKey, TranslationText

from loctable.localization.orchestrator import LocalizationTable
from loctable.localization.loading import (
    PathTableLoader,
    TableLoader,
    load_localization,
    tables_from_definition,
)
from loctable.localization.reload import LocalizationReference

__all__ = [
    # Main entry point
    "LocalizationTable",
    # Reload
    "LocalizationReference",
    # Loading
    "TableLoader",
    "PathTableLoader",
    "load_localization",
    "tables_from_definition",
    # Type aliases for user code type annotations
    "LocaleCode",
    "TableEntries",
    "TranslationKey",
    "TranslationText",
]
