"""Handle cache configuration for LocalizationTable.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from loctable.constants import MAX_HANDLE_CACHE_SIZE
from loctable.locale_utils import LocaleId

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for the LocalizationTable handle cache.

    Handles for every registered locale are always built eagerly. This
    configuration controls what happens for other requested tags.

    Attributes:
        size: Maximum lazily cached handles (default: 128). When full, the
            oldest lazily cached handle is evicted.
        preload: Additional locale tags whose handles are built eagerly at
            construction and never evicted (e.g. "en-US-posix" when the
            registry only has "en-US"). Malformed tags raise at construction.

    Example:
        >>> config = CacheConfig(size=32, preload=("de-AT", "de-CH"))
        >>> l10n = LocalizationTable.build(tables, "en", cache=config)
    """

    size: int = MAX_HANDLE_CACHE_SIZE
    preload: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive
            InvalidLocaleError: If a preload tag is malformed
        """
        if self.size <= 0:
            msg = f"size must be positive, got {self.size}"
            raise ValueError(msg)
        # Lists are accepted; stored as tuple
        object.__setattr__(self, "preload", tuple(self.preload))
        for tag in self.preload:
            LocaleId.parse(tag)
