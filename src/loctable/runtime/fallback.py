"""Locale fallback chain computation.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from loctable.locale_utils import LocaleId
from loctable.runtime.registry import LocaleRegistry

__all__ = ["FallbackChain", "FallbackResolver"]


@dataclass(frozen=True, slots=True)
class FallbackChain:
    """Ordered locales to consult for one requested locale.

    Most specific first, always ending with the default locale. Every
    entry names a registered locale and no entry appears twice.

    Attributes:
        requested: Requested tag, canonical if well-formed, raw otherwise
        locales: Registered locales in lookup order
    """

    requested: str
    locales: tuple[LocaleId, ...]

    def __post_init__(self) -> None:
        if not self.locales:
            msg = "FallbackChain must contain at least one locale"
            raise ValueError(msg)

    @property
    def head(self) -> LocaleId:
        """Most specific registered locale of the chain."""
        return self.locales[0]

    @property
    def default(self) -> LocaleId:
        """Last locale of the chain (the registry default)."""
        return self.locales[-1]

    def __iter__(self) -> Iterator[LocaleId]:
        return iter(self.locales)

    def __len__(self) -> int:
        return len(self.locales)

    def __str__(self) -> str:
        return " -> ".join(str(locale) for locale in self.locales)


class FallbackResolver:
    """Computes fallback chains against a registry.

    Algorithm:
        1. Normalize the requested tag (case and separator)
        2. Walk its truncations, most specific first (en-US-posix, en-US, en),
           keeping only registered locales
        3. Append the default locale unless already present

    Malformed or empty requests resolve to [default]. The resolver holds no
    mutable state; caching is the caller's concern.

    Example:
        >>> resolver = FallbackResolver(registry)  # registers en (default), en-US
        >>> str(resolver.resolve("en_us_POSIX"))
        'en-US -> en'
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: LocaleRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> LocaleRegistry:
        """Registry the chains are resolved against."""
        return self._registry

    def resolve(self, requested: LocaleId | str | None) -> FallbackChain:
        """Compute the fallback chain for a requested locale.

        Args:
            requested: LocaleId or tag in any case/separator style. None,
                empty and malformed tags are accepted.

        Returns:
            FallbackChain ending with the registry's default locale
        """
        default = self._registry.default_locale()
        if isinstance(requested, LocaleId):
            locale: LocaleId | None = requested
        else:
            locale = LocaleId.try_parse(requested)

        if locale is None:
            raw = requested if isinstance(requested, str) else ""
            return FallbackChain(requested=raw, locales=(default,))

        # dict.fromkeys() removes duplicates while maintaining insertion order
        candidates = [c for c in locale.truncations() if self._registry.lookup_table(c) is not None]
        candidates.append(default)
        return FallbackChain(requested=str(locale), locales=tuple(dict.fromkeys(candidates)))
