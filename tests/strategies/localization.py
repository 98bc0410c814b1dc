"""Hypothesis strategies for LocalizationTable property-based testing.

Provides reusable strategies for generating localization test data:
- Locale tags, well-formed and malformed, in mixed case/separator styles
- Per-locale table sets with controlled key overlap

Event-Emitting Strategies (HypoFuzz-Optimized):
- locale_tags: Emits locale_subtags=N
- table_sets: Emits table_count=N

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LANGUAGES = ["en", "de", "fr", "es", "pt", "zh", "sr", "lv"]
_REGIONS = ["US", "GB", "DE", "AT", "BR", "CN", "419"]
_SCRIPTS = ["Hans", "Hant", "Latn", "Cyrl"]
_VARIANTS = ["posix", "valencia", "1901"]

# Keys shared across generated tables so fallback paths are exercised.
KEY_POOL = ["greeting", "farewell", "title", "error.not_found", "menu.file", "ok"]


def _mangle_case(draw: DrawFn, tag: str) -> str:
    style = draw(st.sampled_from(["keep", "lower", "upper", "posix"]))
    match style:
        case "lower":
            return tag.lower()
        case "upper":
            return tag.upper()
        case "posix":
            return tag.replace("-", "_")
        case _:
            return tag


@st.composite
def locale_tags(draw: DrawFn, *, mangle: bool = True) -> str:
    """Generate well-formed locale tags with 1-4 subtags.

    Events emitted:
    - locale_subtags=N
    """
    subtags = [draw(st.sampled_from(_LANGUAGES))]
    if draw(st.booleans()):
        subtags.append(draw(st.sampled_from(_SCRIPTS)))
    if draw(st.booleans()):
        subtags.append(draw(st.sampled_from(_REGIONS)))
    if draw(st.booleans()):
        subtags.append(draw(st.sampled_from(_VARIANTS)))
    event(f"locale_subtags={len(subtags)}")
    tag = "-".join(subtags)
    return _mangle_case(draw, tag) if mangle else tag


def malformed_tags() -> st.SearchStrategy[str]:
    """Generate strings that are not well-formed locale tags."""
    return st.one_of(
        st.just(""),
        st.text(alphabet=" \t\n", min_size=1, max_size=3),
        st.just("e"),
        st.just("en--US"),
        st.just("en-"),
        st.just("123"),
        st.just("en-toolongsubtag"),
        st.just("en US"),
        st.just("ça"),
        st.text(alphabet=string.punctuation.replace("-", "").replace("_", ""), min_size=1),
    )


def texts() -> st.SearchStrategy[str]:
    """Localized text, including placeholder-like markers."""
    return st.one_of(
        st.text(max_size=20),
        st.builds(lambda s: f"{{ {s} }}", st.text(alphabet=string.ascii_letters, max_size=5)),
    )


@st.composite
def table_sets(draw: DrawFn) -> tuple[dict[str, dict[str, str]], str]:
    """Generate (tables, default_locale) with distinct normalized locales.

    Events emitted:
    - table_count=N
    """
    from loctable import normalize_locale  # noqa: PLC0415

    tags = draw(st.lists(locale_tags(mangle=False), min_size=1, max_size=6))
    unique: dict[str, str] = {}
    for tag in tags:
        unique.setdefault(normalize_locale(tag), tag)
    tables = {
        tag: draw(
            st.dictionaries(st.sampled_from(KEY_POOL), texts(), max_size=len(KEY_POOL))
        )
        for tag in unique.values()
    }
    default = draw(st.sampled_from(sorted(tables)))
    event(f"table_count={len(tables)}")
    return tables, default
