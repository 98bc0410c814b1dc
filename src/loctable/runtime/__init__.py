"""Runtime resolution engine: string tables, registry, fallback and handles.

Python 3.13+.
"""

from .cache_config import CacheConfig
from .fallback import FallbackChain, FallbackResolver
from .handle import LocaleHandle
from .registry import LocaleRegistry
from .rwlock import RWLock
from .table import StringTable

__all__ = [
    "CacheConfig",
    "FallbackChain",
    "FallbackResolver",
    "LocaleHandle",
    "LocaleRegistry",
    "RWLock",
    "StringTable",
]
