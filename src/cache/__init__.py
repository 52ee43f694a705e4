"""In-process TTL cache with mutation-aware invalidation."""

from .invalidation import RELATED_ENTITIES, prefixes_for
from .store import DEFAULT_TTL, CacheEntry, CacheStore

__all__ = [
    "CacheStore",
    "CacheEntry",
    "DEFAULT_TTL",
    "RELATED_ENTITIES",
    "prefixes_for",
]
