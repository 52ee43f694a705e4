"""In-process TTL cache shared by the insight and sync components."""

import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import structlog

from observability import metrics

from .invalidation import prefixes_for

logger = structlog.get_logger()

DEFAULT_TTL = 300.0  # 5 minutes


@dataclass
class CacheEntry:
    data: Any
    expires_at: float
    invalidate_on_mutation: bool = True
    should_invalidate: Callable[[Any], bool] | None = None


class CacheStore:
    """Key/value store with per-entry expiry and mutation-driven invalidation.

    All operations are synchronous, so under a single event loop each one is
    atomic with respect to the others. ``get_or_set`` does not deduplicate
    concurrent misses: every caller that misses runs the producer and the
    last write wins.
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.time):
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry.expires_at

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on a miss or an expired entry."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            metrics.counter("cache.miss")
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            logger.debug("cache_expired", key=key)
            metrics.counter("cache.expired")
            return None
        logger.debug("cache_hit", key=key)
        metrics.counter("cache.hit")
        return entry.data

    def set(
        self,
        key: str,
        value: Any,
        ttl: float | None = None,
        invalidate_on_mutation: bool = True,
        should_invalidate: Callable[[Any], bool] | None = None,
    ) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self._entries[key] = CacheEntry(
            data=value,
            expires_at=self._clock() + ttl,
            invalidate_on_mutation=invalidate_on_mutation,
            should_invalidate=should_invalidate,
        )
        metrics.counter("cache.set")

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_set(
        self,
        key: str,
        producer: Callable[[], Any | Awaitable[Any]],
        **options,
    ) -> Any:
        """Return the cached value, or compute it with `producer` and cache it.

        `producer` may be sync or async. Its exceptions propagate and nothing
        is cached for the key. A cached None counts as a hit.
        """
        if key in self:
            return self.get(key)
        value = producer()
        if inspect.isawaitable(value):
            value = await value
        self.set(key, value, **options)
        return value

    def notify_mutation(self, entity_kind: str, entity_id, payload: Any = None) -> int:
        """Purge entries affected by a change to one entity.

        An entry goes if it opted into mutation invalidation and either its
        key starts with one of the graph's prefixes or its own
        `should_invalidate(payload)` predicate says so. Returns the count.
        """
        prefixes = tuple(prefixes_for(entity_kind, entity_id))
        doomed = []
        for key, entry in self._entries.items():
            if not entry.invalidate_on_mutation:
                continue
            if key.startswith(prefixes) or self._predicate_matches(key, entry, payload):
                doomed.append(key)
        for key in doomed:
            del self._entries[key]

        if doomed:
            metrics.counter("cache.invalidated", len(doomed))
        logger.debug(
            "cache_mutation",
            entity=entity_kind,
            entity_id=entity_id,
            purged=len(doomed),
        )
        return len(doomed)

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if now >= e.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    @staticmethod
    def _predicate_matches(key: str, entry: CacheEntry, payload: Any) -> bool:
        if entry.should_invalidate is None:
            return False
        try:
            return bool(entry.should_invalidate(payload))
        except Exception as e:
            logger.warning("cache_predicate_error", key=key, error=str(e))
            return False
