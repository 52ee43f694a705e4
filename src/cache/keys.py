"""Cache key builders for derived per-user artifacts.

Canonical keys are ``<namespace>:<user_id>``. Some consumers still read
the older underscore spellings, so writers may dual-write them and
readers go through `read_through` which rewrites a legacy hit into the
canonical key.
"""

from typing import Any

import structlog

from shared_types import Artifact

from .store import CacheStore

logger = structlog.get_logger()

USER_INSIGHTS = "user_insights"

_LEGACY_FORMATS: dict[str, str] = {
    Artifact.EMOTIONAL_STATE: "emotional_state_user_{user_id}",
    Artifact.DAILY_TIP: "daily_tip_user_{user_id}",
    Artifact.ASSISTANT_CONTEXT: "assistant_context_{user_id}",
}


def canonical_key(namespace: str, user_id) -> str:
    return f"{namespace}:{user_id}"


def insights_key(user_id) -> str:
    return canonical_key(USER_INSIGHTS, user_id)


def artifact_key(artifact: Artifact, user_id) -> str:
    return canonical_key(str(artifact), user_id)


def legacy_key(artifact: Artifact, user_id) -> str | None:
    fmt = _LEGACY_FORMATS.get(artifact)
    return fmt.format(user_id=user_id) if fmt else None


def all_user_keys(user_id) -> list[str]:
    """Every canonical and legacy key holding derived state for a user."""
    keys = [insights_key(user_id)]
    for artifact in Artifact:
        keys.append(artifact_key(artifact, user_id))
        legacy = legacy_key(artifact, user_id)
        if legacy:
            keys.append(legacy)
    return keys


def read_through(cache: CacheStore, artifact: Artifact, user_id, migrate_ttl: float) -> Any | None:
    """Read canonical key first, then legacy; migrate a legacy hit."""
    value = cache.get(artifact_key(artifact, user_id))
    if value is not None:
        return value

    old = legacy_key(artifact, user_id)
    if old is None:
        return None
    value = cache.get(old)
    if value is not None:
        cache.set(artifact_key(artifact, user_id), value, ttl=migrate_ttl)
        logger.info("cache_key_migrated", artifact=str(artifact), user_id=user_id)
    return value
