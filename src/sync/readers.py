"""Read-side helpers for consumers of the derived artifacts.

Consumers read the canonical key, fall back to the legacy spelling (and
migrate it), and finally to a neutral default so they never see a hard
miss.
"""

from datetime import datetime

from cache.keys import artifact_key, read_through
from cache.store import CacheStore
from insights.models import EmotionalState
from insights.projection import neutral_state
from shared_types import Artifact

from .tips import DailyTip, fallback_tip

HOUR = 3600.0
NEUTRAL_STATE_TTL = 1 * HOUR
MIGRATED_TTL = 2 * HOUR
DAILY_TIP_TTL = 12 * HOUR


def read_emotional_state(
    cache: CacheStore,
    user_id: str,
    neutral_ttl: float = NEUTRAL_STATE_TTL,
    migrate_ttl: float = MIGRATED_TTL,
) -> EmotionalState:
    state = read_through(cache, Artifact.EMOTIONAL_STATE, user_id, migrate_ttl)
    if state is None:
        state = neutral_state()
        cache.set(artifact_key(Artifact.EMOTIONAL_STATE, user_id), state, ttl=neutral_ttl)
    return state


def read_daily_tip(
    cache: CacheStore,
    user_id: str,
    ttl: float = DAILY_TIP_TTL,
    migrate_ttl: float = MIGRATED_TTL,
    neutral_ttl: float = NEUTRAL_STATE_TTL,
) -> DailyTip:
    tip = read_through(cache, Artifact.DAILY_TIP, user_id, migrate_ttl)
    if tip is None:
        state = read_emotional_state(cache, user_id, neutral_ttl=neutral_ttl)
        tip = fallback_tip(state.dominant_emotion, datetime.now())
        cache.set(artifact_key(Artifact.DAILY_TIP, user_id), tip, ttl=ttl)
    return tip


def read_assistant_context(
    cache: CacheStore, user_id: str, migrate_ttl: float = MIGRATED_TTL
) -> dict | None:
    return read_through(cache, Artifact.ASSISTANT_CONTEXT, user_id, migrate_ttl)


def read_content_recommendations(cache: CacheStore, user_id: str) -> list:
    return cache.get(artifact_key(Artifact.CONTENT_RECOMMENDATIONS, user_id)) or []
