"""Shared enums and types for moodsync."""

from enum import StrEnum


class Trend(StrEnum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class SourceTag(StrEnum):
    """Provenance tags recorded in Insight.metadata.data_sources_used."""

    JOURNAL_ENTRIES = "journal_entries"
    ASSISTANT_INTERACTIONS = "assistant_interactions"
    THERAPY_SESSIONS = "therapy_sessions"
    USER_PROFILE = "user_profile"
    FALLBACK = "fallback"
    LIMITED_DATA = "limited_data"


class SignalSource(StrEnum):
    """Kind of source record whose arrival triggers a sync."""

    JOURNAL = "journal"
    CHAT = "chat"
    SESSION = "session"
    PROFILE = "profile"
    RECOMMENDATION = "recommendation"


class Artifact(StrEnum):
    EMOTIONAL_STATE = "emotional_state"
    DAILY_TIP = "daily_tip"
    ASSISTANT_CONTEXT = "assistant_context"
    CONTENT_RECOMMENDATIONS = "content_recommendations"


class UpdateOutcome(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"
