"""Derived per-user state: Insight and its user-facing EmotionalState projection."""

from dataclasses import asdict, dataclass, field
from datetime import datetime

from shared_types import SourceTag, Trend
from storage.models import ChatMessage, JournalEntry, TherapySession, UserProfile


@dataclass
class EmotionalPatterns:
    dominant_mood: str
    secondary_moods: list[str] = field(default_factory=list)
    trend: Trend = Trend.STABLE
    common_triggers: list[str] = field(default_factory=list)


@dataclass
class CognitivePatterns:
    recurrent_thoughts: list[str] = field(default_factory=list)
    cognitive_distortions: list[str] = field(default_factory=list)
    self_talk_patterns: list[str] = field(default_factory=list)


@dataclass
class BehavioralPatterns:
    coping_strategies: list[str] = field(default_factory=list)
    avoidance_behaviors: list[str] = field(default_factory=list)
    positive_activities: list[str] = field(default_factory=list)


@dataclass
class TreatmentContext:
    therapy_goals: list[str] = field(default_factory=list)
    effective_interventions: list[str] = field(default_factory=list)
    challenging_areas: list[str] = field(default_factory=list)


@dataclass
class InsightMetadata:
    last_updated: datetime
    data_sources_used: list[str]
    confidence_score: float


@dataclass
class Insight:
    """Aggregated snapshot for one user. Replaced wholesale on recompute."""

    emotional_patterns: EmotionalPatterns
    cognitive_patterns: CognitivePatterns
    behavioral_patterns: BehavioralPatterns
    treatment_context: TreatmentContext
    metadata: InsightMetadata

    @property
    def is_heuristic(self) -> bool:
        """True when no analysis output went into this insight."""
        tags = set(self.metadata.data_sources_used)
        return bool(tags & {SourceTag.FALLBACK, SourceTag.LIMITED_DATA})

    def to_dict(self) -> dict:
        data = asdict(self)
        data["metadata"]["last_updated"] = self.metadata.last_updated.isoformat()
        return data


@dataclass
class EmotionalState:
    current_state: str
    intensity: int
    dominant_emotion: str
    secondary_emotions: list[str]
    trend: Trend
    recent_triggers: list[str]
    suggested_actions: list[str]
    last_updated: datetime
    data_confidence: float
    has_sufficient_data: bool
    message: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["last_updated"] = self.last_updated.isoformat()
        return data


@dataclass
class SourceRecords:
    """Everything fetched for one user in a single fusion pass."""

    journal: list[JournalEntry] = field(default_factory=list)
    chat: list[ChatMessage] = field(default_factory=list)
    sessions: list[TherapySession] = field(default_factory=list)
    profile: UserProfile | None = None

    def has_primary_data(self) -> bool:
        return bool(self.journal or self.chat or self.sessions)

    def source_tags(self) -> list[str]:
        tags = []
        if self.journal:
            tags.append(SourceTag.JOURNAL_ENTRIES)
        if self.chat:
            tags.append(SourceTag.ASSISTANT_INTERACTIONS)
        if self.sessions:
            tags.append(SourceTag.THERAPY_SESSIONS)
        if self.profile is not None and not self.profile.is_empty():
            tags.append(SourceTag.USER_PROFILE)
        return tags
