"""Deterministic estimators used when the analysis backend can't be consulted.

Everything here is pure: same records in, same state out. The only clock
involvement is the optional ``now`` stamped into ``last_updated``.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from shared_types import SourceTag, Trend

from . import catalog
from .models import (
    BehavioralPatterns,
    CognitivePatterns,
    EmotionalPatterns,
    EmotionalState,
    Insight,
    InsightMetadata,
    SourceRecords,
    TreatmentContext,
)

FALLBACK_CONFIDENCE = 0.2
INSUFFICIENT_CONFIDENCE = 0.1
NEUTRAL_INTENSITY = 50
MIN_MOOD_ENTRIES = 3
TREND_WINDOW = 3
TREND_THRESHOLD = 0.5
MAX_SECONDARY = 3
MAX_TRIGGERS = 5
MAX_LIST = 5

_TREND_ADJUSTMENT = {Trend.IMPROVING: -5, Trend.STABLE: 0, Trend.DECLINING: 10}


def calculate_intensity(mood: str | None, trend: Trend, trigger_count: int) -> int:
    """Base intensity of the mood, nudged by trend and triggers, clamped to [10, 95]."""
    value = catalog.base_intensity(mood) + _TREND_ADJUSTMENT.get(trend, 0)
    value += min(5 * trigger_count, 15)
    return max(10, min(95, value))


def _weighted_valence(labels: list[str]) -> float:
    # labels are newest first; the newest gets the largest weight
    weights = range(len(labels), 0, -1)
    total = sum(w * catalog.valence(label) for w, label in zip(weights, labels))
    return total / sum(weights)


def compute_trend(labels: list[str]) -> Trend:
    """Compare the newest moods against the oldest ones.

    Args:
        labels: mood labels ordered newest first
    """
    if len(labels) < TREND_WINDOW:
        return Trend.STABLE
    recent = _weighted_valence(labels[:TREND_WINDOW])
    older = _weighted_valence(labels[-TREND_WINDOW:])
    if recent - older > TREND_THRESHOLD:
        return Trend.IMPROVING
    if older - recent > TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE


def _norm(label: str | None) -> str:
    return (label or "").strip().lower()


def _unique(items, limit: int) -> list[str]:
    seen = []
    for item in items:
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
        if len(seen) >= limit:
            break
    return seen


@dataclass
class MoodSummary:
    dominant: str
    labels: list[str]  # journal moods, newest first
    trend: Trend
    secondary: list[str] = field(default_factory=list)
    triggers: list[str] = field(default_factory=list)
    positive_activities: list[str] = field(default_factory=list)

    @property
    def sufficient(self) -> bool:
        return len(self.labels) >= MIN_MOOD_ENTRIES


def summarize_moods(records: SourceRecords) -> MoodSummary:
    """Tally moods/tones from journal and chat into a single summary."""
    journal = sorted(records.journal, key=lambda e: e.date, reverse=True)
    mood_entries = [e for e in journal if _norm(e.mood)]
    labels = [_norm(e.mood) for e in mood_entries]

    # Counter keeps first-seen order for equal counts, and entries are
    # newest first, so most_common breaks ties by recency.
    tally = Counter(labels)
    dominant = tally.most_common(1)[0][0] if tally else catalog.NEUTRAL_MOOD

    others: Counter = Counter()
    for entry in journal:
        for label in (entry.mood, entry.emotional_tone, *entry.dominant_emotions):
            if _norm(label):
                others[_norm(label)] += 1
    chat = sorted(records.chat, key=lambda m: m.timestamp, reverse=True)
    for message in chat:
        if message.role == "user" and _norm(message.emotional_tone):
            others[_norm(message.emotional_tone)] += 1
    secondary = [label for label, _ in others.most_common() if label != dominant][:MAX_SECONDARY]

    negative = [e for e in mood_entries if catalog.valence(e.mood) <= 2]
    positive = [e for e in mood_entries if catalog.valence(e.mood) >= 4]

    return MoodSummary(
        dominant=dominant,
        labels=labels,
        trend=compute_trend(labels),
        secondary=secondary,
        triggers=_unique((t for e in negative for t in e.tags), MAX_TRIGGERS),
        positive_activities=_unique((t for e in positive for t in e.tags), MAX_LIST),
    )


def estimate_emotional_state(records: SourceRecords, now: datetime | None = None) -> EmotionalState:
    summary = summarize_moods(records)
    now = now or datetime.now()

    if not summary.sufficient:
        return EmotionalState(
            current_state=catalog.state_label(summary.dominant),
            intensity=NEUTRAL_INTENSITY,
            dominant_emotion=summary.dominant,
            secondary_emotions=summary.secondary,
            trend=summary.trend,
            recent_triggers=[],
            suggested_actions=catalog.suggested_actions(summary.dominant),
            last_updated=now,
            data_confidence=INSUFFICIENT_CONFIDENCE,
            has_sufficient_data=False,
            message="Continue registrando suas emoções no diário para uma análise mais precisa.",
        )

    return EmotionalState(
        current_state=catalog.state_label(summary.dominant),
        intensity=calculate_intensity(summary.dominant, summary.trend, len(summary.triggers)),
        dominant_emotion=summary.dominant,
        secondary_emotions=summary.secondary,
        trend=summary.trend,
        recent_triggers=summary.triggers,
        suggested_actions=catalog.suggested_actions(summary.dominant),
        last_updated=now,
        data_confidence=FALLBACK_CONFIDENCE,
        has_sufficient_data=True,
    )


def estimate_insight(records: SourceRecords, now: datetime | None = None) -> Insight:
    """Best-effort Insight from raw records, tagged as fallback."""
    summary = summarize_moods(records)
    profile = records.profile

    completed = [s for s in records.sessions if s.status == "completed"]
    interventions = _unique((s.type for s in completed if s.type), MAX_LIST)
    goals = list(profile.goals[:MAX_LIST]) if profile else []
    challenging = _unique([*profile.anxieties, *profile.fears], MAX_LIST) if profile else []

    return Insight(
        emotional_patterns=EmotionalPatterns(
            dominant_mood=summary.dominant,
            secondary_moods=summary.secondary,
            trend=summary.trend,
            common_triggers=summary.triggers,
        ),
        cognitive_patterns=CognitivePatterns(),
        behavioral_patterns=BehavioralPatterns(positive_activities=summary.positive_activities),
        treatment_context=TreatmentContext(
            therapy_goals=goals,
            effective_interventions=interventions,
            challenging_areas=challenging,
        ),
        metadata=InsightMetadata(
            last_updated=now or datetime.now(),
            data_sources_used=[SourceTag.FALLBACK],
            confidence_score=FALLBACK_CONFIDENCE,
        ),
    )
