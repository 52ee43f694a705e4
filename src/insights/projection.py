"""Project an Insight onto the user-facing EmotionalState."""

from datetime import datetime

from shared_types import Trend

from . import catalog
from .heuristics import NEUTRAL_INTENSITY, calculate_intensity
from .models import EmotionalState, Insight

MAX_SECONDARY = 3
MAX_ACTIONS = 4
SUFFICIENT_CONFIDENCE = 0.5

INSUFFICIENT_STATE = "Neutro - Dados insuficientes"
INSUFFICIENT_MESSAGE = (
    "Continue registrando suas emoções no diário e conversando com o assistente "
    "para recebermos dados suficientes para uma análise personalizada."
)


def neutral_state(confidence: float = 0.0, now: datetime | None = None) -> EmotionalState:
    """Neutral placeholder shown while there isn't enough data."""
    return EmotionalState(
        current_state=INSUFFICIENT_STATE,
        intensity=NEUTRAL_INTENSITY,
        dominant_emotion=catalog.NEUTRAL_MOOD,
        secondary_emotions=["calma"],
        trend=Trend.STABLE,
        recent_triggers=[],
        suggested_actions=catalog.suggested_actions(catalog.NEUTRAL_MOOD, limit=2),
        last_updated=now or datetime.now(),
        data_confidence=confidence,
        has_sufficient_data=False,
        message=INSUFFICIENT_MESSAGE,
    )


def has_sufficient_data(insight: Insight) -> bool:
    meta = insight.metadata
    return len(meta.data_sources_used) > 1 or meta.confidence_score > SUFFICIENT_CONFIDENCE


def project_emotional_state(insight: Insight, now: datetime | None = None) -> EmotionalState:
    now = now or datetime.now()
    confidence = insight.metadata.confidence_score
    if not has_sufficient_data(insight):
        return neutral_state(confidence, now)

    patterns = insight.emotional_patterns
    dominant = patterns.dominant_mood
    triggers = list(patterns.common_triggers)
    return EmotionalState(
        current_state=catalog.state_label(dominant),
        intensity=calculate_intensity(dominant, patterns.trend, len(triggers)),
        dominant_emotion=dominant,
        secondary_emotions=patterns.secondary_moods[:MAX_SECONDARY],
        trend=patterns.trend,
        recent_triggers=triggers,
        suggested_actions=catalog.suggested_actions(
            dominant,
            insight.behavioral_patterns.coping_strategies,
            insight.cognitive_patterns.cognitive_distortions,
            limit=MAX_ACTIONS,
        ),
        last_updated=now,
        data_confidence=confidence,
        has_sufficient_data=True,
    )
