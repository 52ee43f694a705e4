"""Validation schema for the analysis backend's JSON output.

The backend answers in camelCase; fields accept either spelling.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_string_lists(cls, v, info):
        """Accept a bare string or null where a list of strings is expected."""
        field = cls.model_fields[info.field_name]
        if field.annotation != list[str]:
            return v
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return [str(item) for item in v if item not in (None, "")]
        return v


class EmotionalPatternsPayload(_Payload):
    dominant_mood: str = Field(min_length=1)
    secondary_moods: list[str] = Field(default_factory=list)
    trend: Literal["improving", "stable", "declining"] = "stable"
    common_triggers: list[str] = Field(default_factory=list)

    @field_validator("trend", mode="before")
    @classmethod
    def normalize_trend(cls, v):
        if not isinstance(v, str):
            return "stable"
        v = v.strip().lower()
        return v if v in ("improving", "stable", "declining") else "stable"


class CognitivePatternsPayload(_Payload):
    recurrent_thoughts: list[str] = Field(default_factory=list)
    cognitive_distortions: list[str] = Field(default_factory=list)
    self_talk_patterns: list[str] = Field(default_factory=list)


class BehavioralPatternsPayload(_Payload):
    coping_strategies: list[str] = Field(default_factory=list)
    avoidance_behaviors: list[str] = Field(default_factory=list)
    positive_activities: list[str] = Field(default_factory=list)


class TreatmentContextPayload(_Payload):
    therapy_goals: list[str] = Field(default_factory=list)
    effective_interventions: list[str] = Field(default_factory=list)
    challenging_areas: list[str] = Field(default_factory=list)


class MetadataPayload(_Payload):
    confidence_score: float = Field(ge=0.0, le=1.0)


class AnalysisPayload(_Payload):
    emotional_patterns: EmotionalPatternsPayload
    cognitive_patterns: CognitivePatternsPayload = Field(default_factory=CognitivePatternsPayload)
    behavioral_patterns: BehavioralPatternsPayload = Field(
        default_factory=BehavioralPatternsPayload
    )
    treatment_context: TreatmentContextPayload = Field(default_factory=TreatmentContextPayload)
    metadata: MetadataPayload


class DailyTipPayload(_Payload):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category: str = "Bem-estar"
    tags: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    evidence_level: str = "moderate"
