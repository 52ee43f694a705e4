"""Tests for analysis payload validation."""

import pytest
from pydantic import ValidationError

from insights.schema import AnalysisPayload, DailyTipPayload


class TestAnalysisPayload:
    def test_valid_camel_case(self, analysis_payload):
        payload = AnalysisPayload.model_validate(analysis_payload)
        assert payload.emotional_patterns.dominant_mood == "ansiedade"
        assert payload.cognitive_patterns.cognitive_distortions == ["catastrofização"]
        assert payload.metadata.confidence_score == 0.8

    def test_snake_case_accepted(self):
        payload = AnalysisPayload.model_validate(
            {
                "emotional_patterns": {"dominant_mood": "calma"},
                "metadata": {"confidence_score": 0.4},
            }
        )
        assert payload.emotional_patterns.trend == "stable"
        assert payload.behavioral_patterns.coping_strategies == []

    def test_missing_metadata_rejected(self, analysis_payload):
        del analysis_payload["metadata"]
        with pytest.raises(ValidationError):
            AnalysisPayload.model_validate(analysis_payload)

    def test_missing_dominant_mood_rejected(self, analysis_payload):
        analysis_payload["emotionalPatterns"]["dominantMood"] = ""
        with pytest.raises(ValidationError):
            AnalysisPayload.model_validate(analysis_payload)

    @pytest.mark.parametrize("score", [-0.1, 1.5, "alto"])
    def test_confidence_out_of_range_rejected(self, analysis_payload, score):
        analysis_payload["metadata"]["confidenceScore"] = score
        with pytest.raises(ValidationError):
            AnalysisPayload.model_validate(analysis_payload)

    def test_trend_normalized(self, analysis_payload):
        analysis_payload["emotionalPatterns"]["trend"] = " Declining "
        assert AnalysisPayload.model_validate(analysis_payload).emotional_patterns.trend == "declining"
        analysis_payload["emotionalPatterns"]["trend"] = "piorando"
        assert AnalysisPayload.model_validate(analysis_payload).emotional_patterns.trend == "stable"

    def test_string_lists_coerced(self, analysis_payload):
        analysis_payload["emotionalPatterns"]["commonTriggers"] = "prazos"
        analysis_payload["cognitivePatterns"]["recurrentThoughts"] = None
        analysis_payload["behavioralPatterns"]["copingStrategies"] = ["respirar", None, ""]
        payload = AnalysisPayload.model_validate(analysis_payload)
        assert payload.emotional_patterns.common_triggers == ["prazos"]
        assert payload.cognitive_patterns.recurrent_thoughts == []
        assert payload.behavioral_patterns.coping_strategies == ["respirar"]


def test_daily_tip_payload():
    tip = DailyTipPayload.model_validate(
        {"title": "Respire", "content": "Inspire fundo.", "evidenceLevel": "high"}
    )
    assert tip.evidence_level == "high"
    assert tip.category == "Bem-estar"
    with pytest.raises(ValidationError):
        DailyTipPayload.model_validate({"title": "", "content": "x"})
