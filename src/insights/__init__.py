"""Insight computation: analysis-backed fusion with heuristic fallback."""

from .analyzer import Analyzer, AnalysisUnavailable, LLMAnalyzer, MalformedAnalysisResult
from .fusion import FusionResult, InsightFusionEngine, guidance_insight
from .heuristics import calculate_intensity, estimate_emotional_state, estimate_insight
from .models import EmotionalState, Insight, SourceRecords
from .projection import neutral_state, project_emotional_state

__all__ = [
    "Analyzer",
    "LLMAnalyzer",
    "AnalysisUnavailable",
    "MalformedAnalysisResult",
    "InsightFusionEngine",
    "FusionResult",
    "guidance_insight",
    "calculate_intensity",
    "estimate_emotional_state",
    "estimate_insight",
    "project_emotional_state",
    "neutral_state",
    "Insight",
    "EmotionalState",
    "SourceRecords",
]
