"""Insight fusion: gather a user's sources, analyze them, cache the result."""

import asyncio
import inspect
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

import structlog
from pydantic import ValidationError

from cache.keys import insights_key
from cache.store import CacheStore
from observability import metrics
from shared_types import SourceTag, Trend
from storage.base import SourceRepository

from .analyzer import Analyzer, AnalysisUnavailable, MalformedAnalysisResult
from .heuristics import estimate_insight
from .models import (
    BehavioralPatterns,
    CognitivePatterns,
    EmotionalPatterns,
    Insight,
    InsightMetadata,
    SourceRecords,
    TreatmentContext,
)
from .prompts import INSIGHT_SYSTEM, build_insight_prompt
from .sanitize import clean_ai_text, sanitize_fields
from .schema import AnalysisPayload

logger = structlog.get_logger()

GUIDANCE_CONFIDENCE = 0.3
LOW_SOURCE_CONFIDENCE_CAP = 0.3
MIN_CONFIDENT_SOURCES = 2


def guidance_insight(now: datetime | None = None) -> Insight:
    """Fixed, encouraging insight for users with no records yet."""
    return Insight(
        emotional_patterns=EmotionalPatterns(dominant_mood="neutro", trend=Trend.STABLE),
        cognitive_patterns=CognitivePatterns(
            recurrent_thoughts=["Ainda não há registros suficientes para identificar padrões"],
        ),
        behavioral_patterns=BehavioralPatterns(
            positive_activities=[
                "Registrar pensamentos e sentimentos no diário",
                "Conversar com o assistente sobre como foi o seu dia",
            ],
        ),
        treatment_context=TreatmentContext(
            therapy_goals=["Criar o hábito de registrar emoções regularmente"],
        ),
        metadata=InsightMetadata(
            last_updated=now or datetime.now(),
            data_sources_used=[SourceTag.LIMITED_DATA],
            confidence_score=GUIDANCE_CONFIDENCE,
        ),
    )


@dataclass
class FusionResult:
    insight: Insight
    records: SourceRecords | None  # None when served from cache


class InsightFusionEngine:
    """Builds and caches a user's Insight from every available source.

    Fetches run concurrently and each one degrades to an empty result on
    failure. Without primary data the fixed guidance insight is returned;
    when the analyzer is unavailable or returns something unusable, the
    heuristic estimator fills in.
    """

    def __init__(
        self,
        repository: SourceRepository,
        cache: CacheStore,
        analyzer: Analyzer | None = None,
        freshness: timedelta = timedelta(hours=4),
        ttl: float = 6 * 3600,
        chat_limit: int = 50,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.cache = cache
        self.analyzer = analyzer or Analyzer()
        self.freshness = freshness
        self.ttl = ttl
        self.chat_limit = chat_limit
        self._clock = clock

    async def compute_insight(self, user_id: str) -> Insight:
        return (await self.compute(user_id)).insight

    async def compute(self, user_id: str) -> FusionResult:
        now = self._clock()
        cached = self.cache.get(insights_key(user_id))
        if isinstance(cached, Insight) and now - cached.metadata.last_updated < self.freshness:
            logger.debug("insight.cache_fresh", user_id=user_id)
            return FusionResult(cached, None)

        records = await self.load_sources(user_id)
        if not records.has_primary_data():
            logger.info("insight.guidance", user_id=user_id)
            metrics.counter("insight.generated", kind="guidance")
            return FusionResult(guidance_insight(now), records)

        insight = await self._analyze(user_id, records, now)
        self.cache.set(insights_key(user_id), insight, ttl=self.ttl)
        logger.info(
            "insight.generated",
            user_id=user_id,
            sources=list(insight.metadata.data_sources_used),
            confidence=insight.metadata.confidence_score,
        )
        return FusionResult(insight, records)

    async def load_sources(self, user_id: str) -> SourceRecords:
        repo = self.repository
        journal, chat, sessions, profile = await asyncio.gather(
            self._fetch("journal", user_id, [], repo.get_journal_entries_by_user),
            self._fetch("chat", user_id, [], repo.get_chat_messages_by_user, self.chat_limit),
            self._fetch("sessions", user_id, [], repo.get_sessions_by_user),
            self._fetch("profile", user_id, None, repo.get_user),
        )
        active_sessions = [s for s in sessions if s.status != "cancelled"]
        return SourceRecords(
            journal=list(journal),
            chat=list(chat)[: self.chat_limit],
            sessions=active_sessions,
            profile=profile,
        )

    async def _fetch(self, source: str, user_id: str, default, method, *args):
        try:
            result = method(user_id, *args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning("insight.source_unavailable", source=source, user_id=user_id, error=str(e))
            metrics.counter("insight.source_unavailable", source=source)
            return default
        return default if result is None else result

    async def _analyze(self, user_id: str, records: SourceRecords, now: datetime) -> Insight:
        try:
            raw = await self.analyzer.analyze(INSIGHT_SYSTEM, build_insight_prompt(records))
            try:
                payload = AnalysisPayload.model_validate(raw)
            except ValidationError as e:
                raise MalformedAnalysisResult(str(e)) from e
        except AnalysisUnavailable as e:
            logger.info("insight.analysis_unavailable", user_id=user_id, error=str(e))
            metrics.counter("insight.generated", kind="fallback")
            return estimate_insight(records, now)
        except MalformedAnalysisResult as e:
            logger.warning("insight.analysis_malformed", user_id=user_id, error=str(e)[:300])
            metrics.counter("insight.generated", kind="fallback")
            return estimate_insight(records, now)

        metrics.counter("insight.generated", kind="analysis")
        return self._from_payload(payload, records, now)

    @staticmethod
    def _from_payload(payload: AnalysisPayload, records: SourceRecords, now: datetime) -> Insight:
        sources = records.source_tags()
        confidence = payload.metadata.confidence_score
        if len(sources) < MIN_CONFIDENT_SOURCES:
            confidence = min(confidence, LOW_SOURCE_CONFIDENCE_CAP)

        ep = payload.emotional_patterns
        insight = Insight(
            emotional_patterns=EmotionalPatterns(
                dominant_mood=clean_ai_text(ep.dominant_mood).lower() or "neutro",
                secondary_moods=ep.secondary_moods,
                trend=Trend(ep.trend),
                common_triggers=ep.common_triggers,
            ),
            cognitive_patterns=CognitivePatterns(**payload.cognitive_patterns.model_dump()),
            behavioral_patterns=BehavioralPatterns(**payload.behavioral_patterns.model_dump()),
            treatment_context=TreatmentContext(**payload.treatment_context.model_dump()),
            metadata=InsightMetadata(
                last_updated=now,
                data_sources_used=sources,
                confidence_score=confidence,
            ),
        )
        return sanitize_fields(insight, skip=frozenset({"metadata"}))
