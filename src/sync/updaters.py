"""Per-artifact updaters run by the orchestrator after an insight recompute.

Each updater writes its own cache entry with its own TTL and raises on
failure; the orchestrator isolates failures per artifact.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

import structlog
from pydantic import ValidationError

from cache.keys import artifact_key, legacy_key
from cache.store import CacheStore
from insights import catalog
from insights.analyzer import Analyzer, AnalysisUnavailable, MalformedAnalysisResult
from insights.heuristics import estimate_emotional_state
from insights.models import Insight, SourceRecords
from insights.projection import project_emotional_state
from insights.prompts import TIP_SYSTEM, build_tip_prompt
from insights.sanitize import sanitize_fields
from insights.schema import DailyTipPayload
from shared_types import Artifact, SourceTag, Trend
from storage.base import SourceRepository, SourceUnavailable
from storage.models import ContentRecommendation

from .tips import DailyTip, fallback_tip

logger = structlog.get_logger()

HOUR = 3600.0
MAX_FOCUS_ITEMS = 3


class UpdateError(Exception):
    """An artifact could not be regenerated."""


@dataclass
class SyncContext:
    user_id: str
    insight: Insight
    records: SourceRecords | None
    now: datetime


class ArtifactUpdater(ABC):
    artifact: Artifact

    def __init__(self, cache: CacheStore, ttl: float, dual_write_legacy: bool = True):
        self.cache = cache
        self.ttl = ttl
        self.dual_write_legacy = dual_write_legacy

    @abstractmethod
    async def update(self, ctx: SyncContext) -> None:
        """Regenerate the artifact and write it to the cache, raising on failure."""

    def _store(self, user_id: str, value) -> None:
        self.cache.set(artifact_key(self.artifact, user_id), value, ttl=self.ttl)
        old = legacy_key(self.artifact, user_id)
        if old and self.dual_write_legacy:
            self.cache.set(old, value, ttl=self.ttl)


class EmotionalStateUpdater(ArtifactUpdater):
    artifact = Artifact.EMOTIONAL_STATE

    def __init__(self, cache: CacheStore, ttl: float = 2 * HOUR, dual_write_legacy: bool = True):
        super().__init__(cache, ttl, dual_write_legacy)

    async def update(self, ctx: SyncContext) -> None:
        fallback = SourceTag.FALLBACK in ctx.insight.metadata.data_sources_used
        if fallback and ctx.records is not None:
            state = estimate_emotional_state(ctx.records, ctx.now)
        else:
            state = project_emotional_state(ctx.insight, ctx.now)
        self._store(ctx.user_id, state)
        logger.debug(
            "sync.emotional_state_updated",
            user_id=ctx.user_id,
            state=state.current_state,
            intensity=state.intensity,
            sufficient=state.has_sufficient_data,
        )


class DailyTipUpdater(ArtifactUpdater):
    artifact = Artifact.DAILY_TIP

    def __init__(
        self,
        cache: CacheStore,
        analyzer: Analyzer | None = None,
        ttl: float = 12 * HOUR,
        dual_write_legacy: bool = True,
    ):
        super().__init__(cache, ttl, dual_write_legacy)
        self.analyzer = analyzer or Analyzer()

    async def update(self, ctx: SyncContext) -> None:
        patterns = ctx.insight.emotional_patterns
        tip = None
        if not ctx.insight.is_heuristic:
            tip = await self._generate(ctx, patterns.dominant_mood, patterns.trend, patterns.common_triggers)
        if tip is None:
            tip = fallback_tip(patterns.dominant_mood, ctx.now)
        self._store(ctx.user_id, tip)

    async def _generate(self, ctx: SyncContext, mood: str, trend: Trend, triggers: list[str]):
        try:
            raw = await self.analyzer.analyze(TIP_SYSTEM, build_tip_prompt(mood, trend, triggers))
            payload = DailyTipPayload.model_validate(raw)
        except (AnalysisUnavailable, MalformedAnalysisResult, ValidationError) as e:
            logger.info("sync.daily_tip_fallback", user_id=ctx.user_id, error=str(e)[:200])
            return None
        tip = DailyTip(**payload.model_dump(), ai_generated=True, created_at=ctx.now)
        return sanitize_fields(tip)


class AssistantContextUpdater(ArtifactUpdater):
    artifact = Artifact.ASSISTANT_CONTEXT

    def __init__(
        self,
        cache: CacheStore,
        repository: SourceRepository,
        ttl: float = 24 * HOUR,
        dual_write_legacy: bool = True,
    ):
        super().__init__(cache, ttl, dual_write_legacy)
        self.repository = repository

    async def update(self, ctx: SyncContext) -> None:
        profile = ctx.records.profile if ctx.records is not None else None
        if profile is None:
            profile = await self.repository.get_user(ctx.user_id)
        if profile is None:
            raise UpdateError(f"no profile for user {ctx.user_id}")

        insight = ctx.insight
        context = {
            "user_profile": {
                "first_name": profile.first_name,
                "age": profile.age(ctx.now.date()),
                "occupation": profile.occupation,
            },
            "emotional_state": {
                "dominant_mood": insight.emotional_patterns.dominant_mood,
                "trend": str(insight.emotional_patterns.trend),
                "triggers": list(insight.emotional_patterns.common_triggers),
            },
            "therapeutic_focus": {
                "recurrent_thoughts": insight.cognitive_patterns.recurrent_thoughts[:MAX_FOCUS_ITEMS],
                "cognitive_distortions": insight.cognitive_patterns.cognitive_distortions[
                    :MAX_FOCUS_ITEMS
                ],
                "coping_strategies": insight.behavioral_patterns.coping_strategies[:MAX_FOCUS_ITEMS],
            },
            "data_sources": list(insight.metadata.data_sources_used),
            "last_updated": ctx.now.isoformat(),
        }
        self._store(ctx.user_id, context)


def recommendation_priority(category: str, insight: Insight) -> int:
    if category == "emotional":
        return 9 if catalog.is_challenging(insight.emotional_patterns.dominant_mood) else 7
    if category == "cognitive":
        return min(9, 5 + len(insight.cognitive_patterns.cognitive_distortions))
    if category == "behavioral":
        return {Trend.DECLINING: 10, Trend.STABLE: 7}.get(insight.emotional_patterns.trend, 5)
    return 5


class ContentRecommendationsUpdater(ArtifactUpdater):
    artifact = Artifact.CONTENT_RECOMMENDATIONS

    def __init__(
        self,
        cache: CacheStore,
        repository: SourceRepository,
        ttl: float = 12 * HOUR,
        dual_write_legacy: bool = True,
    ):
        super().__init__(cache, ttl, dual_write_legacy)
        self.repository = repository

    def build(self, ctx: SyncContext) -> list[ContentRecommendation]:
        insight = ctx.insight
        mood = insight.emotional_patterns.dominant_mood
        journal_ids = []
        if ctx.records is not None:
            recent = sorted(ctx.records.journal, key=lambda e: e.date, reverse=True)
            journal_ids = [e.id for e in recent[:5]]

        coping = insight.behavioral_patterns.coping_strategies
        distortions = insight.cognitive_patterns.cognitive_distortions
        templates = [
            (
                "article",
                "emotional",
                f"Entendendo a {mood}" if catalog.match_mood(mood) else "Entendendo suas emoções",
                "Como reconhecer, acolher e lidar com o que você tem sentido.",
                f"Um guia prático sobre {mood}: sinais, gatilhos comuns e estratégias de cuidado.",
                [mood, "emoções"],
            ),
            (
                "exercise",
                "behavioral",
                "Exercício de ativação comportamental",
                "Pequenas atividades planejadas para recuperar energia e motivação.",
                "Planeje três atividades curtas e prazerosas para esta semana"
                + (f", incluindo {coping[0].lower()}." if coping else "."),
                ["exercício", "comportamento"],
            ),
            (
                "video",
                "cognitive",
                "Reestruturação cognitiva na prática",
                "Aprenda a identificar e questionar pensamentos automáticos.",
                "Vídeo guiado sobre como identificar distorções cognitivas"
                + (f" como '{distortions[0]}'." if distortions else "."),
                ["pensamentos", "TCC"],
            ),
        ]
        return [
            ContentRecommendation(
                user_id=ctx.user_id,
                title=title,
                description=description,
                type=rec_type,
                category=category,
                content=content,
                tags=tags,
                priority=recommendation_priority(category, insight),
                related_journal_ids=journal_ids,
                ai_generated=not insight.is_heuristic,
            )
            for rec_type, category, title, description, content, tags in templates
        ]

    async def update(self, ctx: SyncContext) -> None:
        recommendations = self.build(ctx)
        stored, errors = [], []
        for rec in recommendations:
            try:
                stored.append(await self.repository.create_content_recommendation(rec))
            except SourceUnavailable as e:
                stored.append(rec)
                errors.append(e)
            except Exception as e:
                logger.warning(
                    "sync.recommendation_persist_failed",
                    user_id=ctx.user_id,
                    title=rec.title,
                    error=str(e),
                )
                errors.append(e)

        if not stored:
            raise UpdateError(f"no recommendation could be stored: {errors[0]}")
        stored.sort(key=lambda r: r.priority, reverse=True)
        self.cache.set(artifact_key(self.artifact, ctx.user_id), stored, ttl=self.ttl)
