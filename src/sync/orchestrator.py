"""Fan-out coordinator run whenever a new source record arrives for a user."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

import structlog

from cache.keys import all_user_keys
from cache.store import CacheStore
from insights.fusion import InsightFusionEngine
from insights.models import Insight
from observability import metrics
from shared_types import Artifact, SignalSource, UpdateOutcome

from .updaters import ArtifactUpdater, SyncContext

logger = structlog.get_logger()

# Signal source -> entity kind in the invalidation graph
SIGNAL_ENTITIES = {
    SignalSource.JOURNAL: "journal",
    SignalSource.CHAT: "chat",
    SignalSource.SESSION: "session",
    SignalSource.PROFILE: "user",
    SignalSource.RECOMMENDATION: "recommendations",
}


@dataclass
class SyncResult:
    user_id: str
    source: str
    outcomes: dict[Artifact, UpdateOutcome] = field(default_factory=dict)
    errors: dict[Artifact, str] = field(default_factory=dict)
    insight: Insight | None = None
    invalidated: int = 0

    @property
    def ok(self) -> bool:
        """At least one artifact was regenerated."""
        return any(o == UpdateOutcome.SUCCEEDED for o in self.outcomes.values())

    def with_outcome(self, outcome: UpdateOutcome) -> list[Artifact]:
        return [a for a, o in self.outcomes.items() if o == outcome]


class SyncOrchestrator:
    """Invalidate, recompute the insight, then regenerate every artifact.

    Updaters run concurrently and independently; one failing never stops
    the others. Artifacts not in `enabled` are reported as skipped.
    Concurrent syncs for the same user are last-writer-wins.
    """

    def __init__(
        self,
        cache: CacheStore,
        fusion: InsightFusionEngine,
        updaters: list[ArtifactUpdater],
        enabled: set[Artifact] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.cache = cache
        self.fusion = fusion
        self.updaters = updaters
        self.enabled = set(Artifact) if enabled is None else set(enabled)
        self._clock = clock

    def invalidate_user(self, user_id: str, source: str) -> int:
        """Drop every derived key for the user plus related entity prefixes."""
        purged = sum(1 for key in all_user_keys(user_id) if self.cache.delete(key))
        entity = SIGNAL_ENTITIES.get(source, str(source))
        purged += self.cache.notify_mutation(entity, user_id)
        return purged

    async def on_signal(self, user_id: str, source: str) -> bool:
        return (await self.sync(user_id, source)).ok

    async def sync(self, user_id: str, source: str) -> SyncResult:
        result = SyncResult(user_id=user_id, source=str(source))
        log = logger.bind(user_id=user_id, source=str(source))

        with metrics.timer("sync.duration"):
            result.invalidated = self.invalidate_user(user_id, source)
            fused = await self.fusion.compute(user_id)
            result.insight = fused.insight
            ctx = SyncContext(
                user_id=user_id, insight=fused.insight, records=fused.records, now=self._clock()
            )

            active = []
            for updater in self.updaters:
                if updater.artifact in self.enabled:
                    active.append(updater)
                else:
                    result.outcomes[updater.artifact] = UpdateOutcome.SKIPPED

            outcomes = await asyncio.gather(*(self._run(u, ctx) for u in active))
            for updater, error in zip(active, outcomes):
                if error is None:
                    result.outcomes[updater.artifact] = UpdateOutcome.SUCCEEDED
                else:
                    result.outcomes[updater.artifact] = UpdateOutcome.FAILED
                    result.errors[updater.artifact] = error

        for artifact, outcome in result.outcomes.items():
            metrics.counter("sync.artifact", artifact=artifact, outcome=outcome)

        summary = {str(a): str(o) for a, o in result.outcomes.items()}
        if result.ok:
            log.info("sync.completed", outcomes=summary, invalidated=result.invalidated)
        else:
            log.error("sync.all_updates_failed", outcomes=summary, errors=result.errors)
        return result

    @staticmethod
    async def _run(updater: ArtifactUpdater, ctx: SyncContext) -> str | None:
        try:
            await updater.update(ctx)
        except Exception as e:
            logger.warning(
                "sync.artifact_failed",
                user_id=ctx.user_id,
                artifact=str(updater.artifact),
                error=str(e),
            )
            return str(e) or type(e).__name__
        return None
