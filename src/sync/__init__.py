"""Signal-driven synchronization of derived per-user artifacts."""

from .orchestrator import SIGNAL_ENTITIES, SyncOrchestrator, SyncResult
from .tips import DailyTip, fallback_tip
from .updaters import (
    ArtifactUpdater,
    AssistantContextUpdater,
    ContentRecommendationsUpdater,
    DailyTipUpdater,
    EmotionalStateUpdater,
    SyncContext,
    UpdateError,
)

__all__ = [
    "SyncOrchestrator",
    "SyncResult",
    "SIGNAL_ENTITIES",
    "SyncContext",
    "ArtifactUpdater",
    "EmotionalStateUpdater",
    "DailyTipUpdater",
    "AssistantContextUpdater",
    "ContentRecommendationsUpdater",
    "UpdateError",
    "DailyTip",
    "fallback_tip",
]
