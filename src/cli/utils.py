"""Composition root shared by the CLI commands."""

from datetime import timedelta
from functools import partial
from pathlib import Path

import structlog
from rich.console import Console

from cache.store import CacheStore
from insights.analyzer import Analyzer, LLMAnalyzer
from insights.fusion import InsightFusionEngine
from storage.base import SourceRepository
from storage.memory import InMemoryRepository
from sync.orchestrator import SyncOrchestrator
from sync.readers import read_daily_tip, read_emotional_state
from sync.updaters import (
    AssistantContextUpdater,
    ContentRecommendationsUpdater,
    DailyTipUpdater,
    EmotionalStateUpdater,
)

from .config import load_config_model
from .config_models import HOUR, MoodsyncConfig
from .retry import retry_kwargs_from_config

console = Console()
logger = structlog.get_logger()


def build_analyzer(config: MoodsyncConfig) -> Analyzer:
    llm = config.llm
    if llm.provider == "none":
        return Analyzer()
    return LLMAnalyzer(
        provider_name=llm.provider,
        model=llm.model,
        api_key=llm.api_key,
        timeout=llm.timeout_seconds,
        max_tokens=llm.max_tokens,
        **retry_kwargs_from_config(config.retry),
    )


def build_components(
    config: MoodsyncConfig,
    repository: SourceRepository,
    analyzer: Analyzer | None = None,
    cache: CacheStore | None = None,
) -> dict:
    """Wire one cache instance through the fusion engine and the orchestrator."""
    cache = cache or CacheStore(default_ttl=config.cache.default_ttl_seconds)
    analyzer = analyzer or build_analyzer(config)

    fusion = InsightFusionEngine(
        repository,
        cache,
        analyzer,
        freshness=timedelta(hours=config.insights.freshness_hours),
        ttl=config.insights.ttl_hours * HOUR,
        chat_limit=config.insights.chat_history_limit,
    )

    s = config.sync
    legacy = s.dual_write_legacy_keys
    updaters = [
        EmotionalStateUpdater(cache, ttl=s.emotional_state_ttl_hours * HOUR, dual_write_legacy=legacy),
        DailyTipUpdater(cache, analyzer, ttl=s.daily_tip_ttl_hours * HOUR, dual_write_legacy=legacy),
        AssistantContextUpdater(
            cache, repository, ttl=s.assistant_context_ttl_hours * HOUR, dual_write_legacy=legacy
        ),
        ContentRecommendationsUpdater(
            cache, repository, ttl=s.recommendations_ttl_hours * HOUR, dual_write_legacy=legacy
        ),
    ]
    orchestrator = SyncOrchestrator(cache, fusion, updaters, enabled=s.enabled())

    neutral_ttl = s.neutral_state_ttl_hours * HOUR
    readers = {
        "emotional_state": partial(
            read_emotional_state,
            cache,
            neutral_ttl=neutral_ttl,
            migrate_ttl=s.emotional_state_ttl_hours * HOUR,
        ),
        "daily_tip": partial(
            read_daily_tip,
            cache,
            ttl=s.daily_tip_ttl_hours * HOUR,
            migrate_ttl=s.daily_tip_ttl_hours * HOUR,
            neutral_ttl=neutral_ttl,
        ),
    }

    return {
        "config": config,
        "cache": cache,
        "repository": repository,
        "analyzer": analyzer,
        "fusion": fusion,
        "orchestrator": orchestrator,
        "readers": readers,
    }


def get_components(data_file: Path, config_path: Path | None = None) -> dict:
    """Load config and a JSON data fixture, then build components."""
    config = load_config_model(config_path)
    repository = InMemoryRepository.from_file(data_file)
    return build_components(config, repository)
