"""Tests for the CLI composition root."""

from cache.store import CacheStore
from cli.config_models import MoodsyncConfig
from cli.utils import build_components
from storage.memory import InMemoryRepository


def _components(clock, **sync):
    config = MoodsyncConfig.from_dict({"llm": {"provider": "none"}, "sync": sync})
    return build_components(config, InMemoryRepository(), cache=CacheStore(clock=clock))


def test_single_cache_shared(clock):
    c = _components(clock)
    assert c["fusion"].cache is c["cache"]
    assert c["orchestrator"].cache is c["cache"]


def test_neutral_state_ttl_from_config(clock):
    c = _components(clock, neutral_state_ttl_hours=0.5)
    c["readers"]["emotional_state"]("u1")

    clock.advance(1799)
    assert "emotional_state:u1" in c["cache"]
    clock.advance(1)
    assert "emotional_state:u1" not in c["cache"]


def test_daily_tip_ttl_from_config(clock):
    c = _components(clock, daily_tip_ttl_hours=3, neutral_state_ttl_hours=0.25)
    c["readers"]["daily_tip"]("u1")

    clock.advance(900)
    assert "emotional_state:u1" not in c["cache"]
    assert "daily_tip:u1" in c["cache"]
    clock.advance(3 * 3600 - 900)
    assert "daily_tip:u1" not in c["cache"]
