"""Tests for the consumer-side read helpers."""

from conftest import NOW
from insights.projection import INSUFFICIENT_STATE
from sync.readers import (
    read_assistant_context,
    read_content_recommendations,
    read_daily_tip,
    read_emotional_state,
)
from sync.tips import DailyTip, fallback_tip


def test_canonical_key_wins(cache):
    cache.set("emotional_state:u1", "current")
    cache.set("emotional_state_user_u1", "legacy")
    assert read_emotional_state(cache, "u1") == "current"


def test_legacy_hit_is_migrated(cache, clock):
    cache.set("emotional_state_user_u1", "legacy", ttl=60)
    assert read_emotional_state(cache, "u1", migrate_ttl=7200) == "legacy"
    clock.advance(120)
    # legacy entry expired, migrated copy still live
    assert cache.get("emotional_state_user_u1") is None
    assert cache.get("emotional_state:u1") == "legacy"


def test_miss_returns_and_caches_neutral_state(cache, clock):
    state = read_emotional_state(cache, "u1")
    assert state.current_state == INSUFFICIENT_STATE
    assert not state.has_sufficient_data
    assert cache.get("emotional_state:u1") is state

    clock.advance(3600)
    assert "emotional_state:u1" not in cache


def test_daily_tip_miss_uses_given_ttls(cache, clock):
    read_daily_tip(cache, "u1", ttl=7200, neutral_ttl=600)

    clock.advance(600)
    assert "emotional_state:u1" not in cache
    assert "daily_tip:u1" in cache

    clock.advance(6600)
    assert "daily_tip:u1" not in cache


def test_daily_tip_follows_cached_state(cache):
    cache.set("daily_tip_user_u1", fallback_tip("tristeza", NOW))
    tip = read_daily_tip(cache, "u1")
    assert tip.category == "Elevação do Humor"
    assert "daily_tip:u1" in cache


def test_daily_tip_miss_uses_catalog(cache):
    tip = read_daily_tip(cache, "u1")
    assert isinstance(tip, DailyTip)
    assert not tip.ai_generated
    assert cache.get("daily_tip:u1") is tip


def test_assistant_context_has_no_default(cache):
    assert read_assistant_context(cache, "u1") is None
    cache.set("assistant_context_u1", {"user_profile": {}})
    assert read_assistant_context(cache, "u1") == {"user_profile": {}}
    assert "assistant_context:u1" in cache


def test_recommendations_default_to_empty(cache):
    assert read_content_recommendations(cache, "u1") == []
