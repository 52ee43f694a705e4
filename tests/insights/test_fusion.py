"""Tests for the insight fusion engine."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from cache.keys import insights_key
from conftest import NOW
from insights.analyzer import Analyzer, AnalysisUnavailable, MalformedAnalysisResult
from insights.fusion import InsightFusionEngine, guidance_insight
from insights.models import Insight
from shared_types import Trend
from storage.base import SourceRepository, SourceUnavailable
from storage.memory import InMemoryRepository
from storage.models import ChatMessage


def _analyzer(payload=None, error=None):
    analyzer = Analyzer()
    analyzer.analyze = AsyncMock(return_value=payload, side_effect=error)
    return analyzer


@pytest.fixture
def engine_factory(cache, dt_clock):
    def build(repo, analyzer=None, **kwargs):
        return InsightFusionEngine(repo, cache, analyzer, clock=dt_clock, **kwargs)

    return build


class TestGuidance:
    @pytest.mark.asyncio
    async def test_no_primary_data_returns_guidance(self, engine_factory, profile):
        repo = InMemoryRepository()
        repo.add_user(profile)
        analyzer = _analyzer({})
        insight = await engine_factory(repo, analyzer).compute_insight("u1")

        assert insight.metadata.data_sources_used == ["limited_data"]
        assert insight.metadata.confidence_score == 0.3
        analyzer.analyze.assert_not_called()

    @pytest.mark.asyncio
    async def test_guidance_not_cached(self, engine_factory, cache):
        await engine_factory(SourceRepository()).compute_insight("u9")
        assert insights_key("u9") not in cache

    def test_guidance_shape(self):
        insight = guidance_insight(NOW)
        assert insight.is_heuristic
        assert insight.metadata.last_updated == NOW
        assert insight.behavioral_patterns.positive_activities


class TestAnalysisPath:
    @pytest.mark.asyncio
    async def test_builds_insight_from_payload(self, engine_factory, repo, analysis_payload):
        insight = await engine_factory(repo, _analyzer(analysis_payload)).compute_insight("u1")

        assert insight.emotional_patterns.dominant_mood == "ansiedade"
        assert insight.emotional_patterns.trend == Trend.DECLINING
        assert insight.cognitive_patterns.self_talk_patterns == ["autocrítica frequente"]
        assert set(insight.metadata.data_sources_used) == {
            "journal_entries",
            "assistant_interactions",
            "therapy_sessions",
            "user_profile",
        }
        assert insight.metadata.confidence_score == 0.8
        assert insight.metadata.last_updated == NOW

    @pytest.mark.asyncio
    async def test_single_source_caps_confidence(self, engine_factory, anxious_entries, analysis_payload):
        repo = InMemoryRepository()
        for entry in anxious_entries:
            repo.add_journal_entry(entry)
        analysis_payload["metadata"]["confidenceScore"] = 0.95

        insight = await engine_factory(repo, _analyzer(analysis_payload)).compute_insight("u1")

        assert insight.metadata.data_sources_used == ["journal_entries"]
        assert insight.metadata.confidence_score == 0.3

    @pytest.mark.asyncio
    async def test_result_cached_with_ttl(self, engine_factory, repo, cache, clock, analysis_payload):
        await engine_factory(repo, _analyzer(analysis_payload), ttl=60).compute_insight("u1")
        assert isinstance(cache.get(insights_key("u1")), Insight)
        clock.advance(61)
        assert cache.get(insights_key("u1")) is None

    @pytest.mark.asyncio
    async def test_fresh_cache_short_circuits(self, engine_factory, repo, dt_clock, analysis_payload):
        analyzer = _analyzer(analysis_payload)
        engine = engine_factory(repo, analyzer)
        first = await engine.compute_insight("u1")

        dt_clock.advance(hours=3, minutes=59)
        result = await engine.compute("u1")
        assert result.insight is first
        assert result.records is None
        assert analyzer.analyze.call_count == 1

    @pytest.mark.asyncio
    async def test_stale_cache_recomputed(self, engine_factory, repo, dt_clock, analysis_payload):
        analyzer = _analyzer(analysis_payload)
        engine = engine_factory(repo, analyzer)
        first = await engine.compute_insight("u1")

        dt_clock.advance(hours=4)
        second = await engine.compute_insight("u1")
        assert second is not first
        assert analyzer.analyze.call_count == 2


class TestFallback:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "analyzer",
        [
            Analyzer(),
            _analyzer(error=AnalysisUnavailable("timeout")),
            _analyzer(error=MalformedAnalysisResult("bad json")),
            _analyzer({"emotionalPatterns": {"dominantMood": "calma"}}),
            _analyzer({"metadata": {"confidenceScore": 3}}),
        ],
        ids=["no-backend", "unavailable", "malformed", "missing-metadata", "bad-schema"],
    )
    async def test_falls_back_to_heuristics(self, engine_factory, repo, analyzer):
        insight = await engine_factory(repo, analyzer).compute_insight("u1")

        assert insight.metadata.data_sources_used == ["fallback"]
        assert insight.metadata.confidence_score <= 0.3
        assert insight.emotional_patterns.dominant_mood == "ansiedade"
        assert insight.emotional_patterns.trend == Trend.DECLINING

    @pytest.mark.asyncio
    async def test_programming_errors_propagate(self, engine_factory, repo):
        with pytest.raises(ZeroDivisionError):
            await engine_factory(repo, _analyzer(error=ZeroDivisionError())).compute_insight("u1")


class TestSourceDegradation:
    @pytest.mark.asyncio
    async def test_failing_fetches_become_empty(self, engine_factory, anxious_entries, analysis_payload):
        class FlakyRepo(SourceRepository):
            async def get_journal_entries_by_user(self, user_id):
                return anxious_entries

            async def get_chat_messages_by_user(self, user_id, limit=50):
                raise SourceUnavailable("chat service down")

            async def get_sessions_by_user(self, user_id):
                raise NotImplementedError

            async def get_user(self, user_id):
                raise ConnectionError("profile db unreachable")

        engine = engine_factory(FlakyRepo(), _analyzer(analysis_payload))
        records = await engine.load_sources("u1")
        assert records.journal == anxious_entries
        assert records.chat == []
        assert records.sessions == []
        assert records.profile is None

        insight = await engine.compute_insight("u1")
        assert insight.metadata.data_sources_used == ["journal_entries"]

    @pytest.mark.asyncio
    async def test_plain_method_overrides_are_tolerated(self, engine_factory, anxious_entries):
        class SyncRepo(SourceRepository):
            def get_journal_entries_by_user(self, user_id):
                return anxious_entries

            def get_chat_messages_by_user(self, user_id, limit=50):
                raise ConnectionError("chat db unreachable")

            def get_user(self, user_id):
                raise RuntimeError("boom")

        engine = engine_factory(SyncRepo(), _analyzer())
        records = await engine.load_sources("u1")
        assert records.journal == anxious_entries
        assert records.chat == []
        assert records.profile is None

    @pytest.mark.asyncio
    async def test_cancelled_sessions_ignored(self, engine_factory, repo):
        repo.sessions["u1"][0].status = "cancelled"
        records = await engine_factory(repo).load_sources("u1")
        assert records.sessions == []

    @pytest.mark.asyncio
    async def test_chat_limit_passed(self, engine_factory, repo):
        repo.get_chat_messages_by_user = AsyncMock(return_value=[])
        await engine_factory(repo, chat_limit=25).load_sources("u1")
        repo.get_chat_messages_by_user.assert_awaited_once_with("u1", 25)


@pytest.mark.asyncio
async def test_confidence_invariant_across_source_mixes(cache, anxious_entries, profile, analysis_payload):
    analysis_payload["metadata"]["confidenceScore"] = 0.9
    mixes = [
        {"journal": True},
        {"journal": True, "profile": True},
        {"journal": True, "profile": True, "chat": True},
    ]
    for mix in mixes:
        repo = InMemoryRepository()
        if mix.get("journal"):
            for entry in anxious_entries:
                repo.add_journal_entry(entry)
        if mix.get("profile"):
            repo.add_user(profile)
        if mix.get("chat"):
            repo.add_chat_message(ChatMessage("c", "u1", "oi", "user", NOW - timedelta(hours=1)))
        cache.clear()
        engine = InsightFusionEngine(repo, cache, _analyzer(analysis_payload))
        insight = await engine.compute_insight("u1")
        if insight.metadata.confidence_score > 0.5:
            assert len(insight.metadata.data_sources_used) >= 2
