"""Tests for the repository contract and the in-memory implementation."""

import json

import pytest

from storage.base import SourceRepository, SourceUnavailable
from storage.memory import InMemoryRepository
from storage.models import ContentRecommendation, UserProfile


class TestBaseRepository:
    @pytest.mark.asyncio
    async def test_defaults_are_empty(self):
        repo = SourceRepository()
        assert await repo.get_journal_entries_by_user("u1") == []
        assert await repo.get_chat_messages_by_user("u1", 10) == []
        assert await repo.get_sessions_by_user("u1") == []
        assert await repo.get_user("u1") is None

    @pytest.mark.asyncio
    async def test_recommendation_writes_unsupported(self):
        rec = ContentRecommendation(
            user_id="u1", title="t", description="d", type="article", category="emotional", content="c"
        )
        with pytest.raises(SourceUnavailable):
            await SourceRepository().create_content_recommendation(rec)


class TestInMemoryRepository:
    @pytest.mark.asyncio
    async def test_journal_newest_first(self, repo):
        entries = await repo.get_journal_entries_by_user("u1")
        assert [e.date for e in entries] == sorted((e.date for e in entries), reverse=True)

    @pytest.mark.asyncio
    async def test_chat_limit(self, repo):
        assert len(await repo.get_chat_messages_by_user("u1", limit=0)) == 0
        assert len(await repo.get_chat_messages_by_user("u1", limit=5)) == 1

    @pytest.mark.asyncio
    async def test_create_recommendation_assigns_id(self):
        repo = InMemoryRepository()
        rec = ContentRecommendation(
            user_id="u1", title="t", description="d", type="video", category="cognitive", content="c"
        )
        stored = await repo.create_content_recommendation(rec)
        assert stored.id
        assert repo.recommendations["u1"] == [stored]

    def test_from_file(self, tmp_path):
        data = {
            "users": [{"id": "u1", "first_name": "Ana", "date_of_birth": "1990-06-15"}],
            "journal": [
                {
                    "id": "j1",
                    "user_id": "u1",
                    "content": "dia difícil",
                    "date": "2025-03-01T09:00:00",
                    "mood": "tristeza",
                    "tags": ["trabalho"],
                }
            ],
            "chat": [
                {
                    "id": "c1",
                    "user_id": "u1",
                    "content": "oi",
                    "role": "user",
                    "timestamp": "2025-03-01T10:00:00",
                }
            ],
            "sessions": [
                {"id": "s1", "user_id": "u1", "scheduled_for": "2025-03-05T15:00:00"}
            ],
        }
        path = tmp_path / "data.json"
        path.write_text(json.dumps(data))

        repo = InMemoryRepository.from_file(path)

        assert repo.users["u1"].date_of_birth.year == 1990
        assert repo.journal["u1"][0].mood == "tristeza"
        assert repo.chat["u1"][0].timestamp.hour == 10
        assert repo.sessions["u1"][0].status == "scheduled"


class TestUserProfile:
    def test_age_before_and_after_birthday(self, profile):
        from datetime import date

        assert profile.age(date(2025, 6, 14)) == 34
        assert profile.age(date(2025, 6, 15)) == 35

    def test_age_unknown(self):
        assert UserProfile(id="x").age() is None

    def test_is_empty(self):
        assert UserProfile(id="x", first_name="Bia").is_empty()
        assert not UserProfile(id="x", goals=["correr"]).is_empty()
