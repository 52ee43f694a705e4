"""Shared test fixtures for moodsync."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cache.store import CacheStore  # noqa: E402
from insights.models import SourceRecords  # noqa: E402
from observability import metrics  # noqa: E402
from storage.memory import InMemoryRepository  # noqa: E402
from storage.models import ChatMessage, JournalEntry, TherapySession, UserProfile  # noqa: E402

NOW = datetime(2025, 3, 10, 12, 0, 0)


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeDatetimeClock:
    def __init__(self, start: datetime = NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_entry(mood, days_ago=0, tags=None, user_id="u1", entry_id=None, **extra) -> JournalEntry:
    return JournalEntry(
        id=entry_id or f"j-{mood}-{days_ago}",
        user_id=user_id,
        content=f"Hoje me senti com {mood}.",
        date=NOW - timedelta(days=days_ago),
        mood=mood,
        tags=tags or [],
        **extra,
    )


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dt_clock():
    return FakeDatetimeClock()


@pytest.fixture
def cache(clock):
    return CacheStore(clock=clock)


@pytest.fixture
def anxious_entries():
    """Newest first: three anxious days after a calm/happy stretch."""
    return [
        make_entry("ansiedade", 0, tags=["trabalho"]),
        make_entry("ansiedade", 1, tags=["prazos"]),
        make_entry("ansiedade", 2),
        make_entry("calma", 3, tags=["caminhada"]),
        make_entry("alegria", 4, tags=["família"]),
        make_entry("alegria", 5),
    ]


@pytest.fixture
def profile():
    return UserProfile(
        id="u1",
        first_name="Ana",
        date_of_birth=datetime(1990, 6, 15).date(),
        occupation="Engenheira",
        fears=["falar em público"],
        anxieties=["prazos no trabalho"],
        goals=["dormir melhor"],
    )


@pytest.fixture
def repo(anxious_entries, profile):
    repo = InMemoryRepository()
    for entry in anxious_entries:
        repo.add_journal_entry(entry)
    repo.add_chat_message(
        ChatMessage(
            id="c1",
            user_id="u1",
            content="Estou muito preocupada com a entrega de sexta.",
            role="user",
            timestamp=NOW - timedelta(hours=2),
            emotional_tone="preocupação",
        )
    )
    repo.add_session(
        TherapySession(
            id="s1",
            user_id="u1",
            scheduled_for=NOW - timedelta(days=7),
            status="completed",
            type="individual",
        )
    )
    repo.add_user(profile)
    return repo


@pytest.fixture
def records(anxious_entries, profile):
    return SourceRecords(journal=list(anxious_entries), profile=profile)


@pytest.fixture
def analysis_payload():
    """A valid analyzer response in the backend's camelCase shape."""
    return {
        "emotionalPatterns": {
            "dominantMood": "ansiedade",
            "secondaryMoods": ["preocupação", "cansaço"],
            "trend": "declining",
            "commonTriggers": ["prazos", "reuniões"],
        },
        "cognitivePatterns": {
            "recurrentThoughts": ["Não vou dar conta"],
            "cognitiveDistortions": ["catastrofização"],
            "selfTalkPatterns": ["**autocrítica** frequente"],
        },
        "behavioralPatterns": {
            "copingStrategies": ["Respiração profunda"],
            "avoidanceBehaviors": [],
            "positiveActivities": ["caminhadas"],
        },
        "treatmentContext": {
            "therapyGoals": ["reduzir ansiedade"],
            "effectiveInterventions": ["TCC"],
            "challengingAreas": ["trabalho"],
        },
        "metadata": {"confidenceScore": 0.8},
    }
