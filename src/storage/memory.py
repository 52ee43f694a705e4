"""Dict-backed repository, used by the CLI and tests."""

import json
import uuid
from pathlib import Path

import structlog

from .base import SourceRepository
from .models import ChatMessage, ContentRecommendation, JournalEntry, TherapySession, UserProfile

logger = structlog.get_logger()


class InMemoryRepository(SourceRepository):
    def __init__(self):
        self.journal: dict[str, list[JournalEntry]] = {}
        self.chat: dict[str, list[ChatMessage]] = {}
        self.sessions: dict[str, list[TherapySession]] = {}
        self.users: dict[str, UserProfile] = {}
        self.recommendations: dict[str, list[ContentRecommendation]] = {}

    def add_journal_entry(self, entry: JournalEntry):
        self.journal.setdefault(entry.user_id, []).append(entry)

    def add_chat_message(self, message: ChatMessage):
        self.chat.setdefault(message.user_id, []).append(message)

    def add_session(self, session: TherapySession):
        self.sessions.setdefault(session.user_id, []).append(session)

    def add_user(self, user: UserProfile):
        self.users[user.id] = user

    async def get_journal_entries_by_user(self, user_id: str) -> list[JournalEntry]:
        # Newest first, matching the storage layer's ordering
        return sorted(self.journal.get(user_id, []), key=lambda e: e.date, reverse=True)

    async def get_chat_messages_by_user(self, user_id: str, limit: int = 50) -> list[ChatMessage]:
        messages = sorted(self.chat.get(user_id, []), key=lambda m: m.timestamp, reverse=True)
        return messages[:limit]

    async def get_sessions_by_user(self, user_id: str) -> list[TherapySession]:
        return sorted(self.sessions.get(user_id, []), key=lambda s: s.scheduled_for, reverse=True)

    async def get_user(self, user_id: str) -> UserProfile | None:
        return self.users.get(user_id)

    async def create_content_recommendation(
        self, record: ContentRecommendation
    ) -> ContentRecommendation:
        record.id = record.id or uuid.uuid4().hex[:12]
        self.recommendations.setdefault(record.user_id, []).append(record)
        return record

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryRepository":
        """Load a JSON fixture with users/journal/chat/sessions lists."""
        with open(path) as f:
            data = json.load(f)

        repo = cls()
        for item in data.get("users", []):
            repo.add_user(UserProfile.from_dict(item))
        for item in data.get("journal", []):
            repo.add_journal_entry(JournalEntry.from_dict(item))
        for item in data.get("chat", []):
            repo.add_chat_message(ChatMessage.from_dict(item))
        for item in data.get("sessions", []):
            repo.add_session(TherapySession.from_dict(item))

        logger.info(
            "repository_loaded",
            path=str(path),
            users=len(repo.users),
            journal=sum(len(v) for v in repo.journal.values()),
        )
        return repo
