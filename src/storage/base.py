"""Storage collaborator contract."""

from .models import ChatMessage, ContentRecommendation, JournalEntry, TherapySession, UserProfile


class SourceUnavailable(Exception):
    """A storage call failed or is not supported by this deployment."""


class SourceRepository:
    """Read access to a user's source records, plus recommendation writes.

    Every member is optional. The defaults report "nothing there" so a
    deployment that only has journals still satisfies the contract.
    Implementations may raise `SourceUnavailable` (or anything else) from a
    fetch; callers degrade that to an empty result.
    """

    async def get_journal_entries_by_user(self, user_id: str) -> list[JournalEntry]:
        return []

    async def get_chat_messages_by_user(self, user_id: str, limit: int = 50) -> list[ChatMessage]:
        return []

    async def get_sessions_by_user(self, user_id: str) -> list[TherapySession]:
        return []

    async def get_user(self, user_id: str) -> UserProfile | None:
        return None

    async def create_content_recommendation(
        self, record: ContentRecommendation
    ) -> ContentRecommendation:
        raise SourceUnavailable("content recommendations are not persisted by this repository")
