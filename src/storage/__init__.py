"""Storage collaborator interface and record types."""

from .base import SourceRepository, SourceUnavailable
from .memory import InMemoryRepository
from .models import ChatMessage, ContentRecommendation, JournalEntry, TherapySession, UserProfile

__all__ = [
    "SourceRepository",
    "SourceUnavailable",
    "InMemoryRepository",
    "JournalEntry",
    "ChatMessage",
    "TherapySession",
    "UserProfile",
    "ContentRecommendation",
]
