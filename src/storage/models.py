"""Source records read by the insight engines.

These are owned by the storage collaborator; the engines never mutate them.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime


def _parse_dt(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class JournalEntry:
    id: str
    user_id: str
    content: str
    date: datetime
    title: str = ""
    mood: str | None = None
    category: str | None = None
    summary: str | None = None
    tags: list[str] = field(default_factory=list)
    emotional_tone: str | None = None
    dominant_emotions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        data = dict(data)
        data["date"] = _parse_dt(data["date"])
        return cls(**data)


@dataclass
class ChatMessage:
    id: str
    user_id: str
    content: str
    role: str  # "user" | "assistant"
    timestamp: datetime
    emotional_tone: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        data = dict(data)
        data["timestamp"] = _parse_dt(data["timestamp"])
        return cls(**data)


@dataclass
class TherapySession:
    id: str
    user_id: str
    scheduled_for: datetime
    status: str = "scheduled"  # scheduled | completed | cancelled
    duration: int = 50
    notes: str = ""
    therapist_name: str = ""
    type: str = "individual"

    @classmethod
    def from_dict(cls, data: dict) -> "TherapySession":
        data = dict(data)
        data["scheduled_for"] = _parse_dt(data["scheduled_for"])
        return cls(**data)


@dataclass
class UserProfile:
    id: str
    first_name: str = ""
    date_of_birth: date | None = None
    occupation: str | None = None
    fears: list[str] = field(default_factory=list)
    anxieties: list[str] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)

    def age(self, today: date | None = None) -> int | None:
        if not self.date_of_birth:
            return None
        today = today or date.today()
        years = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years

    def is_empty(self) -> bool:
        return not (self.occupation or self.fears or self.anxieties or self.goals)

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        data = dict(data)
        dob = data.get("date_of_birth")
        if isinstance(dob, str):
            data["date_of_birth"] = date.fromisoformat(dob)
        return cls(**data)


@dataclass
class ContentRecommendation:
    user_id: str
    title: str
    description: str
    type: str  # article | exercise | video
    category: str  # emotional | behavioral | cognitive
    content: str
    tags: list[str] = field(default_factory=list)
    priority: int = 5
    related_journal_ids: list[str] = field(default_factory=list)
    ai_generated: bool = True
    id: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)
