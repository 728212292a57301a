from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict


NO_SUBJECT = "No Subject"


class Level(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: object) -> "Level":
        if isinstance(value, cls):
            return value
        # Anything the model answers outside the three levels counts as low.
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return cls.LOW


class PriorityLabel(str, Enum):
    URGENT = "Urgent"
    IMPORTANT = "Important"
    LATER = "Later"


@dataclass(frozen=True)
class RawEmail:
    subject: str
    body: str


# Per-field defaults when a single line of the model answer is missing.
FIELD_DEFAULTS: Dict[str, str] = {
    "event_type": "Email",
    "deadline_text": "none",
    "urgency": Level.LOW.value,
    "importance": Level.LOW.value,
    "score": "none",
    "registration_link": "none",
    "summary": "No summary.",
}

FALLBACK_SUMMARY = "Could not extract information."


@dataclass(frozen=True)
class ExtractedFields:
    event_type: str
    subject: str
    deadline_text: str
    urgency: Level
    importance: Level
    score: str
    registration_link: str
    summary: str

    @classmethod
    def fallback(cls, subject: str) -> "ExtractedFields":
        """All-defaults record used when extraction fails as a whole."""
        return cls(
            event_type=FIELD_DEFAULTS["event_type"],
            subject=subject.strip() or NO_SUBJECT,
            deadline_text=FIELD_DEFAULTS["deadline_text"],
            urgency=Level.LOW,
            importance=Level.LOW,
            score=FIELD_DEFAULTS["score"],
            registration_link=FIELD_DEFAULTS["registration_link"],
            summary=FALLBACK_SUMMARY,
        )


@dataclass(frozen=True)
class Task:
    event_type: str
    subject: str
    deadline: datetime
    urgency: Level
    importance: Level
    score: str
    priority: PriorityLabel
    registration_link: str
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape handed to the serving layer."""
        return {
            "eventType": self.event_type,
            "subject": self.subject,
            "deadline": self.deadline.isoformat(),
            "urgency": self.urgency.value,
            "importance": self.importance.value,
            "score": self.score,
            "priority": self.priority.value,
            "registrationLink": self.registration_link,
            "summary": self.summary,
        }
