"""
Mentor notes.

Lessons from mentors, kept per installation as a JSON list
in the local store.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional

from ficus.core.storage import LocalStore
from ficus.core.utils import now_millis
from ficus.license.keys import normalize_system_id

logger = logging.getLogger(__name__)


def mentors_key(system_id: str) -> str:
    return f"ficus_mentors_{normalize_system_id(system_id)}"


@dataclass
class MentorNote:
    """A lesson learned from a mentor."""
    id: str
    name: str
    lesson: str
    timestamp: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "lesson": self.lesson,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MentorNote":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            lesson=str(data.get("lesson", "")),
            timestamp=int(data.get("timestamp") or 0),
        )


class MentorBook:
    """Manage mentor notes for one installation."""

    def __init__(self, store: LocalStore, system_id: str):
        self.store = store
        self.key = mentors_key(system_id)
        self.mentors: List[MentorNote] = []
        self.load()

    def load(self) -> None:
        """
        Load notes from the store.

        Malformed data is skipped and leaves the list empty or partial.
        """
        data = self.store.get_json(self.key, [])
        if not isinstance(data, list):
            logger.warning(f"Mentor notes under {self.key} are not a list, ignoring")
            data = []

        self.mentors = []
        for item in data:
            try:
                self.mentors.append(MentorNote.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed mentor note: {e}")

    def save(self) -> None:
        """Persist notes to the store."""
        self.store.set_json(self.key, [m.to_dict() for m in self.mentors])

    def list(self) -> List[MentorNote]:
        """Notes, newest first."""
        return list(self.mentors)

    def add(self, name: str, lesson: str, now_ms: Optional[int] = None) -> Optional[MentorNote]:
        """
        Add a note to the top of the list.

        Both name and lesson are required; returns None otherwise.
        """
        if not name.strip() or not lesson.strip():
            return None

        note = MentorNote(
            id=uuid.uuid4().hex[:9],
            name=name.strip(),
            lesson=lesson.strip(),
            timestamp=now_millis() if now_ms is None else now_ms,
        )
        self.mentors.insert(0, note)
        self.save()

        logger.info(f"Added mentor note from {note.name}")
        return note

    def delete(self, mentor_id: str) -> bool:
        """Remove a note. Returns False if the id was unknown."""
        remaining = [m for m in self.mentors if m.id != mentor_id]
        if len(remaining) == len(self.mentors):
            return False

        self.mentors = remaining
        self.save()
        return True
