"""Domain entity for an animal, its occupancy and its favorite rooms."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import uuid4


@dataclass
class Animal:
    """Core domain entity representing an animal in the zoo.

    ``located`` is non-null exactly when ``room_id`` is non-null; the
    relationship operations keep the two in step. ``favorite_room_ids`` may
    reference rooms that have since been deleted.
    """

    title: str
    id: str = field(default_factory=lambda: str(uuid4()))
    room_id: str | None = None
    located: date | None = None
    favorite_room_ids: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def rename(self, title: str, at: datetime) -> None:
        """Change the display title and stamp the update time."""
        self.title = title
        self.updated_at = at

    def place(self, room_id: str, located: date, at: datetime) -> None:
        """Put the animal in ``room_id`` as of ``located``."""
        self.room_id = room_id
        self.located = located
        self.updated_at = at

    def unplace(self, at: datetime) -> None:
        """Take the animal out of any room."""
        self.room_id = None
        self.located = None
        self.updated_at = at

    def add_favorite(self, room_id: str, at: datetime) -> None:
        self.favorite_room_ids.add(room_id)
        self.updated_at = at

    def remove_favorite(self, room_id: str, at: datetime) -> None:
        self.favorite_room_ids.discard(room_id)
        self.updated_at = at
