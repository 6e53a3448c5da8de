"""Domain entity — pure Python business object for a zoo room."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Room:
    """A room animals can be placed in or mark as a favorite.

    Rooms carry no back-reference to occupants; both relationships are
    derived from Animal records.
    """

    title: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def rename(self, title: str, at: datetime) -> None:
        """Change the display title and stamp the update time."""
        self.title = title
        self.updated_at = at
