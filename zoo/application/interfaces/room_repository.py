"""Abstract repository interface (port) for Room persistence."""

from abc import ABC, abstractmethod

from zoo.domain.entities import Room


class RoomRepository(ABC):
    """Port for room persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, room_id: str) -> Room | None:
        """Retrieve a single room by its ID."""
        ...

    @abstractmethod
    async def save(self, room: Room) -> Room:
        """Insert or overwrite a room (last write wins)."""
        ...

    @abstractmethod
    async def delete(self, room_id: str) -> bool:
        """Delete a room. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def find_by_title(self, title: str) -> list[Room]:
        """Retrieve rooms whose title matches exactly."""
        ...
