"""Abstract repository interface (port) for Animal persistence."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from zoo.domain.entities import Animal, AnimalOrdering


class AnimalRepository(ABC):
    """Port for animal persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, animal_id: str) -> Animal | None:
        """Retrieve a single animal by its ID."""
        ...

    @abstractmethod
    async def save(self, animal: Animal) -> Animal:
        """Insert or overwrite an animal (last write wins)."""
        ...

    @abstractmethod
    async def delete(self, animal_id: str) -> bool:
        """Delete an animal. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def find_by_title(self, title: str) -> list[Animal]:
        """Retrieve animals whose title matches exactly, via the title index."""
        ...

    @abstractmethod
    async def find_by_room_id(
        self,
        room_id: str,
        limit: int,
        ordering: AnimalOrdering | None = None,
    ) -> list[Animal]:
        """Retrieve at most ``limit`` animals placed in ``room_id``.

        Uses the room index and stops once ``limit`` rows are read. When an
        ordering is given the store returns rows in that order, so the
        result is the first ``limit`` animals of the room under it.
        """
        ...

    @abstractmethod
    def stream_favorite_room_ids(self) -> AsyncIterator[set[str]]:
        """Lazily yield the favorite set of every animal (projection scan)."""
        ...
