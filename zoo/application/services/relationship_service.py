"""Application service for animal occupancy and favorite-room changes.

Every operation is a read-modify-write of a single Animal record with no
cross-entity transaction and no concurrency token: concurrent writers to the
same animal race and the store keeps the last write. A missing animal is a
normal outcome, reported as ``None`` with no write performed.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime

from zoo.application.interfaces import AnimalRepository, CacheBackend, CacheRegion, Clock
from zoo.application.services.cached_reads import read_through
from zoo.domain.entities import Animal

logger = logging.getLogger(__name__)


class RelationshipService:
    """Places, moves and removes animals; assigns and unassigns favorites."""

    def __init__(self, repository: AnimalRepository, cache: CacheBackend, clock: Clock):
        self._repository = repository
        self._cache = cache
        self._clock = clock

    async def place(
        self, animal_id: str, room_id: str, located: date | None = None
    ) -> Animal | None:
        """Put the animal in ``room_id``; ``located`` defaults to today."""
        day = located if located is not None else self._clock.today()
        return await self._apply(
            animal_id,
            lambda animal, at: animal.place(room_id, day, at),
            "place",
        )

    async def move(
        self, animal_id: str, new_room_id: str, located: date | None = None
    ) -> Animal | None:
        """Same as :meth:`place`; the animal need not be in a room already."""
        return await self.place(animal_id, new_room_id, located)

    async def remove(self, animal_id: str) -> Animal | None:
        return await self._apply(animal_id, lambda animal, at: animal.unplace(at), "remove")

    async def assign_favorite(self, animal_id: str, room_id: str) -> Animal | None:
        return await self._apply(
            animal_id,
            lambda animal, at: animal.add_favorite(room_id, at),
            "assign_favorite",
            favorites_changed=True,
        )

    async def unassign_favorite(self, animal_id: str, room_id: str) -> Animal | None:
        return await self._apply(
            animal_id,
            lambda animal, at: animal.remove_favorite(room_id, at),
            "unassign_favorite",
            favorites_changed=True,
        )

    async def _apply(
        self,
        animal_id: str,
        mutate: Callable[[Animal, datetime], None],
        operation: str,
        *,
        favorites_changed: bool = False,
    ) -> Animal | None:
        animal = await read_through(
            self._cache,
            CacheRegion.ANIMALS_BY_ID,
            animal_id,
            lambda: self._repository.get_by_id(animal_id),
        )
        if animal is None:
            logger.warning("%s: animal not found id=%s", operation, animal_id)
            return None

        mutate(animal, self._clock.now())
        saved = await self._repository.save(animal)

        await self._cache.evict(CacheRegion.ANIMALS_BY_ID, animal_id)
        if favorites_changed:
            # The aggregate spans every animal; no single key to evict.
            await self._cache.evict_all(CacheRegion.FAVORITE_COUNTS)

        logger.info(
            "%s: animal id=%s room_id=%s favorites=%d",
            operation,
            animal_id,
            saved.room_id,
            len(saved.favorite_room_ids),
        )
        return saved
