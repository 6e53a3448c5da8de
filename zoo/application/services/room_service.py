"""Application service (use case) for Room CRUD operations."""

import logging

from zoo.application.interfaces import CacheBackend, CacheRegion, Clock, RoomRepository
from zoo.application.schemas import RoomCreate, RoomUpdate
from zoo.application.services.cached_reads import read_through
from zoo.domain.entities import Room
from zoo.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class RoomService:
    """Orchestrates room CRUD with a read-through single-entity cache.

    Renaming or deleting a room changes the title-keyed favorite counts,
    so both also drop the cached aggregate.
    """

    def __init__(self, repository: RoomRepository, cache: CacheBackend, clock: Clock):
        self._repository = repository
        self._cache = cache
        self._clock = clock

    async def get_room(self, room_id: str) -> Room | None:
        room = await read_through(
            self._cache,
            CacheRegion.ROOMS_BY_ID,
            room_id,
            lambda: self._repository.get_by_id(room_id),
        )
        if room is None:
            logger.debug("Room not found id=%s", room_id)
        return room

    async def create_room(self, data: RoomCreate) -> Room:
        room = Room(title=data.title, created_at=self._clock.now())
        saved = await self._repository.save(room)
        await self._cache.evict(CacheRegion.ROOMS_BY_ID, saved.id)
        logger.info("Created room id=%s", saved.id)
        return saved

    async def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        room = await self._repository.get_by_id(room_id)
        if room is None:
            raise EntityNotFoundError("Room", room_id)
        room.rename(data.title, self._clock.now())
        saved = await self._repository.save(room)
        await self._cache.evict(CacheRegion.ROOMS_BY_ID, room_id)
        await self._cache.evict_all(CacheRegion.FAVORITE_COUNTS)
        logger.info("Updated room id=%s", room_id)
        return saved

    async def delete_room(self, room_id: str) -> None:
        """Delete a room without touching animals that reference it."""
        await self._repository.delete(room_id)
        await self._cache.evict(CacheRegion.ROOMS_BY_ID, room_id)
        await self._cache.evict_all(CacheRegion.FAVORITE_COUNTS)
        logger.info("Deleted room id=%s", room_id)
