"""Application service (use case) for Animal CRUD operations."""

import logging

from zoo.application.interfaces import AnimalRepository, CacheBackend, CacheRegion, Clock
from zoo.application.schemas import AnimalCreate, AnimalUpdate
from zoo.application.services.cached_reads import read_through
from zoo.domain.entities import Animal
from zoo.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class AnimalService:
    """Orchestrates animal CRUD with a read-through single-entity cache."""

    def __init__(self, repository: AnimalRepository, cache: CacheBackend, clock: Clock):
        self._repository = repository
        self._cache = cache
        self._clock = clock

    async def get_animal(self, animal_id: str) -> Animal | None:
        animal = await read_through(
            self._cache,
            CacheRegion.ANIMALS_BY_ID,
            animal_id,
            lambda: self._repository.get_by_id(animal_id),
        )
        if animal is None:
            logger.warning("Animal not found id=%s", animal_id)
        return animal

    async def find_by_title(self, title: str) -> list[Animal]:
        return await self._repository.find_by_title(title)

    async def create_animal(self, data: AnimalCreate) -> Animal:
        animal = Animal(title=data.title, created_at=self._clock.now())
        saved = await self._repository.save(animal)
        await self._cache.evict(CacheRegion.ANIMALS_BY_ID, saved.id)
        logger.info("Created animal id=%s", saved.id)
        return saved

    async def update_animal(self, animal_id: str, data: AnimalUpdate) -> Animal:
        animal = await self._repository.get_by_id(animal_id)
        if animal is None:
            raise EntityNotFoundError("Animal", animal_id)
        animal.rename(data.title, self._clock.now())
        saved = await self._repository.save(animal)
        await self._cache.evict(CacheRegion.ANIMALS_BY_ID, animal_id)
        logger.info("Updated animal id=%s", animal_id)
        return saved

    async def delete_animal(self, animal_id: str) -> None:
        """Delete an animal; succeeds silently when it does not exist."""
        await self._repository.delete(animal_id)
        await self._cache.evict(CacheRegion.ANIMALS_BY_ID, animal_id)
        logger.info("Deleted animal id=%s", animal_id)
