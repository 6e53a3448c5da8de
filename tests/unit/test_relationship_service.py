"""Unit tests for the RelationshipService."""

from datetime import date, datetime, timezone

import pytest

from zoo.application.interfaces import MISS, CacheRegion, RegionPolicy
from zoo.application.services import AnimalService, RelationshipService
from zoo.domain.entities import Animal
from zoo.infrastructure.cache import InMemoryCacheBackend
from tests.fakes import FIXED_NOW, FakeAnimalRepository, FixedClock


@pytest.fixture
def repository() -> FakeAnimalRepository:
    return FakeAnimalRepository()


@pytest.fixture
def cache() -> InMemoryCacheBackend:
    policy = RegionPolicy(max_entries=100, ttl_seconds=600)
    return InMemoryCacheBackend({region: policy for region in CacheRegion})


@pytest.fixture
def service(repository, cache) -> RelationshipService:
    return RelationshipService(repository, cache, FixedClock())


async def _stored(repository: FakeAnimalRepository, title: str = "Tiger") -> Animal:
    animal = Animal(title=title, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    await repository.save(animal)
    repository.saves = 0
    return animal


@pytest.mark.asyncio
async def test_place_with_explicit_date(service, repository):
    animal = await _stored(repository)

    placed = await service.place(animal.id, "r1", date(2024, 1, 5))

    assert placed.room_id == "r1"
    assert placed.located == date(2024, 1, 5)
    assert placed.updated_at == FIXED_NOW
    stored = await repository.get_by_id(animal.id)
    assert stored.room_id == "r1"
    assert stored.located == date(2024, 1, 5)


@pytest.mark.asyncio
async def test_place_defaults_located_to_today(service, repository):
    animal = await _stored(repository)

    placed = await service.place(animal.id, "r1")

    assert placed.located == FIXED_NOW.date()


@pytest.mark.asyncio
async def test_move_replaces_room_and_date(service, repository):
    animal = await _stored(repository)
    await service.place(animal.id, "r1", date(2024, 1, 5))

    moved = await service.move(animal.id, "r2", date(2024, 2, 1))

    assert moved.room_id == "r2"
    assert moved.located == date(2024, 2, 1)


@pytest.mark.asyncio
async def test_move_unplaced_animal_behaves_like_place(service, repository):
    animal = await _stored(repository)

    moved = await service.move(animal.id, "r2")

    assert moved.room_id == "r2"
    assert moved.located == FIXED_NOW.date()


@pytest.mark.asyncio
async def test_remove_clears_room_and_date(service, repository):
    animal = await _stored(repository)
    await service.place(animal.id, "r1", date(2024, 1, 5))

    removed = await service.remove(animal.id)

    assert removed.room_id is None
    assert removed.located is None
    stored = await repository.get_by_id(animal.id)
    assert stored.room_id is None
    assert stored.located is None


@pytest.mark.asyncio
async def test_remove_unplaced_animal_still_writes(service, repository):
    animal = await _stored(repository)

    removed = await service.remove(animal.id)

    assert removed.room_id is None
    assert removed.updated_at == FIXED_NOW
    assert repository.saves == 1


@pytest.mark.asyncio
async def test_assign_favorite_is_idempotent(service, repository):
    animal = await _stored(repository)

    await service.assign_favorite(animal.id, "r1")
    again = await service.assign_favorite(animal.id, "r1")

    assert again.favorite_room_ids == {"r1"}


@pytest.mark.asyncio
async def test_unassign_absent_favorite_keeps_set(service, repository):
    animal = await _stored(repository)
    await service.assign_favorite(animal.id, "r1")

    result = await service.unassign_favorite(animal.id, "r9")

    assert result.favorite_room_ids == {"r1"}


@pytest.mark.asyncio
async def test_unassign_removes_favorite(service, repository):
    animal = await _stored(repository)
    await service.assign_favorite(animal.id, "r1")
    await service.assign_favorite(animal.id, "r2")

    result = await service.unassign_favorite(animal.id, "r1")

    assert result.favorite_room_ids == {"r2"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation, args",
    [
        ("place", ("r1",)),
        ("move", ("r1",)),
        ("remove", ()),
        ("assign_favorite", ("r1",)),
        ("unassign_favorite", ("r1",)),
    ],
)
async def test_missing_animal_returns_none_without_write(service, repository, operation, args):
    result = await getattr(service, operation)("does-not-exist", *args)

    assert result is None
    assert repository.saves == 0


@pytest.mark.asyncio
async def test_mutation_evicts_cached_animal(service, repository, cache):
    animal = await _stored(repository)
    await cache.put(CacheRegion.ANIMALS_BY_ID, animal.id, animal)

    await service.place(animal.id, "r1", date(2024, 1, 5))

    assert await cache.get(CacheRegion.ANIMALS_BY_ID, animal.id) is MISS


@pytest.mark.asyncio
async def test_favorite_change_clears_aggregate_region(service, repository, cache):
    animal = await _stored(repository)
    await cache.put(CacheRegion.FAVORITE_COUNTS, "by_title", {"Green": 1})

    await service.assign_favorite(animal.id, "r1")

    assert cache.size(CacheRegion.FAVORITE_COUNTS) == 0


@pytest.mark.asyncio
async def test_occupancy_change_keeps_aggregate_region(service, repository, cache):
    animal = await _stored(repository)
    await cache.put(CacheRegion.FAVORITE_COUNTS, "by_title", {"Green": 1})

    await service.place(animal.id, "r1")

    assert cache.size(CacheRegion.FAVORITE_COUNTS) == 1


class LoadWithConcurrentWrite(FakeAnimalRepository):
    """Runs ``during_get`` after reading the record, before returning it."""

    def __init__(self):
        super().__init__()
        self.during_get = None

    async def get_by_id(self, animal_id: str) -> Animal | None:
        animal = await super().get_by_id(animal_id)
        during_get, self.during_get = self.during_get, None
        if during_get is not None:
            await during_get()
        return animal


@pytest.mark.asyncio
async def test_read_racing_a_placement_does_not_undo_it(cache):
    repository = LoadWithConcurrentWrite()
    service = RelationshipService(repository, cache, FixedClock())
    reader = AnimalService(repository, cache, FixedClock())
    animal = await _stored(repository)
    repository.during_get = lambda: service.place(animal.id, "r1", date(2024, 1, 5))

    stale = await reader.get_animal(animal.id)
    assert stale.room_id is None

    updated = await service.assign_favorite(animal.id, "r2")

    assert updated.room_id == "r1"
    assert updated.located == date(2024, 1, 5)
    assert updated.favorite_room_ids == {"r2"}
