"""Unit tests for the AnimalService."""

import pytest

from zoo.application.interfaces import MISS, CacheRegion, RegionPolicy
from zoo.application.schemas import AnimalCreate, AnimalUpdate
from zoo.application.services import AnimalService
from zoo.domain.exceptions import EntityNotFoundError, StoreUnavailableError
from zoo.infrastructure.cache import InMemoryCacheBackend
from tests.fakes import FIXED_NOW, FakeAnimalRepository, FixedClock, UnavailableAnimalRepository


@pytest.fixture
def repository() -> FakeAnimalRepository:
    return FakeAnimalRepository()


@pytest.fixture
def cache() -> InMemoryCacheBackend:
    policy = RegionPolicy(max_entries=100, ttl_seconds=600)
    return InMemoryCacheBackend({region: policy for region in CacheRegion})


@pytest.fixture
def service(repository, cache) -> AnimalService:
    return AnimalService(repository, cache, FixedClock())


@pytest.mark.asyncio
async def test_create_animal(service: AnimalService):
    animal = await service.create_animal(AnimalCreate(title="Tiger"))

    assert animal.id
    assert animal.title == "Tiger"
    assert animal.room_id is None
    assert animal.located is None
    assert animal.favorite_room_ids == set()
    assert animal.created_at == FIXED_NOW
    assert animal.updated_at is None


@pytest.mark.asyncio
async def test_get_animal_not_found(service: AnimalService, cache):
    assert await service.get_animal("missing") is None
    assert await cache.get(CacheRegion.ANIMALS_BY_ID, "missing") is MISS


@pytest.mark.asyncio
async def test_get_animal_reads_through_cache(service: AnimalService, repository):
    created = await service.create_animal(AnimalCreate(title="Tiger"))

    await service.get_animal(created.id)
    await service.get_animal(created.id)

    assert repository.gets == 1


@pytest.mark.asyncio
async def test_update_animal(service: AnimalService):
    created = await service.create_animal(AnimalCreate(title="Tiger"))
    await service.get_animal(created.id)

    updated = await service.update_animal(created.id, AnimalUpdate(title="Bengal Tiger"))

    assert updated.title == "Bengal Tiger"
    assert updated.updated_at == FIXED_NOW
    assert (await service.get_animal(created.id)).title == "Bengal Tiger"


@pytest.mark.asyncio
async def test_update_animal_not_found(service: AnimalService):
    with pytest.raises(EntityNotFoundError):
        await service.update_animal("missing", AnimalUpdate(title="X"))


@pytest.mark.asyncio
async def test_delete_animal(service: AnimalService):
    created = await service.create_animal(AnimalCreate(title="Tiger"))
    await service.get_animal(created.id)

    await service.delete_animal(created.id)

    assert await service.get_animal(created.id) is None


@pytest.mark.asyncio
async def test_delete_missing_animal_is_silent(service: AnimalService):
    await service.delete_animal("missing")


@pytest.mark.asyncio
async def test_find_by_title(service: AnimalService):
    await service.create_animal(AnimalCreate(title="Tiger"))
    await service.create_animal(AnimalCreate(title="Tiger"))
    await service.create_animal(AnimalCreate(title="tiger"))

    assert len(await service.find_by_title("Tiger")) == 2


@pytest.mark.asyncio
async def test_store_failure_propagates(cache):
    service = AnimalService(UnavailableAnimalRepository(), cache, FixedClock())

    with pytest.raises(StoreUnavailableError):
        await service.get_animal("any")
