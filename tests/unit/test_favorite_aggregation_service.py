"""Unit tests for the FavoriteAggregationService."""

import pytest

from zoo.application.interfaces import CacheRegion, RegionPolicy
from zoo.application.schemas import RoomUpdate
from zoo.application.services import (
    FavoriteAggregationService,
    RelationshipService,
    RoomService,
)
from zoo.domain.entities import Animal, Room
from zoo.infrastructure.cache import InMemoryCacheBackend
from tests.fakes import FakeAnimalRepository, FakeRoomRepository, FixedClock


@pytest.fixture
def animals() -> FakeAnimalRepository:
    return FakeAnimalRepository()


@pytest.fixture
def rooms() -> FakeRoomRepository:
    return FakeRoomRepository()


@pytest.fixture
def cache() -> InMemoryCacheBackend:
    policy = RegionPolicy(max_entries=100, ttl_seconds=600)
    return InMemoryCacheBackend({region: policy for region in CacheRegion})


@pytest.fixture
def room_service(rooms, cache) -> RoomService:
    return RoomService(rooms, cache, FixedClock())


@pytest.fixture
def relationships(animals, cache) -> RelationshipService:
    return RelationshipService(animals, cache, FixedClock())


@pytest.fixture
def service(animals, room_service, cache) -> FavoriteAggregationService:
    return FavoriteAggregationService(animals, room_service, cache)


async def _room(rooms: FakeRoomRepository, room_id: str, title: str) -> Room:
    room = Room(title=title, id=room_id)
    await rooms.save(room)
    return room


async def _animal(animals: FakeAnimalRepository, *favorites: str) -> Animal:
    animal = Animal(title="Animal", favorite_room_ids=set(favorites))
    await animals.save(animal)
    return animal


@pytest.mark.asyncio
async def test_counts_by_title(service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _room(rooms, "r2", "Blue")
    await _animal(animals, "r1", "r2")
    await _animal(animals, "r2")

    assert await service.favorite_counts_by_title() == {"Green": 1, "Blue": 2}


@pytest.mark.asyncio
async def test_no_favorites_gives_empty_map(service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _animal(animals)

    assert await service.favorite_counts_by_title() == {}


@pytest.mark.asyncio
async def test_counts_by_id(service, animals):
    await _animal(animals, "r1", "r2")
    await _animal(animals, "r2")

    assert await service.favorite_counts_by_id() == {"r1": 1, "r2": 2}


@pytest.mark.asyncio
async def test_counts_by_id_restricted_to_given_rooms(service, animals):
    await _animal(animals, "r1", "r2")
    await _animal(animals, "r2", "r3")

    assert await service.favorite_counts_by_id(["r2", "r4"]) == {"r2": 2}


@pytest.mark.asyncio
async def test_deleted_room_is_omitted(service, room_service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _room(rooms, "r2", "Blue")
    await _animal(animals, "r1", "r2")
    await _animal(animals, "r2")
    assert await service.favorite_counts_by_title() == {"Green": 1, "Blue": 2}

    await room_service.delete_room("r1")

    assert await service.favorite_counts_by_title() == {"Blue": 2}


@pytest.mark.asyncio
async def test_blank_titles_are_skipped(service, animals, rooms):
    await _room(rooms, "r1", "   ")
    await _room(rooms, "r2", "Blue")
    await _animal(animals, "r1", "r2")

    assert await service.favorite_counts_by_title() == {"Blue": 1}


@pytest.mark.asyncio
async def test_rooms_sharing_a_title_are_summed(service, animals, rooms):
    await _room(rooms, "r1", "Aviary")
    await _room(rooms, "r2", "Aviary")
    await _animal(animals, "r1")
    await _animal(animals, "r1", "r2")

    assert await service.favorite_counts_by_title() == {"Aviary": 3}


@pytest.mark.asyncio
async def test_result_is_served_from_cache(service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _animal(animals, "r1")
    await service.favorite_counts_by_title()
    room_reads = rooms.gets

    # Written behind the service's back: the cached aggregate stays in place.
    await _animal(animals, "r1")

    assert await service.favorite_counts_by_title() == {"Green": 1}
    assert rooms.gets == room_reads


@pytest.mark.asyncio
async def test_assign_invalidates_cached_counts(service, relationships, animals, rooms):
    await _room(rooms, "r1", "Green")
    first = await _animal(animals, "r1")
    second = await _animal(animals)
    assert await service.favorite_counts_by_title() == {"Green": 1}

    await relationships.assign_favorite(second.id, "r1")
    assert await service.favorite_counts_by_title() == {"Green": 2}

    await relationships.unassign_favorite(first.id, "r1")
    assert await service.favorite_counts_by_title() == {"Green": 1}


@pytest.mark.asyncio
async def test_room_rename_invalidates_cached_counts(service, room_service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _animal(animals, "r1")
    assert await service.favorite_counts_by_title() == {"Green": 1}

    await room_service.update_room("r1", RoomUpdate(title="Emerald"))

    assert await service.favorite_counts_by_title() == {"Emerald": 1}


@pytest.mark.asyncio
async def test_mutating_returned_map_does_not_touch_cache(service, animals, rooms):
    await _room(rooms, "r1", "Green")
    await _animal(animals, "r1")

    counts = await service.favorite_counts_by_title()
    counts["Green"] = 99

    assert await service.favorite_counts_by_title() == {"Green": 1}


class ScanWithConcurrentWrite(FakeAnimalRepository):
    """Runs ``during_scan`` after snapshotting favorites, before yielding them."""

    def __init__(self):
        super().__init__()
        self.during_scan = None

    async def stream_favorite_room_ids(self):
        snapshot = [set(a.favorite_room_ids) for a in self._animals.values()]
        during_scan, self.during_scan = self.during_scan, None
        if during_scan is not None:
            await during_scan()
        for favorites in snapshot:
            yield favorites


@pytest.mark.asyncio
async def test_count_racing_an_assign_is_not_cached(room_service, rooms, cache):
    animals = ScanWithConcurrentWrite()
    relationships = RelationshipService(animals, cache, FixedClock())
    service = FavoriteAggregationService(animals, room_service, cache)
    await _room(rooms, "r1", "Green")
    await _animal(animals, "r1")
    second = await _animal(animals)
    animals.during_scan = lambda: relationships.assign_favorite(second.id, "r1")

    in_flight = await service.favorite_counts_by_title()

    assert in_flight == {"Green": 1}
    assert await service.favorite_counts_by_title() == {"Green": 2}
    assert await service.favorite_counts_by_title() == {"Green": 2}
