"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zoo.config import get_settings
from zoo.application.interfaces import CacheBackend, Clock, SystemClock
from zoo.application.services import (
    AnimalListingService,
    AnimalService,
    FavoriteAggregationService,
    RelationshipService,
    RoomService,
)
from zoo.infrastructure.cache import build_cache_backend
from zoo.infrastructure.database.session import get_db_session
from zoo.infrastructure.database.repositories import (
    SQLAlchemyAnimalRepository,
    SQLAlchemyRoomRepository,
)


@lru_cache
def get_cache_backend() -> CacheBackend:
    """Process-wide cache backend shared by every request."""
    return build_cache_backend(get_settings())


@lru_cache
def get_clock() -> Clock:
    return SystemClock()


async def get_animal_service(
    session: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache_backend),
    clock: Clock = Depends(get_clock),
) -> AsyncGenerator[AnimalService, None]:
    """Provides an AnimalService instance with its repository wired up."""
    yield AnimalService(SQLAlchemyAnimalRepository(session), cache, clock)


async def get_room_service(
    session: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache_backend),
    clock: Clock = Depends(get_clock),
) -> AsyncGenerator[RoomService, None]:
    """Provides a RoomService instance with its repository wired up."""
    yield RoomService(SQLAlchemyRoomRepository(session), cache, clock)


async def get_relationship_service(
    session: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache_backend),
    clock: Clock = Depends(get_clock),
) -> AsyncGenerator[RelationshipService, None]:
    """Provides the occupancy / favorites service."""
    yield RelationshipService(SQLAlchemyAnimalRepository(session), cache, clock)


async def get_animal_listing_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AnimalListingService, None]:
    """Provides the bounded in-room listing service."""
    yield AnimalListingService(SQLAlchemyAnimalRepository(session))


async def get_favorite_aggregation_service(
    session: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache_backend),
    clock: Clock = Depends(get_clock),
) -> AsyncGenerator[FavoriteAggregationService, None]:
    """Provides the favorite-count aggregator with a cached room lookup."""
    room_service = RoomService(SQLAlchemyRoomRepository(session), cache, clock)
    yield FavoriteAggregationService(
        animal_repository=SQLAlchemyAnimalRepository(session),
        room_service=room_service,
        cache=cache,
    )
