"""Favorite-room counts across the whole animal population."""

import logging
from collections import Counter
from collections.abc import Collection

from zoo.application.interfaces import MISS, AnimalRepository, CacheBackend, CacheRegion
from zoo.application.services.room_service import RoomService

logger = logging.getLogger(__name__)

_BY_TITLE_KEY = "by_title"


class FavoriteAggregationService:
    """Counts how many animals favor each room.

    Favorites live on the animal, so inverting them needs a scan of every
    animal's favorite set. The title-keyed result is cached as a single value
    with a short TTL; any favorite mutation evicts the whole region.
    """

    def __init__(
        self,
        animal_repository: AnimalRepository,
        room_service: RoomService,
        cache: CacheBackend,
    ):
        self._animals = animal_repository
        self._rooms = room_service
        self._cache = cache

    async def favorite_counts_by_id(
        self, room_ids: Collection[str] | None = None
    ) -> dict[str, int]:
        """Count favoriting animals per room id.

        When ``room_ids`` is given, only those rooms are counted.
        """
        universe = set(room_ids) if room_ids is not None else None
        counts: Counter[str] = Counter()
        scanned = 0
        async for favorites in self._animals.stream_favorite_room_ids():
            scanned += 1
            if universe is None:
                counts.update(favorites)
            else:
                counts.update(rid for rid in favorites if rid in universe)
        logger.debug("Scanned %d favorite sets, %d rooms favored", scanned, len(counts))
        return dict(counts)

    async def favorite_counts_by_title(self) -> dict[str, int]:
        """Count favoriting animals per room title, served from cache when fresh.

        Rooms that no longer exist or have a blank title are skipped; rooms
        sharing a title have their counts summed.
        """
        generation = await self._cache.generation(CacheRegion.FAVORITE_COUNTS)
        cached = await self._cache.get(CacheRegion.FAVORITE_COUNTS, _BY_TITLE_KEY)
        if cached is not MISS:
            return cached

        by_title: dict[str, int] = {}
        for room_id, count in (await self.favorite_counts_by_id()).items():
            if count <= 0:
                continue
            room = await self._rooms.get_room(room_id)
            if room is None or not room.title or not room.title.strip():
                logger.debug("Skipping favorites for unresolvable room id=%s", room_id)
                continue
            by_title[room.title] = by_title.get(room.title, 0) + count

        # Not cached if a favorite or room changed while counting.
        await self._cache.put(
            CacheRegion.FAVORITE_COUNTS, _BY_TITLE_KEY, by_title, generation=generation
        )
        return by_title
