"""Bounded, sorted, paginated listing of the animals placed in a room."""

import logging

from zoo.application.interfaces import AnimalRepository
from zoo.domain.entities import Animal, AnimalOrdering

logger = logging.getLogger(__name__)

# Largest row count the store accepts for a single bounded query.
MAX_FETCH_LIMIT = 2**31 - 1


class AnimalListingService:
    """Answers "animals in room R, sorted by F, order O, page P of size S".

    Only ``(page + 1) * size`` rows are read from the room index, then sorted
    and sliced in memory. Callers re-invoke with the next page number; there
    is no continuation token.
    """

    def __init__(self, repository: AnimalRepository):
        self._repository = repository

    async def list_in_room(
        self,
        room_id: str,
        sort_by: str | None = "title",
        order: str | None = "asc",
        page: int = 0,
        size: int = 10,
    ) -> list[Animal]:
        if size <= 0 or page < 0:
            return []

        required = min((page + 1) * size, MAX_FETCH_LIMIT)
        ordering = AnimalOrdering.parse(sort_by, order)

        batch = await self._repository.find_by_room_id(room_id, required, ordering)
        ordered = ordering.sort(batch)

        start = min(page * size, len(ordered))
        end = min(start + size, len(ordered))
        logger.debug(
            "list_in_room room_id=%s ordering=%s/%s page=%d size=%d fetched=%d",
            room_id,
            ordering.field.value,
            ordering.order.value,
            page,
            size,
            len(batch),
        )
        if start >= end:
            return []
        return ordered[start:end]
