"""Concrete Animal repository backed by SQLAlchemy."""

from collections.abc import AsyncIterator

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from zoo.application.interfaces import AnimalRepository
from zoo.domain.entities import Animal, AnimalOrdering, SortField, fold_title
from zoo.infrastructure.database.base import as_utc
from zoo.infrastructure.database.models import AnimalModel
from zoo.infrastructure.database.repositories.store_errors import store_errors

_SCAN_BATCH_SIZE = 500

# Dialects whose default collation is not code-point order.
_BINARY_COLLATIONS = {"postgresql": "C"}


def _order_by(ordering: AnimalOrdering, collation: str | None = None) -> list[ColumnElement]:
    """Mirror ``AnimalOrdering`` in SQL: nulls last ascending, all reversed descending.

    Text keys are compared by code point, as Python compares ``str``; pass
    ``collation`` where the database default is locale-aware.
    """
    primary: ColumnElement = (
        AnimalModel.title_key if ordering.field is SortField.TITLE else AnimalModel.located
    )
    tie_break: ColumnElement = func.lower(AnimalModel.id)
    if collation is not None:
        tie_break = tie_break.collate(collation)
        if ordering.field is SortField.TITLE:
            primary = primary.collate(collation)
    if ordering.descending:
        return [primary.desc().nulls_first(), tie_break.desc()]
    return [primary.asc().nulls_last(), tie_break.asc()]


class SQLAlchemyAnimalRepository(AnimalRepository):
    """Implements the AnimalRepository port using SQLAlchemy async sessions.

    Writes commit immediately, before the calling service evicts the cache.
    """

    def __init__(self, session: AsyncSession, scan_batch_size: int = _SCAN_BATCH_SIZE):
        self._session = session
        self._scan_batch_size = scan_batch_size

    def _collation(self) -> str | None:
        bind = self._session.bind
        if bind is None:
            return None
        return _BINARY_COLLATIONS.get(bind.dialect.name)

    def _to_entity(self, model: AnimalModel) -> Animal:
        """Map ORM model → domain entity."""
        return Animal(
            id=model.id,
            title=model.title,
            room_id=model.room_id,
            located=model.located,
            favorite_room_ids=set(model.favorite_room_ids or ()),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Animal) -> AnimalModel:
        """Map domain entity → ORM model."""
        return AnimalModel(
            id=entity.id,
            title=entity.title,
            title_key=fold_title(entity.title),
            room_id=entity.room_id,
            located=entity.located,
            favorite_room_ids=sorted(entity.favorite_room_ids),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, animal_id: str) -> Animal | None:
        with store_errors("animals.get"):
            result = await self._session.get(AnimalModel, animal_id)
        return self._to_entity(result) if result else None

    async def save(self, animal: Animal) -> Animal:
        with store_errors("animals.save"):
            await self._session.merge(self._to_model(animal))
            await self._session.commit()
        return animal

    async def delete(self, animal_id: str) -> bool:
        with store_errors("animals.delete"):
            model = await self._session.get(AnimalModel, animal_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.commit()
        return True

    async def find_by_title(self, title: str) -> list[Animal]:
        stmt = select(AnimalModel).where(AnimalModel.title == title)
        with store_errors("animals.find_by_title"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_by_room_id(
        self,
        room_id: str,
        limit: int,
        ordering: AnimalOrdering | None = None,
    ) -> list[Animal]:
        if limit <= 0:
            return []
        stmt = select(AnimalModel).where(AnimalModel.room_id == room_id)
        if ordering is not None:
            stmt = stmt.order_by(*_order_by(ordering, self._collation()))
        stmt = stmt.limit(limit)
        with store_errors("animals.find_by_room_id"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def stream_favorite_room_ids(self) -> AsyncIterator[set[str]]:
        stmt = select(AnimalModel.favorite_room_ids).execution_options(
            yield_per=self._scan_batch_size
        )
        with store_errors("animals.scan_favorites"):
            result = await self._session.stream_scalars(stmt)
            async for favorites in result:
                yield set(favorites or ())
