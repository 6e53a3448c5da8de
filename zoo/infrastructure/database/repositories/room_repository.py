"""Concrete Room repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zoo.application.interfaces import RoomRepository
from zoo.domain.entities import Room
from zoo.infrastructure.database.models import RoomModel
from zoo.infrastructure.database.base import as_utc
from zoo.infrastructure.database.repositories.store_errors import store_errors


class SQLAlchemyRoomRepository(RoomRepository):
    """Implements the RoomRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RoomModel) -> Room:
        """Map ORM model → domain entity."""
        return Room(
            id=model.id,
            title=model.title,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Room) -> RoomModel:
        """Map domain entity → ORM model."""
        return RoomModel(
            id=entity.id,
            title=entity.title,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, room_id: str) -> Room | None:
        with store_errors("rooms.get"):
            result = await self._session.get(RoomModel, room_id)
        return self._to_entity(result) if result else None

    async def save(self, room: Room) -> Room:
        with store_errors("rooms.save"):
            await self._session.merge(self._to_model(room))
            await self._session.commit()
        return room

    async def delete(self, room_id: str) -> bool:
        with store_errors("rooms.delete"):
            model = await self._session.get(RoomModel, room_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.commit()
        return True

    async def find_by_title(self, title: str) -> list[Room]:
        stmt = select(RoomModel).where(RoomModel.title == title)
        with store_errors("rooms.find_by_title"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]
