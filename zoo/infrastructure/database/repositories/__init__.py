from .animal_repository import SQLAlchemyAnimalRepository
from .room_repository import SQLAlchemyRoomRepository

__all__ = [
    "SQLAlchemyAnimalRepository",
    "SQLAlchemyRoomRepository",
]
