from .animal import AnimalCreate, AnimalUpdate, AnimalResponse
from .room import RoomCreate, RoomUpdate, RoomResponse
from .error import ErrorResponse

__all__ = [
    "AnimalCreate",
    "AnimalUpdate",
    "AnimalResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "ErrorResponse",
]
