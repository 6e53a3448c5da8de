from .animal_repository import AnimalRepository
from .room_repository import RoomRepository
from .cache import MISS, CacheBackend, CacheRegion, RegionPolicy
from .clock import Clock, SystemClock

__all__ = [
    "AnimalRepository",
    "RoomRepository",
    "MISS",
    "CacheBackend",
    "CacheRegion",
    "RegionPolicy",
    "Clock",
    "SystemClock",
]
