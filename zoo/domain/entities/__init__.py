from .animal import Animal
from .room import Room
from .ordering import AnimalOrdering, SortField, SortOrder, fold_title

__all__ = [
    "Animal",
    "Room",
    "AnimalOrdering",
    "SortField",
    "SortOrder",
    "fold_title",
]
