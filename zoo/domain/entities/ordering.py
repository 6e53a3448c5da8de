"""Sort field / direction for room listings, resolved once into a total order."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from .animal import Animal


class SortField(str, Enum):
    """Fields an in-room listing can be sorted by."""

    TITLE = "title"
    LOCATED = "located"

    @classmethod
    def parse(cls, raw: str | None) -> "SortField":
        """Resolve a query-string value, defaulting unknown input to TITLE."""
        if raw:
            for member in cls:
                if member.value == raw.strip().lower():
                    return member
        return cls.TITLE


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> "SortOrder":
        """Resolve a query-string value, defaulting unknown input to ASC."""
        if raw and raw.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


def fold_title(title: str) -> str:
    """Case-folded title; the store keeps a copy so it can order by the same key."""
    return title.lower()


def _title_key(animal: Animal) -> tuple[Any, ...]:
    title = animal.title
    return (title is None, fold_title(title) if title is not None else "", animal.id.lower())


def _located_key(animal: Animal) -> tuple[Any, ...]:
    located = animal.located
    return (located is None, located if located is not None else date.min, animal.id.lower())


_KEYS: dict[SortField, Callable[[Animal], tuple[Any, ...]]] = {
    SortField.TITLE: _title_key,
    SortField.LOCATED: _located_key,
}


@dataclass(frozen=True)
class AnimalOrdering:
    """A composed ordering over animals.

    Ascending: primary key with nulls last, then ``id`` case-insensitively.
    Descending reverses that whole comparator, tie-break and null placement
    included.
    """

    field: SortField = SortField.TITLE
    order: SortOrder = SortOrder.ASC

    @classmethod
    def parse(cls, sort_by: str | None, order: str | None) -> "AnimalOrdering":
        return cls(SortField.parse(sort_by), SortOrder.parse(order))

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESC

    def key(self, animal: Animal) -> tuple[Any, ...]:
        return _KEYS[self.field](animal)

    def sort(self, animals: Iterable[Animal]) -> list[Animal]:
        return sorted(animals, key=self.key, reverse=self.descending)
