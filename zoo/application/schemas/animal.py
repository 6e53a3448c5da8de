"""Pydantic DTOs (Data Transfer Objects) for the Animal feature."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_serializer


class AnimalCreate(BaseModel):
    """Schema for creating a new animal.

    Occupancy and favorites are not accepted here; they change only through
    the place/move/remove and favorites endpoints.
    """

    title: str = Field(..., min_length=1, max_length=255, examples=["Tiger"])


class AnimalUpdate(BaseModel):
    """Schema for updating an existing animal."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Bengal Tiger"])


class AnimalResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    room_id: str | None
    located: date | None
    favorite_room_ids: set[str]
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}

    @field_serializer("favorite_room_ids")
    def _sorted_favorites(self, value: set[str]) -> list[str]:
        return sorted(value)
