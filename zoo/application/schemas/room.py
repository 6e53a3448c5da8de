"""Pydantic DTOs (Data Transfer Objects) for the Room feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class RoomCreate(BaseModel):
    """Schema for creating a new room."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Green"])


class RoomUpdate(BaseModel):
    """Schema for updating an existing room."""

    title: str = Field(..., min_length=1, max_length=255)


class RoomResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}
