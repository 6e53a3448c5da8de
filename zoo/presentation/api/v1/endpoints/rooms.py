"""Room CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from zoo.application.schemas import RoomCreate, RoomResponse, RoomUpdate
from zoo.application.services import RoomService
from zoo.domain.exceptions import EntityNotFoundError
from zoo.infrastructure.dependencies import get_room_service

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    data: RoomCreate,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Create a new room."""
    room = await service.create_room(data)
    return RoomResponse.model_validate(room, from_attributes=True)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Retrieve a single room by ID."""
    room = await service.get_room(room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError("Room", room_id)),
        )
    return RoomResponse.model_validate(room, from_attributes=True)


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str,
    data: RoomUpdate,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Rename an existing room."""
    try:
        room = await service.update_room(room_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RoomResponse.model_validate(room, from_attributes=True)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> None:
    """Delete a room. Animals referencing it are left untouched."""
    await service.delete_room(room_id)
