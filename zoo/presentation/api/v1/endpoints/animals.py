"""Animal endpoints: CRUD, occupancy, favorites, listings and aggregation."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from zoo.application.schemas import AnimalCreate, AnimalResponse, AnimalUpdate
from zoo.application.services import (
    AnimalListingService,
    AnimalService,
    FavoriteAggregationService,
    RelationshipService,
)
from zoo.domain.entities import Animal
from zoo.domain.exceptions import EntityNotFoundError
from zoo.infrastructure.dependencies import (
    get_animal_listing_service,
    get_animal_service,
    get_favorite_aggregation_service,
    get_relationship_service,
)

router = APIRouter(prefix="/animals", tags=["Animals"])


def _found(animal: Animal | None, animal_id: str) -> AnimalResponse:
    """Map a relationship-operation outcome to a response or a 404."""
    if animal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError("Animal", animal_id)),
        )
    return AnimalResponse.model_validate(animal, from_attributes=True)


# ── Listings & aggregation (declared before /{animal_id}) ────────────


@router.get("", response_model=list[AnimalResponse])
async def find_animals_by_title(
    title: str = Query(..., min_length=1, description="Exact animal title"),
    service: AnimalService = Depends(get_animal_service),
) -> list[AnimalResponse]:
    """Retrieve animals with exactly this title."""
    animals = await service.find_by_title(title)
    return [AnimalResponse.model_validate(a, from_attributes=True) for a in animals]


@router.get("/in-room/{room_id}", response_model=list[AnimalResponse])
async def list_animals_in_room(
    room_id: str,
    sort_by: str = Query("title", description="title | located"),
    order: str = Query("asc", description="asc | desc"),
    page: int = Query(0, description="Zero-based page number"),
    size: int = Query(10, description="Page size"),
    service: AnimalListingService = Depends(get_animal_listing_service),
) -> list[AnimalResponse]:
    """List the animals placed in a room, sorted and paginated.

    Out-of-range or invalid paging yields an empty list, not an error.
    """
    animals = await service.list_in_room(room_id, sort_by, order, page, size)
    return [AnimalResponse.model_validate(a, from_attributes=True) for a in animals]


@router.get("/favorites/aggregation", response_model=dict[str, int])
async def favorite_rooms_aggregation(
    service: FavoriteAggregationService = Depends(get_favorite_aggregation_service),
) -> dict[str, int]:
    """Number of animals favoring each room, keyed by room title."""
    return await service.favorite_counts_by_title()


@router.get("/favorites/aggregation/by-id", response_model=dict[str, int])
async def favorite_rooms_aggregation_by_id(
    room_ids: list[str] | None = Query(None, description="Restrict to these room ids"),
    service: FavoriteAggregationService = Depends(get_favorite_aggregation_service),
) -> dict[str, int]:
    """Number of animals favoring each room, keyed by room id."""
    return await service.favorite_counts_by_id(room_ids)


# ── CRUD ─────────────────────────────────────────────────────────────


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal(
    data: AnimalCreate,
    service: AnimalService = Depends(get_animal_service),
) -> AnimalResponse:
    """Create a new animal (not placed, no favorites)."""
    animal = await service.create_animal(data)
    return AnimalResponse.model_validate(animal, from_attributes=True)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(
    animal_id: str,
    service: AnimalService = Depends(get_animal_service),
) -> AnimalResponse:
    """Retrieve a single animal by ID."""
    return _found(await service.get_animal(animal_id), animal_id)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update_animal(
    animal_id: str,
    data: AnimalUpdate,
    service: AnimalService = Depends(get_animal_service),
) -> AnimalResponse:
    """Rename an existing animal."""
    try:
        animal = await service.update_animal(animal_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AnimalResponse.model_validate(animal, from_attributes=True)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal(
    animal_id: str,
    service: AnimalService = Depends(get_animal_service),
) -> None:
    """Delete an animal by ID."""
    await service.delete_animal(animal_id)


# ── Occupancy & favorites ────────────────────────────────────────────


@router.post("/{animal_id}/place", response_model=AnimalResponse)
async def place_animal(
    animal_id: str,
    room_id: str = Query(..., description="Target room id"),
    located: date | None = Query(None, description="YYYY-MM-DD, defaults to today"),
    service: RelationshipService = Depends(get_relationship_service),
) -> AnimalResponse:
    """Place an animal in a room."""
    return _found(await service.place(animal_id, room_id, located), animal_id)


@router.post("/{animal_id}/move", response_model=AnimalResponse)
async def move_animal(
    animal_id: str,
    room_id: str = Query(..., description="New room id"),
    located: date | None = Query(None, description="YYYY-MM-DD, defaults to today"),
    service: RelationshipService = Depends(get_relationship_service),
) -> AnimalResponse:
    """Move an animal to another room."""
    return _found(await service.move(animal_id, room_id, located), animal_id)


@router.delete("/{animal_id}/remove", response_model=AnimalResponse)
async def remove_animal(
    animal_id: str,
    service: RelationshipService = Depends(get_relationship_service),
) -> AnimalResponse:
    """Take an animal out of its room."""
    return _found(await service.remove(animal_id), animal_id)


@router.post("/{animal_id}/favorites/assign", response_model=AnimalResponse)
async def assign_favorite_room(
    animal_id: str,
    room_id: str = Query(..., description="Room id to add as favorite"),
    service: RelationshipService = Depends(get_relationship_service),
) -> AnimalResponse:
    """Mark a room as one of the animal's favorites."""
    return _found(await service.assign_favorite(animal_id, room_id), animal_id)


@router.delete("/{animal_id}/favorites/unassign", response_model=AnimalResponse)
async def unassign_favorite_room(
    animal_id: str,
    room_id: str = Query(..., description="Room id to remove from favorites"),
    service: RelationshipService = Depends(get_relationship_service),
) -> AnimalResponse:
    """Remove a room from the animal's favorites."""
    return _found(await service.unassign_favorite(animal_id, room_id), animal_id)
