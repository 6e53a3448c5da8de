from .animal_service import AnimalService
from .room_service import RoomService
from .relationship_service import RelationshipService
from .animal_listing_service import AnimalListingService, MAX_FETCH_LIMIT
from .favorite_aggregation_service import FavoriteAggregationService

__all__ = [
    "AnimalService",
    "RoomService",
    "RelationshipService",
    "AnimalListingService",
    "MAX_FETCH_LIMIT",
    "FavoriteAggregationService",
]
