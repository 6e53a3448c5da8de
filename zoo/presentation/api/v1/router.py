"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from zoo.presentation.api.v1.endpoints.health import router as health_router
from zoo.presentation.api.v1.endpoints.animals import router as animals_router
from zoo.presentation.api.v1.endpoints.rooms import router as rooms_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(animals_router)
router.include_router(rooms_router)
