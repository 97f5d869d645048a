"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from bookshelf.presentation.api.v1.endpoints.health import router as health_router
from bookshelf.presentation.api.v1.endpoints.bookmarks import router as bookmarks_router
from bookshelf.presentation.api.v1.endpoints.ratings import router as ratings_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(bookmarks_router)
router.include_router(ratings_router)
