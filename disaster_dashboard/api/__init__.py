from __future__ import annotations

from fastapi import APIRouter

from .health import router as health_router
from .feeds import router as feeds_router
from .page import router as page_router

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router)
api_router.include_router(feeds_router)
