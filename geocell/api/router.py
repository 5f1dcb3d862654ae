from __future__ import annotations

from fastapi import APIRouter

from geocell.api.geohash import router as geohash_router
from geocell.api.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(geohash_router)
