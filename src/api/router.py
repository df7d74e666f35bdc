"""API router aggregation."""

from fastapi import APIRouter

from src.api.health import router as health_router
from src.api.imports import router as imports_router

api_router = APIRouter()
api_router.include_router(health_router)
# Leave import preview / prepare / commit
api_router.include_router(imports_router)
