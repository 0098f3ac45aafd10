"""API router aggregation."""

from fastapi import APIRouter

from simples_api.api import health, systems

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(systems.router, prefix="/simples", tags=["Systems"])
