"""Routes API / API routes."""

from fastapi import APIRouter

from fillup_ledger.api import fillups, vehicles

api_router = APIRouter(prefix="/api")

api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(fillups.router, tags=["fillups"])
