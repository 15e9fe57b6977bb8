"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from parcel_tracker.app.api.v1.endpoints import parcels

router = APIRouter()

# Parcel endpoints
router.include_router(parcels.router)
