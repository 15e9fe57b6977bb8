"""
FastAPI dependencies.

The database engine is opened once by the application lifespan and kept on
``app.state``; every request builds its store around that shared handle.
"""

from fastapi import Depends, Request
from parcel_tracker.app.services.parcel_store import ParcelStore
from parcel_tracker.app.services.parcel_service import ParcelService


async def get_parcel_store(request: Request) -> ParcelStore:
    """FastAPI dependency returning a store bound to the application engine."""
    return ParcelStore(request.app.state.engine)


async def get_parcel_service(store: ParcelStore = Depends(get_parcel_store)) -> ParcelService:
    return ParcelService(store)
