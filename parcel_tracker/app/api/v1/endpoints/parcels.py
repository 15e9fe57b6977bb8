"""
Parcel API Endpoints.

Register parcels, look them up, and move them through their lifecycle.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from parcel_tracker.app.core.dependencies import get_parcel_service
from parcel_tracker.app.schemas.parcel import ParcelRecord, ParcelRegister, AddressUpdate
from parcel_tracker.app.services.parcel_service import ParcelService

router = APIRouter(tags=["Parcels"])


@router.post("/parcels", response_model=ParcelRecord, status_code=status.HTTP_201_CREATED)
async def register_parcel(
    parcel_data: ParcelRegister,
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Register a new parcel for a client.

    The parcel starts in status 'registered'.
    """
    return await service.register(parcel_data.client, parcel_data.address)


@router.get("/parcels/{number}", response_model=ParcelRecord)
async def get_parcel(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    return await service.get(number)


@router.get("/clients/{client}/parcels", response_model=List[ParcelRecord])
async def list_client_parcels(
    client: int = Path(..., description="Client id"),
    service: ParcelService = Depends(get_parcel_service)
):
    """List every parcel of a client (empty list if none)."""
    return await service.client_parcels(client)


@router.patch("/parcels/{number}/address", response_model=ParcelRecord)
async def change_parcel_address(
    address_data: AddressUpdate,
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Change the delivery address.

    Only allowed while the parcel is 'registered' (409 otherwise).
    """
    return await service.change_address(number, address_data.address)


@router.post("/parcels/{number}/next-status", response_model=ParcelRecord)
async def advance_parcel_status(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Advance the parcel status: registered → sent → delivered.

    A delivered parcel is returned unchanged.
    """
    return await service.next_status(number)


@router.delete("/parcels/{number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parcel(
    number: int = Path(..., description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Delete a parcel.

    Only allowed while the parcel is 'registered' (409 otherwise).
    """
    await service.delete(number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
