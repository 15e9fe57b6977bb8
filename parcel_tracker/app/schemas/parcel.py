"""
Parcel Pydantic schemas.

Defines the records exchanged with the parcel store and the API.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field
from parcel_tracker.app.models.parcel_enums import ParcelStatus

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now_rfc3339() -> str:
    """Current UTC time as RFC3339 text, second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


class ParcelCreate(BaseModel):
    """Schema for a parcel that has not been stored yet (no number)."""
    client: int = Field(..., description="Owning client id")
    status: ParcelStatus = Field(default=ParcelStatus.REGISTERED)
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(default_factory=utc_now_rfc3339, description="RFC3339 creation time")


class ParcelRecord(BaseModel):
    """Schema for a stored parcel."""
    number: int
    client: int
    status: ParcelStatus
    address: str
    created_at: str

    class Config:
        from_attributes = True


class ParcelRegister(BaseModel):
    """Schema for registering a new parcel through the API."""
    client: int = Field(..., description="Owning client id")
    address: str = Field(..., min_length=1, description="Delivery address")


class AddressUpdate(BaseModel):
    """Schema for changing a parcel's address."""
    address: str = Field(..., min_length=1, description="New delivery address")
