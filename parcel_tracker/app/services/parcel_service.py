"""
Parcel workflow service.

Applies the parcel lifecycle rules on top of ParcelStore:
- Status flow REGISTERED → SENT → DELIVERED
- Address changes and deletion only while REGISTERED
"""

import logging
from typing import List

from sqlalchemy.exc import NoResultFound

from parcel_tracker.app.core.exceptions import ResourceNotFoundError, ParcelStateError
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelCreate, ParcelRecord
from parcel_tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger("tracker")

NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
    ParcelStatus.DELIVERED: ParcelStatus.DELIVERED,
}


class ParcelService:
    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelRecord:
        """
        Register a new parcel for a client.

        The parcel starts as REGISTERED with the current UTC time.

        Returns:
            The stored parcel
        """
        parcel = ParcelCreate(client=client, status=ParcelStatus.REGISTERED, address=address)
        number = await self.store.add(parcel)

        logger.info("Parcel registered", extra={"number": number, "client": client})
        return ParcelRecord(number=number, **parcel.model_dump())

    async def get(self, number: int) -> ParcelRecord:
        try:
            return await self.store.get(number)
        except NoResultFound as exc:
            raise ResourceNotFoundError("Parcel", number) from exc

    async def client_parcels(self, client: int) -> List[ParcelRecord]:
        return await self.store.get_by_client(client)

    async def next_status(self, number: int) -> ParcelRecord:
        """
        Move a parcel one step along the status flow.

        A DELIVERED parcel is returned unchanged.

        Raises:
            ResourceNotFoundError: If the parcel does not exist
            ParcelStateError: If the parcel changed status or was deleted meanwhile
        """
        parcel = await self.get(number)
        new_status = NEXT_STATUS[parcel.status]
        if new_status == parcel.status:
            return parcel

        changed = await self.store.set_status_if_status(number, new_status, parcel.status)
        if not changed:
            await self._raise_unchanged(number, "advance")

        logger.info(
            "Parcel status changed",
            extra={"number": number, "from_status": parcel.status.value, "to_status": new_status.value},
        )
        return parcel.model_copy(update={"status": new_status})

    async def change_address(self, number: int, address: str) -> ParcelRecord:
        """
        Change the delivery address of a REGISTERED parcel.

        Raises:
            ResourceNotFoundError: If the parcel does not exist
            ParcelStateError: If the parcel has already been sent
        """
        changed = await self.store.set_address_if_status(number, address, ParcelStatus.REGISTERED)
        if not changed:
            await self._raise_unchanged(number, "change address of")

        logger.info("Parcel address changed", extra={"number": number})
        return await self.get(number)

    async def delete(self, number: int) -> None:
        """
        Delete a REGISTERED parcel.

        Raises:
            ResourceNotFoundError: If the parcel does not exist
            ParcelStateError: If the parcel has already been sent
        """
        deleted = await self.store.delete_if_status(number, ParcelStatus.REGISTERED)
        if not deleted:
            await self._raise_unchanged(number, "delete")

        logger.info("Parcel deleted", extra={"number": number})

    async def _raise_unchanged(self, number: int, operation: str) -> None:
        # A guarded write touched no row: the parcel is gone or in another status
        parcel = await self.get(number)
        raise ParcelStateError(number, parcel.status.value, operation)
