"""
Parcel store.

Single-row CRUD over the ``parcel`` relation. Every method runs exactly one
statement in its own short transaction on the injected engine.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, insert, update, delete
from sqlalchemy.ext.asyncio import AsyncEngine

from parcel_tracker.app.models.parcel import Parcel
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelCreate, ParcelRecord

logger = logging.getLogger("tracker")

parcel_table = Parcel.__table__


def _to_record(row) -> ParcelRecord:
    return ParcelRecord.model_validate(dict(row._mapping))


class ParcelStore:
    """
    Persistence for parcel records.

    The engine is owned by the caller; the store never disposes of it.
    Errors raised by SQLAlchemy propagate unchanged.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a parcel and return the number assigned by the database.

        Args:
            parcel: Parcel fields except the number

        Returns:
            The new parcel number
        """
        stmt = insert(parcel_table).values(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            number = result.inserted_primary_key[0]

        logger.debug("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> ParcelRecord:
        """
        Fetch a parcel by number.

        Raises:
            sqlalchemy.exc.NoResultFound: If no parcel has this number
        """
        stmt = select(parcel_table).where(parcel_table.c.number == number)
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            row = result.one()

        return _to_record(row)

    async def get_by_client(self, client: int) -> List[ParcelRecord]:
        """Fetch every parcel of a client. Order is whatever the database returns."""
        stmt = select(parcel_table).where(parcel_table.c.client == client)
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = result.all()

        return [_to_record(row) for row in rows]

    async def set_address(self, number: int, address: str) -> None:
        """Change the address. A missing number updates nothing and is not an error."""
        await self._update(number, address=address)

    async def set_status(self, number: int, status: ParcelStatus) -> None:
        """Change the status. Any ParcelStatus is accepted."""
        await self._update(number, status=status)

    async def delete(self, number: int) -> None:
        """Remove a parcel. A missing number deletes nothing and is not an error."""
        await self._delete(number)

    async def set_address_if_status(self, number: int, address: str, current: ParcelStatus) -> int:
        """
        Change the address only while the parcel is in ``current`` status.

        Returns:
            Number of rows changed (0 if the parcel is missing or in another status)
        """
        return await self._update(number, where_status=current, address=address)

    async def set_status_if_status(self, number: int, status: ParcelStatus, current: ParcelStatus) -> int:
        """
        Move the parcel to ``status`` only if it is still in ``current``.

        Returns:
            Number of rows changed
        """
        return await self._update(number, where_status=current, status=status)

    async def delete_if_status(self, number: int, current: ParcelStatus) -> int:
        """
        Remove the parcel only while it is in ``current`` status.

        Returns:
            Number of rows deleted
        """
        return await self._delete(number, where_status=current)

    async def _delete(self, number: int, where_status: Optional[ParcelStatus] = None) -> int:
        stmt = delete(parcel_table).where(parcel_table.c.number == number)
        if where_status is not None:
            stmt = stmt.where(parcel_table.c.status == where_status)
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            rows = result.rowcount

        logger.debug("Parcel deleted", extra={"number": number, "rows": rows})
        return rows

    async def _update(self, number: int, where_status: Optional[ParcelStatus] = None, **values) -> int:
        stmt = update(parcel_table).where(parcel_table.c.number == number)
        if where_status is not None:
            stmt = stmt.where(parcel_table.c.status == where_status)
        stmt = stmt.values(**values)
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            rows = result.rowcount

        logger.debug(
            "Parcel updated",
            extra={"number": number, "fields": sorted(values), "rows": rows},
        )
        return rows
