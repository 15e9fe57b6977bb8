"""
Parcel database model.

Maps tracked parcels to the single ``parcel`` relation.
"""

from sqlalchemy import Column, Integer, String, Enum
from parcel_tracker.app.db.session import Base
from parcel_tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model.

    A parcel belongs to an opaque client id and moves through the
    ParcelStatus values. ``created_at`` is kept as RFC3339 text.
    """
    __tablename__ = "parcel"
    # AUTOINCREMENT keeps SQLite from reusing the number of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)

    # Ownership - no foreign key, client ids are opaque
    client = Column(Integer, nullable=False, index=True)

    status = Column(
        Enum(
            ParcelStatus,
            name="parcel_status",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        default=ParcelStatus.REGISTERED,
        nullable=False,
    )
    address = Column(String, nullable=False)
    created_at = Column(String(40), nullable=False)

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status.value}')>"
