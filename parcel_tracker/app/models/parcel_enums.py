"""
Parcel Status Enumeration.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED

    The store accepts any member; the flow is enforced by ParcelService.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"
