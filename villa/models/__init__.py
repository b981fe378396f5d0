"""
Models package initialization
Import all models here for easy access
"""

from villa.models.user import User
from villa.models.booking import Booking, BookingStatus, BookingType
from villa.models.blocked_date import BlockedDate
from villa.models.property_status import PropertyStatus, PropertyStatusType

__all__ = [
    'User',
    'Booking',
    'BookingStatus',
    'BookingType',
    'BlockedDate',
    'PropertyStatus',
    'PropertyStatusType',
]
