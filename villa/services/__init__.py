"""
Services Package
Business logic behind the blueprints
"""

from villa.services.email_service import EmailService
from villa.services.booking_service import BookingService
from villa.services.property_status_service import PropertyStatusService
from villa.services.user_service import UserService

__all__ = [
    'EmailService',
    'BookingService',
    'PropertyStatusService',
    'UserService',
]
