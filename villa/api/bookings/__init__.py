"""
Bookings Blueprint
"""

from villa.api.bookings.routes import bookings_bp

__all__ = ['bookings_bp']
