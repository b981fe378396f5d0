"""
API Package
"""

# Import all blueprints for easy access
from villa.api.auth import auth_bp
from villa.api.users import users_bp
from villa.api.bookings import bookings_bp
from villa.api.availability import availability_bp
from villa.api.admin import admin_bp

__all__ = [
    'auth_bp',
    'users_bp',
    'bookings_bp',
    'availability_bp',
    'admin_bp',
]
