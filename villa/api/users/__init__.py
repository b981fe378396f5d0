"""
Users Blueprint
"""

from villa.api.users.routes import users_bp

__all__ = ['users_bp']
