"""
Admin Blueprint
"""

from villa.api.admin.routes import admin_bp

__all__ = ['admin_bp']
