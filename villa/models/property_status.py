"""
Property Status Model
"""

from extensions import db
from datetime import datetime
from enum import Enum


class PropertyStatusType(str, Enum):
    """Global availability of the property"""
    AVAILABLE = 'available'
    RENOVATION = 'renovation'
    MAINTENANCE = 'maintenance'
    SEASONAL_CLOSURE = 'seasonal-closure'
    PRIVATE_USE = 'private-use'


class PropertyStatus(db.Model):
    """Singleton row holding the property's global status"""

    __tablename__ = 'property_status'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(PropertyStatusType), default=PropertyStatusType.AVAILABLE, nullable=False)
    reason = db.Column(db.String(255))
    updated_at = db.Column(db.DateTime)

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_available(self):
        return self.type == PropertyStatusType.AVAILABLE

    def to_dict(self):
        return {
            'type': self.type.value,
            'reason': self.reason,
            'is_available': self.is_available,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<PropertyStatus {self.type.value}>'
