"""
Booking Model
"""

from extensions import db
from datetime import datetime
from enum import Enum


class BookingType(str, Enum):
    """Booking type enum"""
    STAY = 'stay'
    VIEWING = 'viewing'


class BookingStatus(str, Enum):
    """Booking status enum"""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class Booking(db.Model):
    """Stay reservation or property viewing appointment"""

    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    type = db.Column(db.Enum(BookingType), nullable=False)
    status = db.Column(db.Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)

    # Stay details
    check_in = db.Column(db.Date)
    check_out = db.Column(db.Date)
    guests = db.Column(db.Integer)

    # Viewing details
    date = db.Column(db.Date)
    time = db.Column(db.String(20))

    property_name = db.Column(db.String(120))
    notes = db.Column(db.Text)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime)

    def __init__(self, **kwargs):
        """Initialize booking"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_active(self):
        return self.status != BookingStatus.CANCELLED

    @property
    def nights(self):
        if self.type != BookingType.STAY or not self.check_in or not self.check_out:
            return None
        return (self.check_out - self.check_in).days

    def can_cancel(self, by_admin=False):
        """Guests may withdraw a pending request; admins may also cancel confirmed bookings"""
        if by_admin:
            return self.status in [BookingStatus.PENDING, BookingStatus.CONFIRMED]
        return self.status == BookingStatus.PENDING

    def touch(self):
        self.updated_at = datetime.utcnow()

    def to_dict(self, include_user=False):
        """Convert booking to dictionary"""
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'type': self.type.value,
            'status': self.status.value,
            'property_name': self.property_name,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

        if self.type == BookingType.STAY:
            data.update({
                'check_in': self.check_in.isoformat() if self.check_in else None,
                'check_out': self.check_out.isoformat() if self.check_out else None,
                'guests': self.guests,
                'nights': self.nights,
            })
        else:
            data.update({
                'date': self.date.isoformat() if self.date else None,
                'time': self.time,
            })

        if include_user and self.user:
            data['user'] = self.user.to_dict(include_email=True)

        return data

    def __repr__(self):
        return f'<Booking {self.id} - {self.type.value} {self.status.value}>'
