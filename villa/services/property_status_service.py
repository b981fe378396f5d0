"""
Property Status Service
Owns the singleton property status and the administrator's blocked dates
"""

from datetime import datetime

from flask import current_app

from extensions import db
from villa.errors import ConflictError, NotFoundError, ValidationError
from villa.models.blocked_date import BlockedDate
from villa.models.booking import Booking
from villa.models.property_status import PropertyStatus, PropertyStatusType
from villa.services import availability
from villa.utils.parsing import parse_day


class PropertyStatusService:
    """Reads and changes the property's global and per-date availability"""

    @staticmethod
    def get_status(lock=False):
        """Return the singleton status row, creating it as available on first use"""
        query = PropertyStatus.query
        if lock:
            query = query.with_for_update()
        status = query.order_by(PropertyStatus.id).first()
        if status is None:
            status = PropertyStatus(type=PropertyStatusType.AVAILABLE)
            db.session.add(status)
            db.session.flush()
        return status

    @staticmethod
    def update_status(type, reason=None):
        try:
            status_type = PropertyStatusType(type)
        except ValueError:
            allowed = ', '.join(t.value for t in PropertyStatusType)
            raise ValidationError(f'type must be one of: {allowed}')

        status = PropertyStatusService.get_status(lock=True)
        status.type = status_type
        status.reason = reason or None
        status.updated_at = datetime.utcnow()
        db.session.commit()

        current_app.logger.info(f'Property status set to {status_type.value} ({reason or "no reason"})')
        return status

    @staticmethod
    def list_blocked_dates():
        return BlockedDate.query.order_by(BlockedDate.blocked_date).all()

    @staticmethod
    def add_blocked_date(day, reason=None, note=None):
        day = parse_day(day, 'date')
        if day is None:
            raise ValidationError('date required')

        if BlockedDate.query.filter_by(blocked_date=day).first():
            raise ConflictError('Date already blocked', date=day.isoformat())

        blocked = BlockedDate(blocked_date=day, reason=reason or 'maintenance', note=note or None)
        db.session.add(blocked)
        db.session.commit()

        current_app.logger.info(f'Blocked {day.isoformat()} for {blocked.reason}')
        return blocked

    @staticmethod
    def remove_blocked_date(blocked_id):
        blocked = db.session.get(BlockedDate, blocked_id)
        if not blocked:
            raise NotFoundError('Blocked date not found')

        db.session.delete(blocked)
        db.session.commit()

        current_app.logger.info(f'Unblocked {blocked.blocked_date.isoformat()}')
        return blocked

    @staticmethod
    def calendar(start, end):
        """Unavailable days within [start, end], split by cause, for admin calendar rendering"""
        start = parse_day(start, 'start')
        end = parse_day(end, 'end')
        if start is None or end is None:
            raise ValidationError('start and end are required')
        if start > end:
            raise ValidationError('start must not be after end')

        bookings = Booking.query.all()
        blocked = PropertyStatusService.list_blocked_dates()

        booked = availability.booked_dates(bookings)
        blocked_set = availability.blocked_days(blocked)
        window = set(availability.iter_days(start, end))

        return {
            'start': start.isoformat(),
            'end': end.isoformat(),
            'booked_dates': sorted(day.isoformat() for day in booked & window),
            'blocked_dates': [b.to_dict() for b in blocked if start <= b.blocked_date <= end],
            'unavailable_dates': sorted(day.isoformat() for day in (booked | blocked_set) & window),
            'property_status': PropertyStatusService.get_status().to_dict(),
        }
