"""
Booking Service
Creates, lists and changes bookings; every date change goes through the availability engine
"""

from datetime import datetime

from flask import current_app

from extensions import db
from villa.errors import NotFoundError, PermissionDenied, ValidationError
from villa.models.blocked_date import BlockedDate
from villa.models.booking import Booking, BookingStatus, BookingType
from villa.services import availability
from villa.services.email_service import EmailService
from villa.services.property_status_service import PropertyStatusService
from villa.utils.parsing import parse_day, parse_int

EDITABLE_FIELDS = ('status', 'check_in', 'check_out', 'guests', 'date', 'time', 'notes')


def _parse_choice(enum_cls, value, field):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f'{field} must be one of: {allowed}')


def _parse_viewing_time(value):
    """A viewing needs one of the configured time slots"""
    time = value or None
    if time is None:
        raise ValidationError('time is required for a viewing')
    slots = current_app.config.get('VIEWING_TIME_SLOTS') or []
    if slots and time not in slots:
        raise ValidationError(f'time must be one of: {", ".join(slots)}')
    return time


class BookingService:
    """Booking workflows for guests and administrators"""

    @staticmethod
    def parse_reservation(data):
        """Build a ReservationRequest from a request payload"""
        booking_type = _parse_choice(BookingType, data.get('type'), 'type')

        if booking_type == BookingType.STAY:
            guests = parse_int(data.get('guests', 2), 'guests')
            return availability.ReservationRequest(
                booking_type,
                check_in=parse_day(data.get('check_in'), 'check_in'),
                check_out=parse_day(data.get('check_out'), 'check_out'),
                guests=guests,
            )

        return availability.ReservationRequest(
            booking_type,
            date=parse_day(data.get('date'), 'date'),
            time=_parse_viewing_time(data.get('time')),
        )

    @staticmethod
    def load_availability_inputs(lock=False):
        """Current non-cancelled bookings, blocked dates and property status"""
        status = PropertyStatusService.get_status(lock=lock)
        bookings = Booking.query.filter(Booking.status != BookingStatus.CANCELLED).all()
        blocked = BlockedDate.query.all()
        return bookings, blocked, status

    @staticmethod
    def create_booking(user, data):
        """Validate and store a new pending booking.

        Returns ``(result, booking)``; ``booking`` is None when the engine
        rejected the request, in which case nothing has been written.
        """
        candidate = BookingService.parse_reservation(data)

        # Row lock on the status singleton serialises concurrent creators
        bookings, blocked, status = BookingService.load_availability_inputs(lock=True)
        result = availability.validate_reservation(
            candidate, bookings, blocked, status,
            max_guests=current_app.config.get('MAX_GUESTS', availability.MAX_GUESTS),
        )
        if not result:
            db.session.rollback()
            current_app.logger.info(
                f'Rejected {candidate!r} for user {user.id}: {result.reason.code}'
            )
            return result, None

        booking = Booking(
            user_id=user.id,
            type=candidate.type,
            status=BookingStatus.PENDING,
            property_name=data.get('property_name') or current_app.config.get('PROPERTY_NAME'),
            notes=data.get('notes') or data.get('special_requests'),
            created_at=datetime.utcnow(),
        )
        if candidate.type == BookingType.STAY:
            booking.check_in = candidate.check_in
            booking.check_out = candidate.check_out
            booking.guests = candidate.guests
        else:
            booking.date = candidate.date
            booking.time = candidate.time

        db.session.add(booking)
        db.session.commit()
        current_app.logger.info(f'Created booking {booking.id} ({candidate!r}) for user {user.id}')

        EmailService.send_booking_received(booking, user)
        return result, booking

    @staticmethod
    def get_booking(booking_id, user):
        """Fetch a booking visible to the user (owner or admin)"""
        booking = db.session.get(Booking, booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.user_id != user.id and not user.is_admin:
            raise PermissionDenied('Unauthorized')
        return booking

    @staticmethod
    def filter_bookings(query=None, search=None, status=None, type=None):
        query = query if query is not None else Booking.query

        if status and status != 'all':
            query = query.filter(Booking.status == _parse_choice(BookingStatus, status, 'status'))
        if type and type != 'all':
            query = query.filter(Booking.type == _parse_choice(BookingType, type, 'type'))
        if search:
            pattern = f'%{search.strip()}%'
            query = query.filter(db.or_(
                db.cast(Booking.id, db.String).ilike(pattern),
                Booking.property_name.ilike(pattern),
                Booking.notes.ilike(pattern),
            ))

        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_user_bookings(user, search=None, status=None, type=None):
        """Administrators see every booking, guests only their own"""
        query = Booking.query
        if not user.is_admin:
            query = query.filter(Booking.user_id == user.id)
        return BookingService.filter_bookings(query, search=search, status=status, type=type)

    @staticmethod
    def cancel_booking(booking, user):
        if booking.user_id != user.id and not user.is_admin:
            raise PermissionDenied('Unauthorized')
        if not booking.can_cancel(by_admin=user.is_admin):
            raise ValidationError('Booking cannot be cancelled')

        booking.status = BookingStatus.CANCELLED
        booking.touch()
        if booking.user_id != user.id:
            BookingService._notify_owner(booking)
        db.session.commit()

        current_app.logger.info(f'Booking {booking.id} cancelled by user {user.id}')
        return booking

    @staticmethod
    def update_booking(booking, updates, actor):
        """Administrator edit of any booking field.

        Returns ``(result, booking)`` like create_booking. Dates are checked
        against every other booking and blocked date whenever the booking is,
        or becomes, non-cancelled.
        """
        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f'Cannot update: {", ".join(sorted(unknown))}')

        previous_status = booking.status
        new_status = booking.status
        if 'status' in updates:
            new_status = _parse_choice(BookingStatus, updates['status'], 'status')

        values = {
            'check_in': booking.check_in,
            'check_out': booking.check_out,
            'guests': booking.guests,
            'date': booking.date,
            'time': booking.time,
        }
        for field in ('check_in', 'check_out', 'date'):
            if field in updates:
                values[field] = parse_day(updates[field], field)
        if 'guests' in updates:
            values['guests'] = parse_int(updates['guests'], 'guests')
        if 'time' in updates:
            if booking.type == BookingType.VIEWING:
                values['time'] = _parse_viewing_time(updates['time'])
            else:
                values['time'] = updates['time'] or None

        dates_changed = any(values[f] != getattr(booking, f) for f in ('check_in', 'check_out', 'date', 'guests'))
        reactivated = previous_status == BookingStatus.CANCELLED and new_status != BookingStatus.CANCELLED

        result = availability.Ok()
        if new_status != BookingStatus.CANCELLED and (dates_changed or reactivated):
            candidate = availability.ReservationRequest(booking.type, **values)
            bookings, blocked, _ = BookingService.load_availability_inputs(lock=True)
            result = availability.find_conflict(
                candidate, bookings, blocked, exclude_id=booking.id,
                max_guests=current_app.config.get('MAX_GUESTS', availability.MAX_GUESTS),
            )
            if not result:
                db.session.rollback()
                current_app.logger.info(f'Rejected update of booking {booking.id}: {result.reason.code}')
                return result, None

        for field, value in values.items():
            setattr(booking, field, value)
        booking.status = new_status
        if 'notes' in updates:
            booking.notes = updates['notes'] or None
        booking.touch()
        BookingService._notify_owner(booking)
        db.session.commit()

        current_app.logger.info(
            f'Booking {booking.id} updated by admin {actor.id} '
            f'(status {previous_status.value} -> {new_status.value})'
        )
        if new_status != previous_status and booking.user:
            EmailService.send_booking_status_update(booking, booking.user)
        return result, booking

    @staticmethod
    def _notify_owner(booking):
        owner = booking.user
        if owner:
            owner.has_notifications = True
            owner.has_booking_updates = True

    @staticmethod
    def booking_stats():
        return {
            'total_bookings': Booking.query.count(),
            'pending_bookings': Booking.query.filter_by(status=BookingStatus.PENDING).count(),
            'confirmed_bookings': Booking.query.filter_by(status=BookingStatus.CONFIRMED).count(),
            'cancelled_bookings': Booking.query.filter_by(status=BookingStatus.CANCELLED).count(),
            'stay_bookings': Booking.query.filter_by(type=BookingType.STAY).count(),
            'viewing_bookings': Booking.query.filter_by(type=BookingType.VIEWING).count(),
        }

    @staticmethod
    def quote_stay(check_in, check_out):
        """Price breakdown for a stay"""
        check_in = parse_day(check_in, 'check_in')
        check_out = parse_day(check_out, 'check_out')
        if check_in is None or check_out is None:
            raise ValidationError('check_in and check_out are required')
        if check_in > check_out:
            raise ValidationError('check_out must not be before check_in')

        config = current_app.config
        nights = (check_out - check_in).days
        room_price = nights * config['NIGHTLY_RATE']
        total = room_price + config['CLEANING_FEE'] + config['SERVICE_FEE']

        return {
            'check_in': check_in.isoformat(),
            'check_out': check_out.isoformat(),
            'nights': nights,
            'nightly_rate': config['NIGHTLY_RATE'],
            'room_price': room_price,
            'cleaning_fee': config['CLEANING_FEE'],
            'service_fee': config['SERVICE_FEE'],
            'total': total,
        }
