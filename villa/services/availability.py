"""
Availability Engine

Pure functions that derive the calendar days unavailable for a new
reservation and validate proposed reservations against them. Nothing in this
module touches the database or the request context: callers load bookings,
blocked dates and the property status themselves and pass them in.

Bookings only need ``id``, ``type``, ``status``, ``check_in``, ``check_out``
and ``date`` attributes; blocked dates may be ``BlockedDate`` rows or plain
dates. All comparisons happen on calendar days, never on timestamps.
"""

from datetime import date, datetime, timedelta

from villa.models.booking import BookingStatus, BookingType
from villa.models.property_status import PropertyStatusType

# Default guest cap; the app passes config MAX_GUESTS in explicitly
MAX_GUESTS = 8


def normalize_day(value):
    """Reduce a date, datetime or ISO-8601 string to its calendar day."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return datetime.fromisoformat(text).date()
    raise TypeError(f'Cannot interpret {value!r} as a calendar date')


def iter_days(start, end):
    """Yield every day from start to end, both inclusive."""
    current = normalize_day(start)
    end = normalize_day(end)
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_day(day):
    return f'{day:%B} {day.day}, {day.year}'


# ----------------------------------------------------------------------
# Rejection reasons
# ----------------------------------------------------------------------
class Rejection:
    """A named reason why a reservation cannot be accepted"""
    code = 'rejected'
    status_code = 400

    @property
    def message(self):
        return 'Reservation rejected.'

    def details(self):
        return {}

    def to_dict(self):
        data = {'code': self.code, 'error': self.message}
        data.update(self.details())
        return data

    def __eq__(self, other):
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.code, tuple(sorted(self.details().items()))))

    def __repr__(self):
        return f'<{type(self).__name__} {self.details()}>'


class PropertyUnavailable(Rejection):
    code = 'property_unavailable'
    status_code = 409

    def __init__(self, type, reason=None):
        self.type = PropertyStatusType(type)
        self.reason = reason

    @property
    def message(self):
        message = f'This property is currently {self.type.value}'
        if self.reason:
            message += f' due to {self.reason}'
        return message + '. Please try again later.'

    def details(self):
        return {'type': self.type.value, 'reason': self.reason}


class MissingDates(Rejection):
    code = 'missing_dates'

    @property
    def message(self):
        return 'Please select both check-in and check-out dates.'


class MissingDate(Rejection):
    code = 'missing_date'

    @property
    def message(self):
        return 'Please select a viewing date.'


class InvalidDateRange(Rejection):
    code = 'invalid_date_range'

    def __init__(self, check_in, check_out):
        self.check_in = check_in
        self.check_out = check_out

    @property
    def message(self):
        return 'Check-out date must not be before check-in date.'

    def details(self):
        return {'check_in': self.check_in.isoformat(), 'check_out': self.check_out.isoformat()}


class InvalidGuests(Rejection):
    code = 'invalid_guests'

    def __init__(self, guests, max_guests):
        self.guests = guests
        self.max_guests = max_guests

    @property
    def message(self):
        return f'Number of guests must be between 1 and {self.max_guests}.'

    def details(self):
        return {'guests': self.guests, 'max_guests': self.max_guests}


class DateUnavailable(Rejection):
    code = 'date_unavailable'
    status_code = 409

    def __init__(self, date):
        self.date = date

    @property
    def message(self):
        return f'{format_day(self.date)} is unavailable. Please choose different dates.'

    def details(self):
        return {'date': self.date.isoformat()}


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------
class Ok:
    ok = True
    reason = None

    def __bool__(self):
        return True

    def __eq__(self, other):
        return isinstance(other, Ok)

    def __hash__(self):
        return hash(Ok)

    def to_dict(self):
        return {'ok': True}

    def __repr__(self):
        return '<Ok>'


class Rejected:
    ok = False

    def __init__(self, reason):
        self.reason = reason

    def __bool__(self):
        return False

    def __eq__(self, other):
        return isinstance(other, Rejected) and self.reason == other.reason

    def __hash__(self):
        return hash(self.reason)

    def to_dict(self):
        data = {'ok': False}
        data.update(self.reason.to_dict())
        return data

    def __repr__(self):
        return f'<Rejected {self.reason!r}>'


class ReservationRequest:
    """A proposed stay (date range) or viewing (single date)"""

    def __init__(self, type, check_in=None, check_out=None, date=None, time=None, guests=None):
        self.type = BookingType(type)
        self.check_in = normalize_day(check_in)
        self.check_out = normalize_day(check_out)
        self.date = normalize_day(date)
        self.time = time
        self.guests = guests

    def __repr__(self):
        if self.type == BookingType.STAY:
            return f'<ReservationRequest stay {self.check_in}..{self.check_out}>'
        return f'<ReservationRequest viewing {self.date} {self.time or ""}>'


# ----------------------------------------------------------------------
# Unavailable-date set
# ----------------------------------------------------------------------
def _active_bookings(bookings, exclude_id=None):
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        if exclude_id is not None and booking.id == exclude_id:
            continue
        yield booking


def booked_dates(bookings, exclude_id=None):
    """Days covered by non-cancelled stays (inclusive spans) and viewings."""
    days = set()
    for booking in _active_bookings(bookings, exclude_id):
        if booking.type == BookingType.STAY and booking.check_in and booking.check_out:
            days.update(iter_days(booking.check_in, booking.check_out))
        elif booking.type == BookingType.VIEWING and booking.date:
            days.add(normalize_day(booking.date))
    return days


def viewing_dates(bookings, exclude_id=None):
    """Days already hosting a non-cancelled viewing."""
    return {
        normalize_day(booking.date)
        for booking in _active_bookings(bookings, exclude_id)
        if booking.type == BookingType.VIEWING and booking.date
    }


def blocked_days(blocked_dates):
    days = set()
    for item in blocked_dates:
        if isinstance(item, (date, str)):
            days.add(normalize_day(item))
        else:
            days.add(normalize_day(item.date))
    return days


def unavailable_dates(bookings, blocked_dates, exclude_id=None):
    """The unavailable set: booked days plus administratively blocked days."""
    return booked_dates(bookings, exclude_id) | blocked_days(blocked_dates)


def is_date_unavailable(day, unavailable):
    day = normalize_day(day)
    return day is not None and day in unavailable


def is_date_selectable(day, booking_type, bookings, blocked_dates, today=None):
    """Whether a calendar entry should be offered for a new reservation."""
    day = normalize_day(day)
    today = normalize_day(today) or date.today()
    if day < today:
        return False
    if day in unavailable_dates(bookings, blocked_dates):
        return False
    if BookingType(booking_type) == BookingType.VIEWING and day in viewing_dates(bookings):
        return False
    return True


def selectable_days(start, end, booking_type, bookings, blocked_dates, today=None):
    """Map each day of [start, end] to its selectability, computing the set once."""
    today = normalize_day(today) or date.today()
    unavailable = unavailable_dates(bookings, blocked_dates)
    if BookingType(booking_type) == BookingType.VIEWING:
        unavailable |= viewing_dates(bookings)
    return {day: day >= today and day not in unavailable for day in iter_days(start, end)}


# ----------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------
def _status_type(property_status):
    if property_status is None:
        return PropertyStatusType.AVAILABLE
    return PropertyStatusType(property_status.type)


def find_conflict(candidate, bookings, blocked_dates, exclude_id=None, max_guests=MAX_GUESTS):
    """Check a candidate's dates only, ignoring the global property status.

    ``exclude_id`` leaves one booking out of the unavailable set so that an
    existing booking can be checked against everything except itself.
    """
    unavailable = unavailable_dates(bookings, blocked_dates, exclude_id)

    if candidate.type == BookingType.STAY:
        if candidate.check_in is None or candidate.check_out is None:
            return Rejected(MissingDates())
        if candidate.check_in > candidate.check_out:
            return Rejected(InvalidDateRange(candidate.check_in, candidate.check_out))
        if candidate.guests is None or not 1 <= candidate.guests <= max_guests:
            return Rejected(InvalidGuests(candidate.guests, max_guests))
        for day in iter_days(candidate.check_in, candidate.check_out):
            if day in unavailable:
                return Rejected(DateUnavailable(day))
        return Ok()

    if candidate.date is None:
        return Rejected(MissingDate())
    if candidate.date in unavailable or candidate.date in viewing_dates(bookings, exclude_id):
        return Rejected(DateUnavailable(candidate.date))
    return Ok()


def validate_reservation(candidate, bookings, blocked_dates, property_status, max_guests=MAX_GUESTS):
    """Authorize a new reservation; returns ``Ok()`` or ``Rejected(reason)``."""
    status_type = _status_type(property_status)
    if status_type != PropertyStatusType.AVAILABLE:
        return Rejected(PropertyUnavailable(status_type, getattr(property_status, 'reason', None)))
    return find_conflict(candidate, bookings, blocked_dates, max_guests=max_guests)
