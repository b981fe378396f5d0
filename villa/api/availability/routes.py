"""
Availability Blueprint
Read-only calendar queries for the booking form
"""

from datetime import date, timedelta

from flask import Blueprint, current_app, jsonify, request

from villa.errors import ValidationError
from villa.models.booking import BookingType
from villa.services import availability
from villa.services.booking_service import BookingService
from villa.services.property_status_service import PropertyStatusService
from villa.utils.parsing import get_json_body, parse_day
from villa.utils.responses import rejection_response

availability_bp = Blueprint('availability', __name__)

MAX_WINDOW_DAYS = 731


def _booking_type(value):
    try:
        return BookingType(value or 'stay')
    except ValueError:
        raise ValidationError('type must be one of: stay, viewing')


def _window():
    start = parse_day(request.args.get('start'), 'start') or date.today()
    end = parse_day(request.args.get('end'), 'end') or start + timedelta(days=365)
    if start > end:
        raise ValidationError('start must not be after end')
    if (end - start).days > MAX_WINDOW_DAYS:
        raise ValidationError(f'Window cannot exceed {MAX_WINDOW_DAYS} days')
    return start, end


@availability_bp.route('/status', methods=['GET'])
def property_status():
    """Current global property status"""
    return jsonify({'property_status': PropertyStatusService.get_status().to_dict()}), 200


@availability_bp.route('/unavailable-dates', methods=['GET'])
def unavailable_dates():
    """Unavailable days within a window (defaults to the next year)"""
    booking_type = _booking_type(request.args.get('type'))
    start, end = _window()

    bookings, blocked, status = BookingService.load_availability_inputs()
    unavailable = availability.unavailable_dates(bookings, blocked)
    if booking_type == BookingType.VIEWING:
        unavailable |= availability.viewing_dates(bookings)

    return jsonify({
        'type': booking_type.value,
        'start': start.isoformat(),
        'end': end.isoformat(),
        'unavailable_dates': sorted(day.isoformat() for day in unavailable if start <= day <= end),
        'property_status': status.to_dict(),
    }), 200


@availability_bp.route('/selectable', methods=['GET'])
def selectable():
    """Whether a calendar day can be picked for a new reservation"""
    booking_type = _booking_type(request.args.get('type'))
    day = parse_day(request.args.get('date'), 'date')
    if day is None:
        raise ValidationError('date is required')

    bookings, blocked, _ = BookingService.load_availability_inputs()
    return jsonify({
        'date': day.isoformat(),
        'type': booking_type.value,
        'selectable': availability.is_date_selectable(day, booking_type, bookings, blocked),
    }), 200


@availability_bp.route('/validate', methods=['POST'])
def validate():
    """Dry-run a reservation through the availability engine without booking it"""
    candidate = BookingService.parse_reservation(get_json_body(request))
    bookings, blocked, status = BookingService.load_availability_inputs()
    result = availability.validate_reservation(
        candidate, bookings, blocked, status,
        max_guests=current_app.config.get('MAX_GUESTS', availability.MAX_GUESTS),
    )
    if not result:
        return rejection_response(result)
    return jsonify(result.to_dict()), 200
