"""
Bookings Blueprint
"""

from flask import Blueprint, jsonify, request

from villa.services.booking_service import BookingService
from villa.utils.decorators import get_current_user, login_required
from villa.utils.parsing import get_json_body
from villa.utils.responses import rejection_response

bookings_bp = Blueprint('bookings', __name__)


@bookings_bp.route('/', methods=['POST'])
@login_required()
def create_booking():
    """Create a new stay or viewing booking"""
    user = get_current_user()
    data = get_json_body(request)

    if 'type' not in data:
        return jsonify({'error': 'type is required'}), 400

    result, booking = BookingService.create_booking(user, data)
    if not result:
        return rejection_response(result)

    message = 'Stay booked successfully' if booking.type.value == 'stay' else 'Viewing scheduled successfully'
    return jsonify({
        'message': message,
        'booking': booking.to_dict()
    }), 201


@bookings_bp.route('/quote', methods=['GET'])
def quote():
    """Price breakdown for a stay"""
    return jsonify(BookingService.quote_stay(
        request.args.get('check_in'),
        request.args.get('check_out'),
    )), 200


@bookings_bp.route('/my-bookings', methods=['GET'])
@login_required()
def get_my_bookings():
    """Get current user's bookings (all bookings for administrators)"""
    bookings = BookingService.get_user_bookings(
        get_current_user(),
        search=request.args.get('search'),
        status=request.args.get('status'),
        type=request.args.get('type'),
    )

    return jsonify({
        'bookings': [booking.to_dict() for booking in bookings]
    }), 200


@bookings_bp.route('/<int:booking_id>', methods=['GET'])
@login_required()
def get_booking(booking_id):
    """Get booking details"""
    booking = BookingService.get_booking(booking_id, get_current_user())

    return jsonify({
        'booking': booking.to_dict(include_user=True)
    }), 200


@bookings_bp.route('/<int:booking_id>/cancel', methods=['POST'])
@login_required()
def cancel_booking(booking_id):
    """Cancel a booking"""
    user = get_current_user()
    booking = BookingService.get_booking(booking_id, user)
    BookingService.cancel_booking(booking, user)

    return jsonify({
        'message': 'Booking cancelled successfully',
        'booking': booking.to_dict()
    }), 200
