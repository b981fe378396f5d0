"""
Admin Routes
"""

from datetime import date, timedelta

from flask import Blueprint, jsonify, request

from villa.models.booking import Booking
from villa.services.booking_service import BookingService
from villa.services.property_status_service import PropertyStatusService
from villa.services.user_service import UserService
from villa.utils.decorators import admin_required, get_current_user
from villa.utils.parsing import get_json_body, parse_day
from villa.utils.responses import rejection_response

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/dashboard', methods=['GET'])
@admin_required()
def admin_dashboard():
    """Get admin dashboard statistics"""
    statistics = BookingService.booking_stats()
    statistics.update(UserService.user_stats())

    recent_bookings = Booking.query.order_by(Booking.created_at.desc(), Booking.id.desc()).limit(5).all()

    return jsonify({
        'statistics': statistics,
        'property_status': PropertyStatusService.get_status().to_dict(),
        'recent_bookings': [booking.to_dict() for booking in recent_bookings]
    }), 200


# ----------------------------------------------------------------------
# Bookings
# ----------------------------------------------------------------------
@admin_bp.route('/bookings', methods=['GET'])
@admin_required()
def get_all_bookings():
    """Get all bookings, filtered by search term, status and type"""
    bookings = BookingService.filter_bookings(
        search=request.args.get('search'),
        status=request.args.get('status'),
        type=request.args.get('type'),
    )

    return jsonify({
        'bookings': [booking.to_dict(include_user=True) for booking in bookings],
        'total': len(bookings)
    }), 200


@admin_bp.route('/bookings/<int:booking_id>', methods=['PUT'])
@admin_required()
def update_booking(booking_id):
    """Edit any field of a booking (status, dates, guests, time, notes)"""
    actor = get_current_user()
    booking = BookingService.get_booking(booking_id, actor)

    result, booking = BookingService.update_booking(booking, get_json_body(request), actor)
    if not result:
        return rejection_response(result)

    return jsonify({
        'message': 'The booking has been successfully updated.',
        'booking': booking.to_dict(include_user=True)
    }), 200


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------
@admin_bp.route('/users', methods=['GET'])
@admin_required()
def get_all_users():
    """Get all users (admin only)"""
    users = UserService.filter_users(
        search=request.args.get('search'),
        role=request.args.get('role'),
        status=request.args.get('status'),
    )

    return jsonify({
        'users': [user.to_dict(include_email=True) for user in users],
        'statistics': UserService.user_stats()
    }), 200


@admin_bp.route('/users/<int:user_id>/toggle-admin', methods=['POST'])
@admin_required()
def toggle_admin(user_id):
    """Grant or revoke admin privileges"""
    user = UserService.toggle_admin(UserService.get_user(user_id), get_current_user())
    role = 'an admin' if user.is_admin else 'a regular user'

    return jsonify({
        'message': f'{user.name} is now {role}.',
        'user': user.to_dict(include_email=True)
    }), 200


@admin_bp.route('/users/<int:user_id>/toggle-status', methods=['POST'])
@admin_required()
def toggle_status(user_id):
    """Activate or deactivate a user"""
    user = UserService.toggle_active(UserService.get_user(user_id), get_current_user())

    return jsonify({
        'message': f'{user.name} is now {user.status}.',
        'user': user.to_dict(include_email=True)
    }), 200


# ----------------------------------------------------------------------
# Availability
# ----------------------------------------------------------------------
@admin_bp.route('/blocked-dates', methods=['GET'])
@admin_required()
def get_blocked_dates():
    """Get all blocked dates"""
    blocked_dates = PropertyStatusService.list_blocked_dates()
    return jsonify({'blocked_dates': [bd.to_dict() for bd in blocked_dates]}), 200


@admin_bp.route('/blocked-dates', methods=['POST'])
@admin_required()
def block_date():
    """Block a date"""
    data = get_json_body(request)
    if not data.get('date'):
        return jsonify({'error': 'date required'}), 400

    blocked = PropertyStatusService.add_blocked_date(
        data['date'],
        reason=data.get('reason'),
        note=data.get('note'),
    )
    return jsonify({'message': 'Date blocked', 'blocked_date': blocked.to_dict()}), 201


@admin_bp.route('/blocked-dates/<int:blocked_id>', methods=['DELETE'])
@admin_required()
def unblock_date(blocked_id):
    """Unblock a date"""
    blocked = PropertyStatusService.remove_blocked_date(blocked_id)
    return jsonify({'message': 'Date unblocked', 'blocked_date': blocked.to_dict()}), 200


@admin_bp.route('/property-status', methods=['GET'])
@admin_required()
def get_property_status():
    return jsonify({'property_status': PropertyStatusService.get_status().to_dict()}), 200


@admin_bp.route('/property-status', methods=['PUT'])
@admin_required()
def update_property_status():
    """Set the overall availability status for the property"""
    data = get_json_body(request)
    if not data.get('type'):
        return jsonify({'error': 'type required'}), 400

    status = PropertyStatusService.update_status(data['type'], data.get('reason'))
    return jsonify({
        'message': 'Property status updated',
        'property_status': status.to_dict()
    }), 200


@admin_bp.route('/calendar', methods=['GET'])
@admin_required()
def calendar():
    """Booked and blocked days in a window (defaults to the next 90 days)"""
    start = parse_day(request.args.get('start'), 'start') or date.today()
    end = parse_day(request.args.get('end'), 'end') or start + timedelta(days=90)
    return jsonify(PropertyStatusService.calendar(start, end)), 200
