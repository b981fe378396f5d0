"""
Users Blueprint
"""

from flask import Blueprint, jsonify, request

from villa.services.user_service import UserService
from villa.utils.decorators import get_current_user, login_required
from villa.utils.parsing import get_json_body

users_bp = Blueprint('users', __name__)


@users_bp.route('/me', methods=['PUT'])
@login_required()
def update_profile():
    """Update current user profile"""
    data = get_json_body(request)
    allowed_fields = {'name', 'email', 'phone'}
    user = UserService.update_profile(
        get_current_user(),
        {key: value for key, value in data.items() if key in allowed_fields}
    )

    return jsonify({
        'message': 'Profile updated successfully',
        'user': user.to_dict(include_email=True)
    }), 200


@users_bp.route('/me/change-password', methods=['POST'])
@login_required()
def change_password():
    """Change user password"""
    data = get_json_body(request)
    UserService.change_password(
        get_current_user(),
        data.get('current_password'),
        data.get('new_password'),
    )

    return jsonify({'message': 'Password changed successfully'}), 200


@users_bp.route('/me/notifications/seen', methods=['POST'])
@login_required()
def mark_notifications_seen():
    """Clear the booking-update notification flags"""
    user = UserService.mark_notifications_seen(get_current_user())
    return jsonify({'user': user.to_dict(include_email=True)}), 200
