"""
Authentication Routes
"""

from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, create_refresh_token

from extensions import limiter
from villa.services.user_service import UserService
from villa.utils.decorators import get_current_user, login_required
from villa.utils.parsing import get_json_body

auth_bp = Blueprint('auth', __name__)


def _token_response(user, message, status_code):
    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={'is_admin': user.is_admin}
    )
    refresh_token = create_refresh_token(identity=str(user.id))

    return jsonify({
        'message': message,
        'user': user.to_dict(include_email=True),
        'access_token': access_token,
        'refresh_token': refresh_token
    }), status_code


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per hour")
def register():
    """Register a new user"""
    data = get_json_body(request)

    # Validate required fields
    required_fields = ['name', 'email', 'password']
    for field in required_fields:
        if field not in data:
            return jsonify({'error': f'{field} is required'}), 400

    user = UserService.register(
        name=data['name'],
        email=data['email'],
        password=data['password'],
        phone=data.get('phone'),
    )
    return _token_response(user, 'Your account has been created', 201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("50 per hour")
def login():
    """Login user"""
    data = get_json_body(request)

    if 'email' not in data or 'password' not in data:
        return jsonify({'error': 'Email and password are required'}), 400

    user = UserService.authenticate(data['email'], data['password'])
    if not user:
        return jsonify({'error': 'Invalid email or password'}), 401

    return _token_response(user, f'Welcome back, {user.name}', 200)


@auth_bp.route('/me', methods=['GET'])
@login_required()
def me():
    """Get the signed-in user"""
    return jsonify({'user': get_current_user().to_dict(include_email=True)}), 200
