"""
User Service
Accounts, credentials and admin user management
"""

import re

from flask import current_app

from extensions import db
from villa.errors import ConflictError, NotFoundError, PermissionDenied, ValidationError
from villa.models.user import User

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 8


def _clean_email(email):
    email = (email or '').strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError('A valid email is required')
    return email


class UserService:
    """Authentication provider and user administration"""

    @staticmethod
    def register(name, email, password, phone=None):
        email = _clean_email(email)
        if not name or not name.strip():
            raise ValidationError('name is required')
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

        if User.query.filter_by(email=email).first():
            raise ConflictError('Email already in use')

        user = User(email=email, password=password, name=name.strip(), phone=phone or None)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f'Registered user {user.id} <{user.email}>')
        return user

    @staticmethod
    def authenticate(email, password):
        """Return the user for valid credentials, None otherwise"""
        user = User.query.filter_by(email=(email or '').strip().lower()).first()
        if not user or not user.check_password(password or ''):
            return None
        if not user.is_active:
            raise PermissionDenied('Account is deactivated')

        user.update_last_login()
        return user

    @staticmethod
    def get_user(user_id):
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError('User not found')
        return user

    @staticmethod
    def update_profile(user, data):
        if 'name' in data:
            if not data['name'] or not str(data['name']).strip():
                raise ValidationError('name cannot be empty')
            user.name = str(data['name']).strip()

        if 'email' in data:
            email = _clean_email(data['email'])
            existing = User.query.filter_by(email=email).first()
            if existing and existing.id != user.id:
                raise ConflictError('Email already in use')
            user.email = email

        if 'phone' in data:
            user.phone = data['phone'] or None

        db.session.commit()
        return user

    @staticmethod
    def change_password(user, current_password, new_password):
        if not current_password or not new_password:
            raise ValidationError('Current and new password are required')
        if not user.check_password(current_password):
            raise PermissionDenied('Current password is incorrect')
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

        user.set_password(new_password)
        db.session.commit()

    @staticmethod
    def mark_notifications_seen(user):
        """Clear the booking-update flag, and the general flag it raised"""
        if user.has_booking_updates or user.has_notifications:
            if user.has_booking_updates:
                user.has_notifications = False
            user.has_booking_updates = False
            db.session.commit()
        return user

    @staticmethod
    def toggle_admin(user, actor):
        if user.id == actor.id:
            raise PermissionDenied('Cannot change your own admin privileges')

        user.is_admin = not user.is_admin
        db.session.commit()

        current_app.logger.info(f'Admin {actor.id} set is_admin={user.is_admin} on user {user.id}')
        return user

    @staticmethod
    def toggle_active(user, actor):
        if user.id == actor.id:
            raise PermissionDenied('Cannot deactivate your own account')

        user.is_active = not user.is_active
        db.session.commit()

        current_app.logger.info(f'Admin {actor.id} set user {user.id} {user.status}')
        return user

    @staticmethod
    def filter_users(search=None, role=None, status=None):
        query = User.query

        if search:
            pattern = f'%{search.strip()}%'
            query = query.filter(db.or_(User.name.ilike(pattern), User.email.ilike(pattern)))
        if role and role != 'all':
            if role not in ('admin', 'user'):
                raise ValidationError('role must be one of: all, admin, user')
            query = query.filter(User.is_admin.is_(role == 'admin'))
        if status and status != 'all':
            if status not in ('active', 'inactive'):
                raise ValidationError('status must be one of: all, active, inactive')
            query = query.filter(User.is_active.is_(status == 'active'))

        return query.order_by(User.name).all()

    @staticmethod
    def user_stats():
        return {
            'total_users': User.query.count(),
            'admin_users': User.query.filter_by(is_admin=True).count(),
            'active_users': User.query.filter_by(is_active=True).count(),
        }
