from datetime import date, timedelta

import pytest
from flask_jwt_extended import create_access_token

from extensions import db
from villa import create_app
from villa.services.user_service import UserService


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def guest(app):
    return UserService.register(
        name='John Doe',
        email='user@example.com',
        password='password123',
        phone='+1 (555) 123-4567',
    )


@pytest.fixture
def other_guest(app):
    return UserService.register(name='Jane Roe', email='jane@example.com', password='password123')


@pytest.fixture
def admin(app):
    user = UserService.register(name='Admin User', email='admin@example.com', password='adminpass1')
    user.is_admin = True
    db.session.commit()
    return user


def _headers(user):
    return {'Authorization': f'Bearer {create_access_token(identity=str(user.id))}'}


@pytest.fixture
def guest_headers(guest):
    return _headers(guest)


@pytest.fixture
def other_headers(other_guest):
    return _headers(other_guest)


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def future():
    """A day far enough ahead that no test trips over 'today'"""
    return date.today() + timedelta(days=60)
