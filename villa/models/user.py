"""
User Model
"""

from extensions import db, bcrypt
from datetime import datetime


class User(db.Model):
    """Guest or administrator account"""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(30))

    # Role and status
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Raised when an administrator changes one of the user's bookings
    has_notifications = db.Column(db.Boolean, default=False, nullable=False)
    has_booking_updates = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    # Relationships
    bookings = db.relationship('Booking', backref='user', lazy='dynamic')

    def __init__(self, email, password, name, **kwargs):
        """Initialize user with hashed password"""
        self.email = email.strip().lower()
        self.set_password(password)
        self.name = name

        # Handle optional fields
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Verify password against hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    def update_last_login(self):
        """Update last login timestamp"""
        self.last_login = datetime.utcnow()
        db.session.commit()

    @property
    def status(self):
        return 'active' if self.is_active else 'inactive'

    def to_dict(self, include_email=False):
        """Convert user to dictionary"""
        data = {
            'id': self.id,
            'name': self.name,
            'is_admin': self.is_admin,
            'status': self.status,
            'has_notifications': self.has_notifications,
            'has_booking_updates': self.has_booking_updates,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

        if include_email:
            data['email'] = self.email
            data['phone'] = self.phone
            data['last_login'] = self.last_login.isoformat() if self.last_login else None

        return data

    def __repr__(self):
        return f'<User {self.email}>'
