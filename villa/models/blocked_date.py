from extensions import db
from datetime import datetime


class BlockedDate(db.Model):
    """Dates when the property cannot be booked"""
    __tablename__ = 'blocked_dates'

    id = db.Column(db.Integer, primary_key=True)
    blocked_date = db.Column(db.Date, nullable=False, unique=True, index=True)
    reason = db.Column(db.String(50), nullable=False, default='maintenance')
    note = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def date(self):
        return self.blocked_date

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.blocked_date.isoformat(),
            'reason': self.reason,
            'note': self.note,
        }

    def __repr__(self):
        return f'<BlockedDate {self.blocked_date} ({self.reason})>'
