"""
Payload parsing helpers
"""

from villa.errors import ValidationError
from villa.services.availability import normalize_day


def parse_day(value, field):
    """Parse a YYYY-MM-DD (or ISO timestamp) value, raising ValidationError on bad input"""
    try:
        return normalize_day(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a date in YYYY-MM-DD format')


def parse_int(value, field):
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')


def get_json_body(request):
    """Return the JSON object body, or an empty dict for a missing body"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
