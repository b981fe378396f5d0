"""
JSON response helpers
"""

from flask import jsonify


def rejection_response(result):
    """Serialise a rejected availability result with its HTTP status"""
    reason = result.reason
    return jsonify(reason.to_dict()), reason.status_code
