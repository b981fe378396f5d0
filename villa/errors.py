"""
Service-layer exceptions

Routes translate these into JSON error responses.
"""


class ServiceError(Exception):
    """Base class for expected, user-facing failures"""
    status_code = 400

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        data = {'error': self.message}
        data.update(self.details)
        return data


class ValidationError(ServiceError):
    """Raised when incoming data fails validation"""
    status_code = 400


class PermissionDenied(ServiceError):
    """Raised when a user action is not permitted"""
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """Raised when a change would collide with existing state"""
    status_code = 409
