"""Error types raised by services and routes.

Every error knows its HTTP status and JSON body; the handler registered in
create_app renders them, so routes just raise.
"""


class ProperliaError(Exception):
    """Base exception for the Properlia backend."""
    status_code = 500

    def __init__(self, message='Internal error'):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ProperliaError):
    """One or more field-level violations. Carries all of them."""
    status_code = 422

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors) or 'Validation failed')

    def to_dict(self):
        return {'errors': self.errors}


class ParameterMissing(ProperliaError):
    """Required request root key is absent or empty."""
    status_code = 400

    def __init__(self, param):
        self.param = param
        super().__init__(f'param is missing or the value is empty: {param}')


class BadRequest(ProperliaError):
    status_code = 400


class NotFound(ProperliaError):
    status_code = 404

    def __init__(self, message='Not found'):
        super().__init__(message)


class Conflict(ProperliaError):
    """Delete blocked by dependent properties."""
    status_code = 422

    def __init__(self, message, dependent_count):
        super().__init__(message)
        self.dependent_count = dependent_count

    def to_dict(self):
        return {'error': self.message, 'properties_count': self.dependent_count}


class AuthError(ProperliaError):
    status_code = 401

    def __init__(self, message='Unauthorized - Invalid or missing token'):
        super().__init__(message)


class ExternalServiceError(ProperliaError):
    """The transactional email API failed or is not configured."""
    status_code = 502
