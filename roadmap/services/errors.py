"""
Resource Errors

Typed failures surfaced by the resource access service. Every error carries a
stable code, an HTTP-equivalent status and a message that is safe to show to
callers. Storage and transport details never go into `message`.
"""


class ResourceError(Exception):
    """Base class for resource access failures."""

    code = 'RESOURCE_ERROR'
    http_status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        """Convert to the JSON error envelope used by the API."""
        return {'error': {'code': self.code, 'message': self.message}}


class ValidationError(ResourceError):
    """Caller input defect. Raised before any storage call."""

    code = 'VALIDATION_ERROR'
    http_status = 400

    def __init__(self, message, fields=()):
        super().__init__(message)
        self.fields = list(fields)

    @classmethod
    def missing(cls, fields):
        return cls(f"Missing required field(s): {', '.join(fields)}", fields)

    @classmethod
    def not_text(cls, fields):
        return cls(f"Field(s) must be text: {', '.join(fields)}", fields)

    def to_response(self):
        payload = super().to_response()
        payload['error']['fields'] = self.fields
        return payload


class NotFound(ResourceError):
    """No resource matches the requested key."""

    code = 'NOT_FOUND'
    http_status = 404

    def __init__(self, kind, key):
        super().__init__(f'{kind} not found')
        self.kind = kind
        self.key = key


class Unauthorized(ResourceError):
    """Write attempted by a caller without verified admin access."""

    code = 'UNAUTHORIZED'
    http_status = 401

    def __init__(self, message='Unauthorized'):
        super().__init__(message)


class BackendError(ResourceError):
    """Storage or transport fault. The cause is logged, never returned."""

    code = 'BACKEND_ERROR'
    http_status = 500


class AuthorizationFailure(Exception):
    """Guard-only failure; always resolved by a redirect to the login page."""
