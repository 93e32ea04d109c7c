"""Service-layer error types.

Routers translate these into HTTP responses:
    ValidationError, ConflictError -> 400
    AuthenticationError -> 401
    NotFoundError -> 404
    PersistenceError -> 500
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""


class ValidationError(ServiceError, ValueError):
    """Request was rejected before any mutation (bad section name, bad payload)."""


class NotFoundError(ServiceError, ValueError):
    """Referenced document does not exist or is not owned by the caller."""


class ConflictError(ServiceError, ValueError):
    """Resource already exists."""


class PersistenceError(ServiceError):
    """Underlying store write failed."""


class AuthenticationError(ServiceError, ValueError):
    """Credentials were rejected."""
