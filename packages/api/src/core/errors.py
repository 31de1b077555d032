# This project was developed with assistance from AI tools.
"""Service-layer error taxonomy.

Services raise these; ``main.py`` translates them into the
``{"error": message}`` envelope with the matching HTTP status.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials"


class AccessDenied(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
