"""
Application error taxonomy.

Each error carries the HTTP status code the API layer answers with.
"""


class CineRankError(Exception):
    """Base class for all application errors."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(CineRankError):
    """A movie, user or review row does not exist."""

    status_code = 404


class InvalidInputError(CineRankError, ValueError):
    """Malformed or out-of-range client input."""

    status_code = 400


class UnauthenticatedError(CineRankError):
    """No valid session, or the session's user no longer exists."""

    status_code = 401


class ForbiddenError(CineRankError):
    """Authenticated user lacks the required role."""

    status_code = 403


class ConstraintViolationError(CineRankError):
    """Unique or foreign key constraint rejected a write."""

    status_code = 409


class SessionNotFoundError(CineRankError):
    """Session token is unknown or expired."""

    status_code = 401
