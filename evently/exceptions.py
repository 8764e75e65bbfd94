"""Domain errors raised by services and mapped to HTTP responses in one place."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(AppError):
    """The write would violate a uniqueness rule (e.g. duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Missing, invalid or rejected credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """No record with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    """Unexpected failure; the message is never sent to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
