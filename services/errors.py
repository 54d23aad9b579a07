"""Domain errors raised by the service layer and mapped to HTTP responses."""
from __future__ import annotations


class ServiceError(Exception):
    """Base class for expected, caller-facing service failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class InvalidStateError(ServiceError):
    status_code = 400


class ValidationError(ServiceError):
    status_code = 422


class ForbiddenError(ServiceError):
    status_code = 403


class ServiceUnavailableError(ServiceError):
    status_code = 503
