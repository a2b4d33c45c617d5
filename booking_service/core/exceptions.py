"""Application exceptions rendered as RFC 7807 problem details."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    Every client-facing error inherits from this class. The exception
    handlers turn it into an RFC 7807 Problem Details response.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (the problem ``type`` member).
        title: Short, human-readable summary of the problem type.
        instance: URI reference for this specific occurrence.
        extra: Additional members merged into the problem document.

    Example:
        raise AppException(
            status_code=404,
            detail="Booking not found",
            type="booking-not-found",
            extra={"booking_id": "2b0c..."},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Return the reason phrase used when no title is given."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
            504: "Gateway Timeout",
        }
        return titles.get(status_code, "Error")


class BadRequestException(AppException):
    """Malformed or disallowed request input.

    Example:
        raise BadRequestException(
            detail='Column "password" is not filterable',
            extra={"column": "password"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            instance=instance,
            extra=extra,
        )


class NotFoundException(AppException):
    """Requested resource does not exist (or is soft-deleted)."""

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class ConflictException(AppException):
    """Request conflicts with the current state of a resource.

    Example:
        raise ConflictException(
            detail="A review already exists for this booking",
            extra={"booking_id": str(booking_id)},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "conflict",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Conflict",
            instance=instance,
            extra=extra,
        )


class ValidationException(AppException):
    """Semantically invalid payload that passed schema validation."""

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class ServiceUnavailableException(AppException):
    """A backing service (usually the database) is unavailable."""

    def __init__(
        self,
        detail: str,
        type: str = "service-unavailable",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=503,
            detail=detail,
            type=type,
            title="Service Unavailable",
            instance=instance,
            extra=extra,
        )


class GatewayTimeoutException(AppException):
    """Request handling exceeded the configured request timeout."""

    def __init__(
        self,
        detail: str,
        type: str = "request-timeout",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=504,
            detail=detail,
            type=type,
            title="Gateway Timeout",
            instance=instance,
            extra=extra,
        )


__all__ = [
    "AppException",
    "BadRequestException",
    "ConflictException",
    "GatewayTimeoutException",
    "NotFoundException",
    "ServiceUnavailableException",
    "ValidationException",
]
