"""Pagination errors.

``PaginationValidationError`` is a client fault (bad column, operator or
value in the query string) and renders as a 400 problem document.
``PaginationConfigError`` means a ``PaginationConfig`` is wrong, which is a
programming error.
"""

from __future__ import annotations

from typing import Any

from booking_service.core.exceptions import BadRequestException


class PaginationValidationError(BadRequestException):
    """Request asks for a column, operator or value the config does not allow.

    Example:
        raise PaginationValidationError(
            'Column "password" is not filterable',
            extra={"column": "password"},
        )
    """

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="pagination-validation-error", extra=extra)


class PaginationConfigError(Exception):
    """Invalid ``PaginationConfig`` or unsupported pagination strategy."""


__all__ = ["PaginationConfigError", "PaginationValidationError"]
