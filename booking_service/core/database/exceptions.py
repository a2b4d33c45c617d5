"""Database repository exceptions.

Typed errors raised by the repository layer, independent of the HTTP layer.
``NotFoundError`` is turned into a 404 by the application's exception
handlers; the configuration error is a programming fault and surfaces as a
500.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class NotFoundError(RepositoryError):
    """Entity not found (or soft-deleted).

    Attributes:
        model_name: Name of the model class that wasn't found
        identifier: The key/value that was searched for
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!r}" for k, v in identifier.items())
        super().__init__(
            f"{model_name} not found with {id_str}",
            details={"model": model_name, **identifier},
        )

    def __repr__(self) -> str:
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


class RepositoryConfigurationError(RepositoryError):
    """Repository used in a way its configuration does not allow.

    Raised for unknown projection columns at construction time and for
    soft-delete calls on a repository without ``soft_delete_column``.
    """

    def __init__(self, model_name: str, message: str):
        self.model_name = model_name
        super().__init__(message, details={"model": model_name})


__all__ = [
    "NotFoundError",
    "RepositoryConfigurationError",
    "RepositoryError",
]
