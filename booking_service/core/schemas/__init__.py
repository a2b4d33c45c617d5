"""Shared pydantic schemas."""

from __future__ import annotations

from .base import CreatedAtMixin, CustomBase, TimestampedResponse
from .problem_details import ProblemDetails, ValidationErrorItem, ValidationProblemDetails

__all__ = [
    "CreatedAtMixin",
    "CustomBase",
    "ProblemDetails",
    "TimestampedResponse",
    "ValidationErrorItem",
    "ValidationProblemDetails",
]
