"""CLI utilities for running async operations and formatting output."""

from booking_service.cli.utils.async_runner import coro
from booking_service.cli.utils.formatters import details, error, info, success, warning

__all__ = ["coro", "details", "error", "info", "success", "warning"]
