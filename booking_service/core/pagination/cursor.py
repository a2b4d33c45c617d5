"""Cursor encoding and decoding for keyset pagination.

A cursor is the URL-safe base64 encoding of a JSON array holding the
boundary row's sort-key values, in key order. Clients treat it as opaque.

Example cursor payload (key ``start_at DESC, id ASC``):
    ["2025-01-15T10:30:00+00:00", "0b5c0b4e-8f7e-4a55-a1a4-2f4d9a0c2c11"]
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

from booking_service.core.pagination.query_builder import coerce_value

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import Column


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode([row["start_at"], row["id"]])
        values = CursorCodec.decode(cursor)  # ["2025-01-15T10:30:00+00:00", "0b5c..."]
    """

    @staticmethod
    def encode(values: Sequence[Any]) -> str:
        """Encode sort-key values to an opaque string."""
        payload = json.dumps(
            [CursorCodec._serialize_value(value) for value in values],
            separators=(",", ":"),
        )
        return base64.urlsafe_b64encode(payload.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> list[Any]:
        """Decode a cursor string to its JSON values.

        Raises:
            ValueError: If the cursor is not base64 JSON holding an array.
        """
        try:
            payload = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"Invalid cursor: {e}"
            raise ValueError(msg) from e
        if not isinstance(payload, list):
            msg = "Invalid cursor: payload is not an array"
            raise ValueError(msg)
        return payload

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (UUID, Decimal)):
            return str(value)
        if isinstance(value, Enum):
            return value.value
        return value

    @staticmethod
    def create_cursor(row: Mapping[str, Any], key: Sequence[str]) -> str:
        """Create a cursor from a result row's key columns."""
        return CursorCodec.encode([row[name] for name in key])


def convert_cursor_values(
    values: Sequence[Any], columns: Sequence[Column[Any]]
) -> list[Any]:
    """Coerce decoded cursor values back to their columns' Python types.

    Raises:
        ValueError: Wrong number of values, or a value of the wrong type.
    """
    if len(values) != len(columns):
        msg = f"Invalid cursor: expected {len(columns)} values, got {len(values)}"
        raise ValueError(msg)
    converted = []
    for column, value in zip(columns, values, strict=True):
        try:
            converted.append(coerce_value(column, value))
        except (TypeError, ValueError) as e:
            msg = f"Invalid cursor value for {column.key}: {value!r}"
            raise ValueError(msg) from e
    return converted


__all__ = ["CursorCodec", "convert_cursor_values"]
