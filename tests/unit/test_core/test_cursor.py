"""Unit tests for cursor encoding."""

from __future__ import annotations

import base64
import json
import uuid
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from booking_service.core.pagination import CursorCodec
from booking_service.core.pagination.cursor import convert_cursor_values
from booking_service.features.bookings.models import Booking, BookingStatus


class TestCursorCodec:
    def test_payload_is_base64_json_array(self):
        encoded = CursorCodec.encode(["a", 1])

        assert json.loads(base64.urlsafe_b64decode(encoded)) == ["a", 1]

    def test_values_are_serialized(self):
        booking_id = uuid.uuid4()
        start = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)

        decoded = CursorCodec.decode(
            CursorCodec.encode([start, booking_id, Decimal("4.5"), BookingStatus.PENDING])
        )

        assert decoded == ["2025-01-15T10:30:00+00:00", str(booking_id), "4.5", "pending"]

    def test_create_cursor_uses_key_order(self):
        row = {"id": "b", "start_at": "a", "status": "pending"}

        assert CursorCodec.decode(CursorCodec.create_cursor(row, ["start_at", "id"])) == ["a", "b"]

    @pytest.mark.parametrize(
        "cursor",
        [
            "%%%",
            base64.urlsafe_b64encode(b"not json").decode(),
            base64.urlsafe_b64encode(b'{"id": 1}').decode(),
            base64.urlsafe_b64encode(b"\xff\xfe").decode(),
        ],
    )
    def test_decode_rejects_malformed_cursors(self, cursor):
        with pytest.raises(ValueError, match="Invalid cursor"):
            CursorCodec.decode(cursor)


class TestConvertCursorValues:
    COLUMNS = [Booking.__table__.c.start_at, Booking.__table__.c.id]

    def test_values_get_column_types(self):
        booking_id = uuid.uuid4()

        start, key = convert_cursor_values(
            ["2025-01-15T10:30:00+00:00", str(booking_id)], self.COLUMNS
        )

        assert start == datetime(2025, 1, 15, 10, 30, tzinfo=UTC)
        assert key == booking_id

    def test_wrong_arity(self):
        with pytest.raises(ValueError, match="expected 2 values"):
            convert_cursor_values(["2025-01-15T10:30:00"], self.COLUMNS)

    def test_wrong_type(self):
        with pytest.raises(ValueError, match="start_at"):
            convert_cursor_values(["yesterday", str(uuid.uuid4())], self.COLUMNS)
