"""End-to-end tests of the REST API over an in-memory database."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from booking_service.features.bookings.models import BookingStatus
from booking_service.features.payments.models import PaymentStatus
from booking_service.features.payments.repository import PaymentRepository
from booking_service.features.services.models import ServiceStatus
from tests.utils import create_bookings, create_service, create_users

API = "/api/v1"


# ──────────────────────────────────────────────────────────────
# Health
# ──────────────────────────────────────────────────────────────


async def test_liveness(client):
    response = await client.get(f"{API}/health/live")

    assert response.status_code == 200
    assert response.json()["alive"] is True


async def test_readiness(client):
    response = await client.get(f"{API}/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": True}


# ──────────────────────────────────────────────────────────────
# Users
# ──────────────────────────────────────────────────────────────


class TestUsers:
    async def test_offset_page_shape(self, client, database):
        await create_users(database, 25)

        response = await client.get(f"{API}/users", params={"page": 2, "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 10
        assert body["meta"] == {
            "page": 2,
            "limit": 10,
            "itemCount": 25,
            "pageCount": 3,
            "hasPreviousPage": True,
            "hasNextPage": True,
        }
        assert all("password" not in row for row in body["data"])

    async def test_select_returns_only_requested_columns(self, client, database):
        await create_users(database, 3)

        response = await client.get(f"{API}/users", params={"select": "id,email"})

        assert response.status_code == 200
        assert all(set(row) == {"id", "email"} for row in response.json()["data"])

    async def test_invalid_filter_is_a_bad_request(self, client):
        response = await client.get(f"{API}/users", params={"filter.password": "$eq:x"})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["type"] == "pagination-validation-error"
        assert body["column"] == "password"

    async def test_overflowing_page_is_a_bad_request(self, client):
        response = await client.get(
            f"{API}/users", params={"page": "10000000000000000000", "limit": 10}
        )

        assert response.status_code == 400
        assert response.json()["type"] == "pagination-validation-error"

    async def test_invalid_sort_is_a_bad_request(self, client):
        response = await client.get(f"{API}/users", params={"sortBy": "password:ASC"})

        assert response.status_code == 400

    async def test_soft_delete(self, client, user):
        response = await client.delete(f"{API}/users/{user['id']}")
        assert response.status_code == 204

        assert (await client.get(f"{API}/users/{user['id']}")).status_code == 404
        assert (await client.delete(f"{API}/users/{user['id']}")).status_code == 404
        listing = (await client.get(f"{API}/users")).json()
        assert listing["meta"]["itemCount"] == 0

    async def test_get_user(self, client, user):
        response = await client.get(f"{API}/users/{user['id']}")

        assert response.status_code == 200
        assert response.json()["email"] == user["email"]
        assert "password" not in response.json()

    async def test_malformed_id_is_a_validation_error(self, client):
        response = await client.get(f"{API}/users/not-a-uuid")

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "path.user_id"


# ──────────────────────────────────────────────────────────────
# Providers and services
# ──────────────────────────────────────────────────────────────


class TestProviders:
    async def test_create_and_get(self, client, user):
        response = await client.post(
            f"{API}/providers", json={"user_id": str(user["id"]), "name": "Acme Spa"}
        )

        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Acme Spa"
        assert created["reviews_count"] == 0

        fetched = await client.get(f"{API}/providers/{created['id']}")
        assert fetched.json()["id"] == created["id"]

    async def test_unknown_user(self, client):
        response = await client.post(
            f"{API}/providers", json={"user_id": str(uuid.uuid4()), "name": "Ghost"}
        )

        assert response.status_code == 404

    async def test_soft_deleted_provider_leaves_list(self, client, provider):
        assert (await client.delete(f"{API}/providers/{provider['id']}")).status_code == 204

        listing = (await client.get(f"{API}/providers")).json()
        assert listing["data"] == []


class TestServices:
    async def test_create_defaults_to_draft(self, client, provider):
        response = await client.post(
            f"{API}/services",
            json={
                "provider_id": str(provider["id"]),
                "name": "Massage",
                "price": 7000,
                "duration": 90,
            },
        )

        assert response.status_code == 201
        assert response.json()["status"] == "draft"

    async def test_invalid_payload(self, client, provider):
        response = await client.post(
            f"{API}/services",
            json={"provider_id": str(provider["id"]), "name": "", "price": -1, "duration": 0},
        )

        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"body.name", "body.price", "body.duration"} <= fields

    async def test_filter_by_status(self, client, database, provider):
        await create_service(database, provider["id"], status=ServiceStatus.ACTIVE)
        await create_service(database, provider["id"], status=ServiceStatus.ARCHIVED)

        response = await client.get(f"{API}/services", params={"filter.status": "$eq:active"})

        assert [row["status"] for row in response.json()["data"]] == ["active"]


# ──────────────────────────────────────────────────────────────
# Bookings and audits
# ──────────────────────────────────────────────────────────────


class TestBookings:
    START = datetime(2025, 5, 1, 14, 0, tzinfo=UTC)

    def payload(self, service, user) -> dict:
        return {
            "service_id": str(service["id"]),
            "user_id": str(user["id"]),
            "start_at": self.START.isoformat(),
        }

    async def test_create_writes_booking_and_audit_entry(self, client, active_service, user):
        response = await client.post(
            f"{API}/bookings",
            json=self.payload(active_service, user),
            headers={"user-agent": "pytest-client"},
        )

        assert response.status_code == 201
        booking = response.json()
        assert booking["status"] == "pending"
        assert booking["total_price"] == active_service["price"]
        end_at = datetime.fromisoformat(booking["end_at"]).replace(tzinfo=UTC)
        assert end_at - self.START == timedelta(minutes=active_service["duration"])

        audits = (await client.get(f"{API}/audits")).json()
        assert audits["meta"]["itemCount"] == 1
        (entry,) = audits["data"]
        assert entry["action"] == "create"
        assert entry["entity_type"] == "booking"
        assert entry["entity_id"] == booking["id"]
        assert entry["user_agent"] == "pytest-client"
        assert entry["meta"]["total_price"] == active_service["price"]

    async def test_inactive_service_is_a_conflict(self, client, database, provider, user):
        draft = await create_service(database, provider["id"], status=ServiceStatus.DRAFT)

        response = await client.post(f"{API}/bookings", json=self.payload(draft, user))

        assert response.status_code == 409
        assert (await client.get(f"{API}/bookings")).json()["data"] == []
        assert (await client.get(f"{API}/audits")).json()["data"] == []

    async def test_unknown_user_writes_nothing(self, client, active_service):
        ghost = {"id": uuid.uuid4()}

        response = await client.post(f"{API}/bookings", json=self.payload(active_service, ghost))

        assert response.status_code == 404
        assert (await client.get(f"{API}/bookings")).json()["meta"]["itemCount"] == 0

    async def test_naive_start_is_rejected(self, client, active_service, user):
        payload = self.payload(active_service, user) | {"start_at": "2025-05-01T14:00:00"}

        response = await client.post(f"{API}/bookings", json=payload)

        assert response.status_code == 422

    async def test_cursor_listing(self, client, database, active_service, user):
        await create_bookings(database, active_service, user["id"], 12)

        first = (await client.get(f"{API}/bookings", params={"limit": 5})).json()
        second = (
            await client.get(
                f"{API}/bookings", params={"limit": 5, "after": first["meta"]["endCursor"]}
            )
        ).json()

        assert set(first["meta"]) == {
            "limit",
            "itemCount",
            "startCursor",
            "endCursor",
            "hasPreviousPage",
            "hasNextPage",
        }
        assert first["meta"]["hasNextPage"] is True
        assert second["meta"]["hasPreviousPage"] is True
        assert not {row["id"] for row in first["data"]} & {row["id"] for row in second["data"]}

    async def test_get_unknown_booking(self, client):
        response = await client.get(f"{API}/bookings/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["type"] == "not-found"


# ──────────────────────────────────────────────────────────────
# Payments
# ──────────────────────────────────────────────────────────────


async def test_payments_list_and_get(client, database, active_service, user):
    bookings = await create_bookings(database, active_service, user["id"], 3)
    payments = PaymentRepository(database)
    paid = await payments.create_one(
        {
            "booking_id": bookings[0]["id"],
            "amount": 5000,
            "status": PaymentStatus.PAID,
            "paid_at": datetime.now(UTC),
        }
    )
    for booking in bookings[1:]:
        await payments.create_one({"booking_id": booking["id"], "amount": 5000})

    listing = await client.get(f"{API}/payments", params={"filter.status": "$in:paid,refunded"})
    single = await client.get(f"{API}/payments/{paid['id']}")

    assert [row["id"] for row in listing.json()["data"]] == [str(paid["id"])]
    assert single.json()["status"] == "paid"
    assert (await client.get(f"{API}/payments/{uuid.uuid4()}")).status_code == 404


# ──────────────────────────────────────────────────────────────
# Reviews
# ──────────────────────────────────────────────────────────────


class TestReviews:
    @pytest.fixture
    async def completed(self, database, active_service, user):
        return await create_bookings(
            database, active_service, user["id"], 2, status=BookingStatus.COMPLETED
        )

    async def test_review_updates_provider_rating(self, client, completed, provider):
        first = await client.post(
            f"{API}/reviews",
            json={"booking_id": str(completed[0]["id"]), "rating": 5, "comment": "Great"},
        )
        second = await client.post(
            f"{API}/reviews", json={"booking_id": str(completed[1]["id"]), "rating": 4}
        )

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["user_id"] == str(completed[0]["user_id"])
        assert first.json()["service_id"] == str(completed[0]["service_id"])

        refreshed = (await client.get(f"{API}/providers/{provider['id']}")).json()
        assert refreshed["reviews_count"] == 2
        assert float(refreshed["rating"]) == 4.5

        audits = (await client.get(f"{API}/audits")).json()["data"]
        assert {entry["entity_type"] for entry in audits} == {"review"}
        assert {entry["entity_id"] for entry in audits} == {first.json()["id"], second.json()["id"]}
        assert sorted(entry["meta"]["rating"] for entry in audits) == [4, 5]

    async def test_second_review_is_a_conflict(self, client, completed):
        payload = {"booking_id": str(completed[0]["id"]), "rating": 3}

        assert (await client.post(f"{API}/reviews", json=payload)).status_code == 201
        response = await client.post(f"{API}/reviews", json=payload)

        assert response.status_code == 409

    async def test_pending_booking_cannot_be_reviewed(self, client, database, active_service, user):
        (pending,) = await create_bookings(database, active_service, user["id"], 1)

        response = await client.post(
            f"{API}/reviews", json={"booking_id": str(pending["id"]), "rating": 5}
        )

        assert response.status_code == 409

    async def test_unknown_booking(self, client):
        response = await client.post(
            f"{API}/reviews", json={"booking_id": str(uuid.uuid4()), "rating": 5}
        )

        assert response.status_code == 404

    async def test_oversized_rating_filter_is_a_bad_request(self, client):
        response = await client.get(f"{API}/reviews", params={"filter.rating": "$eq:" + "9" * 30})

        assert response.status_code == 400
        assert response.json()["column"] == "rating"

    @pytest.mark.parametrize("rating", [0, 6])
    async def test_rating_range(self, client, completed, rating):
        response = await client.post(
            f"{API}/reviews", json={"booking_id": str(completed[0]["id"]), "rating": rating}
        )

        assert response.status_code == 422

    async def test_list_filtered_by_rating(self, client, completed):
        for booking, rating in zip(completed, (2, 5), strict=True):
            await client.post(
                f"{API}/reviews", json={"booking_id": str(booking["id"]), "rating": rating}
            )

        response = await client.get(f"{API}/reviews", params={"filter.rating": "$gte:4"})

        assert [row["rating"] for row in response.json()["data"]] == [5]
