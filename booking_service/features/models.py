"""Import every feature model so ``Base.metadata`` knows all tables."""

from __future__ import annotations

from booking_service.features.audits.models import AuditLog
from booking_service.features.bookings.models import Booking
from booking_service.features.payments.models import Payment
from booking_service.features.providers.models import Provider
from booking_service.features.reviews.models import Review
from booking_service.features.services.models import Service
from booking_service.features.users.models import User

__all__ = ["AuditLog", "Booking", "Payment", "Provider", "Review", "Service", "User"]
