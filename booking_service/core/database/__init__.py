"""Core database package: declarative base, mixins and the persistence layer.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming
    - UUIDPKMixin: UUID v4 primary key
    - CreatedAtMixin, TimestampMixin: created_at / updated_at tracking
    - SoftDeleteMixin: deleted_at soft delete column

Persistence:
    - BaseRepository[T]: dict-in/dict-out CRUD with soft delete
    - UnitOfWork: run a closure in one transaction
    - get_transaction_session / in_transaction: ambient transaction context

Exceptions:
    - RepositoryError, NotFoundError, RepositoryConfigurationError
"""

from __future__ import annotations

from booking_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDPKMixin,
    utc_now,
)
from booking_service.core.database.exceptions import (
    NotFoundError,
    RepositoryConfigurationError,
    RepositoryError,
)
from booking_service.core.database.inspection import get_column_map, get_primary_key
from booking_service.core.database.repository import BaseRepository
from booking_service.core.database.transaction import (
    SessionProvider,
    get_transaction_session,
    in_transaction,
    session_scope,
)
from booking_service.core.database.unit_of_work import UnitOfWork

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CreatedAtMixin",
    "NotFoundError",
    "RepositoryConfigurationError",
    "RepositoryError",
    "SessionProvider",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDPKMixin",
    "UnitOfWork",
    "get_column_map",
    "get_primary_key",
    "get_transaction_session",
    "in_transaction",
    "session_scope",
    "utc_now",
]
