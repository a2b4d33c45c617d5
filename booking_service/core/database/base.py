"""Declarative base and composable column mixins.

Models mix and match capabilities by inheriting from specific mixins.

Examples:
    Provider with UUID key, timestamps and soft delete:
    class Provider(Base, UUIDPKMixin, TimestampMixin, SoftDeleteMixin):
        __tablename__ = "providers"
        name: Mapped[str] = mapped_column(String(255))

    Append-only table:
    class Payment(Base, UUIDPKMixin, CreatedAtMixin):
        __tablename__ = "payments"
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Predictable constraint names for migrations and schema management
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utc_now() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base with constraint naming and automatic table names.

    Set ``__tablename__`` explicitly for plural table names; the derived
    name is only the lowercased class name.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


# ============================================================================
# Primary Key Mixins
# ============================================================================


class UUIDPKMixin:
    """UUID v4 primary key generated on the Python side.

    Python-side generation keeps Core ``INSERT ... RETURNING`` statements
    portable between PostgreSQL and SQLite.
    """

    __allow_unmapped__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        comment="UUID v4 primary key",
    )


# ============================================================================
# Timestamp Mixins
# ============================================================================


class CreatedAtMixin:
    """Creation timestamp for append-only tables."""

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        index=True,
        comment="Timestamp of record creation",
    )


class TimestampMixin(CreatedAtMixin):
    """Creation and last-modification timestamps (UTC).

    ``updated_at`` is refreshed by the ``onupdate`` hook, which also fires
    for Core ``UPDATE`` statements issued by the repository.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
        comment="Timestamp of last update",
    )


class SoftDeleteMixin:
    """Logical deletion through a nullable ``deleted_at`` timestamp.

    Repositories configured with ``soft_delete_column="deleted_at"`` hide
    rows where it is set and expose ``soft_delete_*`` operations.
    """

    __allow_unmapped__ = True

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Timestamp of soft deletion",
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "CreatedAtMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDPKMixin",
    "utc_now",
]
