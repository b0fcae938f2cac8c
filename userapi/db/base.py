"""
SQLAlchemy declarative base and metadata.
Challenge: Single place for table definitions and schema reconciliation.
"""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models. Metadata drives startup schema reconciliation."""

    pass


class TimestampMixin:
    """Created/updated/deleted timestamps. A non-null deleted_at marks a soft-deleted row."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
