"""
User model - the single persisted entity.
"""

from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from userapi.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User entity. Password is stored as given; it never leaves through a response."""

    __tablename__ = "users"
    __table_args__ = (
        # Unique among live rows only, so a soft-deleted email can be registered again
        Index(
            "ix_users_email",
            "email",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
