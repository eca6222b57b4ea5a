"""
User model — the persisted account record.

Each User is one row in the `users` table. The row is the only place the
password lives: nothing outside the repository reads it, and the response
schema (UserView) has no field to carry it.

Identity and uniqueness:
  - id is a UUID generated on insert and never changes
  - email carries a UNIQUE index, so the database itself rejects a second
    account with the same address even if two creates race past the
    directory's lookup

The password is stored exactly as supplied. Hashing policy belongs to
whichever service owns authentication; this service only keeps the value.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from users_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    # Primary key: UUID provides globally unique IDs without sequential guessing
    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    # Must be unique and indexed for the lookup done on every create
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    # Write-only credential (see module docstring)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        # Keep the credential out of tracebacks and debug logs
        return f"<User id={self.id} email={self.email!r}>"
