"""
User repository — the persistence collaborator behind the user directory.

A narrow set of storage operations over an AsyncSession:

    find_by_email(email)   -> User | None
    find_by_id(user_id)    -> User | None
    find_all()             -> list[User]
    insert(fields)         -> User
    replace(user_id, fields) -> User
    delete(user_id)        -> None

The repository flushes but never commits. The session's owner (get_db for
HTTP requests, the test fixtures in tests) decides whether the unit of
work is committed or rolled back.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.exceptions import DuplicateEmailError, UserNotFoundError
from users_api.models.user import User

logger = logging.getLogger(__name__)

# How each backend names the email uniqueness guard in its error text:
# SQLite reports the column, PostgreSQL and MySQL the index.
EMAIL_CONSTRAINT_MARKERS = ("users.email", "ix_users_email")


def _is_email_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in EMAIL_CONSTRAINT_MARKERS)


class UserRepository:
    """Repository for rows of the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_all(self) -> list[User]:
        result = await self.db.execute(select(User))
        return list(result.scalars().all())

    async def insert(self, fields: dict[str, Any]) -> User:
        """
        Insert a new user row and return it with id and timestamps assigned.

        The UNIQUE index on email is the authoritative uniqueness guard: a
        concurrent create that slipped past the directory's lookup lands
        here as an IntegrityError and is reported as DuplicateEmailError.
        Any other integrity failure (NOT NULL, length, ...) is re-raised
        unchanged and ends up as a 500.
        """
        user = User(**fields)
        self.db.add(user)
        # The caller must roll the session back after a failure here; get_db
        # does so for every exception.
        try:
            await self.db.flush()
        except IntegrityError as exc:
            if not _is_email_conflict(exc):
                raise
            logger.info("Insert rejected by the store: %s", exc.orig)
            raise DuplicateEmailError(fields["email"]) from exc
        return user

    async def replace(self, user_id: uuid.UUID, fields: dict[str, Any]) -> User:
        """
        Overwrite the given fields of an existing row.

        Raises:
            UserNotFoundError: If the row is gone (deleted concurrently
                between the caller's lookup and this write).
        """
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        for field, value in fields.items():
            setattr(user, field, value)
        await self.db.flush()
        return user

    async def delete(self, user_id: uuid.UUID) -> None:
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        await self.db.delete(user)
        await self.db.flush()
