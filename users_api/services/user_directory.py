"""
User directory — business rules for the user lifecycle.

This module contains the core user logic, separated from HTTP concerns.
The router calls these methods and FastAPI renders the results; domain
failures are raised as exceptions from users_api.exceptions and turned
into responses by the registered handlers.

Rules enforced here:
  1. Email is unique: create looks the address up first and refuses a
     duplicate (the store's UNIQUE index backs this up under races)
  2. Email and id never change: update always keeps the stored email,
     whatever the command carries
  3. PATCH semantics: fields absent from an update keep their value
  4. Redaction: every method returns UserView, produced by to_view()

The directory holds no state of its own. It is constructed with its
persistence collaborator, usually one UserRepository per request:

    directory = UserDirectory(UserRepository(db))
    view = await directory.find_one(user_id)
"""

import logging
import uuid
from datetime import datetime, timezone

from users_api.exceptions import DuplicateEmailError, UserNotFoundError
from users_api.repositories.user_repository import UserRepository
from users_api.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserView,
    to_view,
)

logger = logging.getLogger(__name__)


class UserDirectory:
    """Create, list, fetch, update and remove users."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create(self, command: UserCreateRequest) -> UserView:
        """
        Register a new user.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        existing = await self.repository.find_by_email(command.email)
        if existing is not None:
            raise DuplicateEmailError(command.email)

        user = await self.repository.insert(
            {
                "email": command.email,
                "first_name": command.first_name,
                "last_name": command.last_name,
                "password": command.password,
                "is_active": True,
            }
        )
        logger.info("Created user %s", user.id)
        return to_view(user)

    async def find_all(self) -> list[UserView]:
        """All users, in whatever order the store returns them."""
        users = await self.repository.find_all()
        return [to_view(user) for user in users]

    async def find_one(self, user_id: uuid.UUID) -> UserView:
        """
        Fetch one user by id.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return to_view(user)

    async def update(self, user_id: uuid.UUID, command: UserUpdateRequest) -> UserView:
        """
        Apply a partial update and return the updated user.

        The current record is read through find_one, i.e. as its redacted
        view. Because that view has no password, the stored password is only
        rewritten when the command carries a new one.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        current = await self.find_one(user_id)
        changes = command.changes()

        merged = {
            "first_name": current.first_name,
            "last_name": current.last_name,
            "is_active": current.is_active,
            **changes,
        }
        # Email is immutable, whatever the caller sent
        merged["email"] = current.email
        merged["updated_at"] = datetime.now(timezone.utc)

        user = await self.repository.replace(user_id, merged)
        logger.info("Updated user %s (fields: %s)", user_id, ", ".join(sorted(changes)))
        return to_view(user)

    async def remove(self, user_id: uuid.UUID) -> UserView:
        """
        Delete a user and return the record as it was just before deletion.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        removed = await self.find_one(user_id)
        await self.repository.delete(user_id)
        logger.info("Removed user %s", user_id)
        return removed
