"""
FastAPI dependencies for the users API.

The user directory is built explicitly for each request from that
request's database session:

  get_db (AsyncSession)
      └── get_user_directory (UserDirectory over a UserRepository)

Route handlers declare `directory: UserDirectory = Depends(get_user_directory)`.
Tests can swap the whole directory (or just the session, via get_db) with
app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.database import get_db
from users_api.repositories.user_repository import UserRepository
from users_api.services.user_directory import UserDirectory


async def get_user_directory(
    db: AsyncSession = Depends(get_db),
) -> UserDirectory:
    """Construct the user directory over the request-scoped session."""
    return UserDirectory(UserRepository(db))
