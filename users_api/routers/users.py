"""
Users router — user account management endpoints.

Endpoints:
  POST   /users        — Create a user
  GET    /users        — List all users
  GET    /users/{id}   — Get one user
  PATCH  /users/{id}   — Partially update a user
  DELETE /users/{id}   — Remove a user

The {id} path parameter is typed as a UUID, so a malformed id is rejected
by FastAPI (400, via the validation handler) before the directory runs.

Logging: each handler writes one line naming the operation and the id.
Request bodies are never logged, since create and update bodies may carry
a password.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, status

from users_api.dependencies import get_user_directory
from users_api.schemas.user import UserCreateRequest, UserUpdateRequest, UserView
from users_api.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=UserView,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    request: UserCreateRequest,
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Register a new user.

    - **email**: Must be a valid email format and not already registered
    - **firstName** / **lastName**: Required, 1-100 characters
    - **password**: Minimum 6 characters; never returned
    """
    logger.info("Creating user...")
    return await directory.create(request)


@router.get(
    "",
    response_model=list[UserView],
    summary="List all users",
)
async def list_users(
    directory: UserDirectory = Depends(get_user_directory),
):
    """Return every user. No ordering is guaranteed."""
    logger.info("Finding all users...")
    return await directory.find_all()


@router.get(
    "/{user_id}",
    response_model=UserView,
    summary="Get one user",
)
async def get_user(
    user_id: uuid.UUID,
    directory: UserDirectory = Depends(get_user_directory),
):
    logger.info("Finding one user with id: %s", user_id)
    return await directory.find_one(user_id)


@router.patch(
    "/{user_id}",
    response_model=UserView,
    summary="Update a user",
)
async def update_user(
    user_id: uuid.UUID,
    updates: UserUpdateRequest,
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Update a user's profile.

    Only provided fields are updated; omitted fields remain unchanged.
    The email cannot be changed: an `email` key in the body is ignored.
    """
    logger.info("Updating one user with id: %s", user_id)
    return await directory.update(user_id, updates)


@router.delete(
    "/{user_id}",
    response_model=UserView,
    summary="Remove a user",
)
async def remove_user(
    user_id: uuid.UUID,
    directory: UserDirectory = Depends(get_user_directory),
):
    """Delete a user and return the record as it was before deletion."""
    logger.info("Deleting user with id: %s", user_id)
    return await directory.remove(user_id)
