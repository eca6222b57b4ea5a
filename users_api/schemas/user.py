"""
Pydantic schemas for the /users endpoints.

These schemas define the request/response contracts for the users API.
Field names are snake_case in Python and camelCase on the wire
(firstName, isActive, createdAt, ...), via the shared alias generator.

Input normalization:
  - firstName / lastName are stripped of surrounding whitespace, then
    must be non-empty
  - email is checked for valid syntax but stored exactly as submitted
    (no case folding of the domain)
  - password is opaque and kept byte for byte, spaces included

Security boundary:
  UserView is the ONLY shape a user leaves the service in, and it declares
  no password field. to_view() reads the declared attributes from the ORM
  object, so there is no conversion path that can carry the credential.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    validate_email,
)
from pydantic.alias_generators import to_camel


def _check_email_syntax(value: str) -> str:
    # validate_email returns a normalized copy; keep the caller's spelling
    _, normalized = validate_email(value)
    # Rejects the "Name <addr>" form validate_email also accepts
    if normalized.casefold() != value.casefold():
        raise ValueError("value is not a valid email address")
    return value


Email = Annotated[
    str,
    StringConstraints(max_length=255),
    AfterValidator(_check_email_syntax),
    Field(json_schema_extra={"format": "email"}),
]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Password = Annotated[str, StringConstraints(min_length=6, max_length=255)]


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UserCreateRequest(CamelModel):
    """Request body for POST /users."""
    email: Email
    first_name: Name
    last_name: Name
    password: Password


class UserUpdateRequest(CamelModel):
    """
    Request body for PATCH /users/{id} (all fields optional).

    Email is deliberately absent: it is immutable after creation, and
    unknown keys in the body (email included) are ignored.
    """
    first_name: Name | None = None
    last_name: Name | None = None
    password: Password | None = None
    is_active: bool | None = None

    def changes(self) -> dict:
        """Fields the client actually sent with a value (null means absent)."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserView(CamelModel):
    """Public representation of a User (never includes the password)."""
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; every timestamp we store is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def to_view(user) -> UserView:
    """Project a persisted User onto its redacted public view."""
    return UserView.model_validate(user)
