"""
Property-based tests for the user directory.

Each property is checked against generated commands instead of a few
hand-picked rows:

  - create returns a redacted view carrying the submitted email, and the
    stored password is exactly what was sent
  - a second create with the same email fails and persists nothing
  - find_all returns exactly the created users
  - find_one finds every created user and rejects unknown ids
  - update keeps id/email/created_at, applies the sent fields, keeps the
    rest, and never moves updated_at backwards
  - remove returns the removed user and makes it unfindable

Every generated example runs against its own in-memory database, so
examples cannot see each other's rows. The scenarios are plain coroutines
driven by asyncio.run, which keeps them independent of the per-test
fixtures in conftest.py.
"""

import asyncio
import uuid

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from users_api.database import Base
from users_api.exceptions import DuplicateEmailError, UserNotFoundError
from users_api.repositories.user_repository import UserRepository
from users_api.schemas.user import UserCreateRequest, UserUpdateRequest
from users_api.services.user_directory import UserDirectory


TEST_DATABASE_URL = "sqlite+aiosqlite://"

PROPERTY_SETTINGS = settings(
    max_examples=30,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Any printable text; the plain space is the only whitespace character, so
# "stripped" means the same thing to Python and to pydantic.
characters = st.characters(
    exclude_categories=("Cs", "Cc", "Z"),
    include_characters=" ",
)

# Domains in mixed case: the address must come back exactly as sent
domains = st.sampled_from(["example.com", "Example.COM", "x.io", "MAIL.X.IO"])

emails = st.builds(
    lambda local, domain: f"{local}@{domain}",
    st.uuids(version=4),
    domains,
)
names = st.text(characters, min_size=1, max_size=20).filter(lambda s: s.strip())
passwords = st.text(characters, min_size=7, max_size=20)

create_payloads = st.fixed_dictionaries(
    {
        "email": emails,
        "first_name": names,
        "last_name": names,
        "password": passwords,
    }
)

update_payloads = st.fixed_dictionaries(
    {},
    optional={
        "first_name": names,
        "last_name": names,
        "password": passwords,
        "is_active": st.booleans(),
    },
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def run_scenario(scenario) -> None:
    """Run scenario(directory, session) against a brand-new database."""

    async def runner():
        engine = create_async_engine(TEST_DATABASE_URL)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async_session = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            async with async_session() as session:
                await scenario(UserDirectory(UserRepository(session)), session)
        finally:
            await engine.dispose()

    asyncio.run(runner())


def expected_value(field: str, value):
    """What the directory should report back for a submitted field."""
    if field in ("first_name", "last_name"):
        return value.strip()
    return value


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class TestDirectoryProperties:
    """Lifecycle properties over generated commands."""

    @PROPERTY_SETTINGS
    @given(payload=create_payloads)
    def test_create_returns_redacted_view(self, payload):
        async def scenario(directory, session):
            view = await directory.create(UserCreateRequest(**payload))

            assert isinstance(view.id, uuid.UUID)
            assert view.email == payload["email"]
            assert view.first_name == expected_value("first_name", payload["first_name"])
            assert view.last_name == expected_value("last_name", payload["last_name"])
            assert view.is_active is True
            assert "password" not in view.model_dump()

            stored = await UserRepository(session).find_by_id(view.id)
            assert stored.password == payload["password"]

        run_scenario(scenario)

    @PROPERTY_SETTINGS
    @given(payload=create_payloads, second=create_payloads)
    def test_duplicate_email_persists_nothing(self, payload, second):
        async def scenario(directory, session):
            await directory.create(UserCreateRequest(**payload))

            with pytest.raises(DuplicateEmailError):
                await directory.create(
                    UserCreateRequest(**{**second, "email": payload["email"]})
                )

            users = await directory.find_all()
            assert len(users) == 1
            assert users[0].first_name == expected_value("first_name", payload["first_name"])

        run_scenario(scenario)

    @PROPERTY_SETTINGS
    @given(
        payloads=st.lists(
            create_payloads, min_size=1, max_size=5, unique_by=lambda p: p["email"]
        )
    )
    def test_find_all_returns_created_users(self, payloads):
        async def scenario(directory, session):
            for payload in payloads:
                await directory.create(UserCreateRequest(**payload))

            users = await directory.find_all()

            assert len(users) == len(payloads)
            assert sorted(user.email for user in users) == sorted(p["email"] for p in payloads)

        run_scenario(scenario)

    @PROPERTY_SETTINGS
    @given(payload=create_payloads, unknown_id=st.uuids())
    def test_find_one(self, payload, unknown_id):
        async def scenario(directory, session):
            created = await directory.create(UserCreateRequest(**payload))

            found = await directory.find_one(created.id)
            assert found.email == payload["email"]
            assert found == created

            with pytest.raises(UserNotFoundError):
                await directory.find_one(unknown_id)

        run_scenario(scenario)

    @PROPERTY_SETTINGS
    @given(payload=create_payloads, changes=update_payloads)
    def test_update_merges_sent_fields(self, payload, changes):
        async def scenario(directory, session):
            created = await directory.create(UserCreateRequest(**payload))

            updated = await directory.update(created.id, UserUpdateRequest(**changes))

            assert updated.id == created.id
            assert updated.email == created.email
            assert updated.created_at == created.created_at
            assert updated.updated_at >= created.updated_at
            for field in ("first_name", "last_name", "is_active"):
                if field in changes:
                    assert getattr(updated, field) == expected_value(field, changes[field])
                else:
                    assert getattr(updated, field) == getattr(created, field)

            stored = await UserRepository(session).find_by_id(created.id)
            assert stored.password == changes.get("password", payload["password"])

        run_scenario(scenario)

    @PROPERTY_SETTINGS
    @given(payload=create_payloads)
    def test_remove_makes_user_unfindable(self, payload):
        async def scenario(directory, session):
            created = await directory.create(UserCreateRequest(**payload))

            removed = await directory.remove(created.id)
            assert removed.id == created.id
            assert removed == created

            with pytest.raises(UserNotFoundError):
                await directory.find_one(created.id)

        run_scenario(scenario)
