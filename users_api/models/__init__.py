"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows every table
before create_all() runs at startup.
"""

from users_api.models.user import User  # noqa: F401
