"""Shared declarative base for all ORM models.

A single ``Base`` keeps the SQLAlchemy metadata in one place so that
``scripts/init_db.py`` and the test fixtures create the same tables.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass
