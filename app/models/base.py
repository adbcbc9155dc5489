"""SQLAlchemy declarative Base with explicit index names for migrations."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Matches the op.f(...) names used in alembic/versions.
NAMING_CONVENTION = {"ix": "ix_%(column_0_label)s"}


class Base(DeclarativeBase):
    """Declarative base for the users and products tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
