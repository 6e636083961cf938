"""SQLAlchemy declarative Base with a fixed constraint naming convention."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Matches the names the migrations create (e.g. ix_users_email).
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for the users store."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
