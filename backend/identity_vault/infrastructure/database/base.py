"""SQLAlchemy ORM base and model registry."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the identity vault ORM models."""

    pass
