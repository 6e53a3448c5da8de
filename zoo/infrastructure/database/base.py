"""SQLAlchemy ORM base and model registry."""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


def as_utc(value: datetime | None) -> datetime | None:
    """Re-attach UTC to timestamps read back naive (SQLite drops tzinfo)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
