"""SQLAlchemy ORM model for the Animal entity."""

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from zoo.infrastructure.database.base import Base


class AnimalModel(Base):
    """ORM model — maps to the 'animals' table."""

    __tablename__ = "animals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Python str.lower() of title; listings order by it byte-wise.
    title_key: Mapped[str] = mapped_column(Text, nullable=False)
    room_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    located: Mapped[date | None] = mapped_column(Date, nullable=True)
    favorite_room_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_animals_room_title_key", "room_id", "title_key"),
        Index("ix_animals_room_located", "room_id", "located"),
    )

    def __repr__(self) -> str:
        return f"<AnimalModel(id={self.id}, title='{self.title}', room_id={self.room_id})>"
