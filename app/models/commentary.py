from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base

# JSONB / TEXT[] on Postgres, plain JSON everywhere else (SQLite in tests).
# None is stored as SQL NULL, not the JSON literal null.
MetadataType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")
TagsType = JSON(none_as_null=True).with_variant(ARRAY(Text), "postgresql")


class Commentary(Base):
    __tablename__ = "commentary"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    match_id: Mapped[int] = mapped_column(
        ForeignKey("matches.id", ondelete="CASCADE"), index=True
    )

    # Match clock
    minute: Mapped[Optional[int]] = mapped_column(Integer)
    sequence: Mapped[Optional[int]] = mapped_column(Integer)
    period: Mapped[Optional[str]] = mapped_column(Text)

    # Event
    event_type: Mapped[Optional[str]] = mapped_column(Text)
    actor: Mapped[Optional[str]] = mapped_column(Text)
    team: Mapped[Optional[str]] = mapped_column(Text)
    message: Mapped[Optional[str]] = mapped_column(Text)

    # "metadata" is reserved on declarative classes, the column keeps the name
    metadata_: Mapped[Optional[dict[str, Any]]] = mapped_column("metadata", MetadataType)
    tags: Mapped[Optional[list[str]]] = mapped_column(TagsType)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    match = relationship("Match", back_populates="commentary")
