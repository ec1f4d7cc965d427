import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Enum, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base


class MatchStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINISHED = "finished"


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("home_score >= 0", name="ck_matches_home_score_non_negative"),
        CheckConstraint("away_score >= 0", name="ck_matches_away_score_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    sport: Mapped[str] = mapped_column(Text)
    home_team: Mapped[str] = mapped_column(Text)
    away_team: Mapped[str] = mapped_column(Text)

    # Stored as the Postgres enum type "match_status" using the lowercase values
    status: Mapped[MatchStatus] = mapped_column(
        Enum(
            MatchStatus,
            name="match_status",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=MatchStatus.SCHEDULED,
        server_default=MatchStatus.SCHEDULED.value,
    )

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    home_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    away_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Deleting a match removes its commentary
    commentary = relationship(
        "Commentary",
        back_populates="match",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
