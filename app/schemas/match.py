import re
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from app.models.match import MatchStatus
from app.schemas.base import INT32_MAX, CamelModel

# Extended date, "T" or space, then at least hours and minutes
ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")


def parse_iso_timestamp(value: Any, field: str) -> datetime:
    """
    Parses an ISO-8601 string ("2026-03-01T15:00:00Z", "...+02:00").
    A time part is required; bare dates are rejected.
    Naive timestamps are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and ISO_DATETIME.match(value.strip()):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"{field} must be a valid ISO date") from None
    else:
        raise ValueError(f"{field} must be a valid ISO date")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# --- INPUT: query / body validation ---

class ListMatchesQuery(CamelModel):
    limit: Optional[int] = Field(default=None, ge=1, le=100)
    status: Optional[MatchStatus] = None


class MatchCreate(CamelModel):
    sport: str
    home_team: str
    away_team: str
    start_time: datetime
    end_time: Optional[datetime] = None
    home_score: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    away_score: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    status: Optional[MatchStatus] = None

    @field_validator("sport", "home_team", "away_team")
    @classmethod
    def not_empty(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise ValueError(f"{to_camel(info.field_name)} is required")
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def iso_timestamp(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return v
        return parse_iso_timestamp(v, to_camel(info.field_name))

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        # start_time is missing from info.data when it failed its own validation
        start = info.data.get("start_time")
        if v is not None and start is not None and v <= start:
            raise ValueError("endTime must be after startTime")
        return v


class ScoreUpdate(CamelModel):
    home_score: int = Field(ge=0, le=INT32_MAX)
    away_score: int = Field(ge=0, le=INT32_MAX)


class StatusUpdate(CamelModel):
    status: MatchStatus


# --- OUTPUT ---

class MatchResponse(CamelModel):
    id: int
    sport: str
    home_team: str
    away_team: str
    status: MatchStatus
    start_time: datetime
    end_time: Optional[datetime] = None
    home_score: int
    away_score: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
