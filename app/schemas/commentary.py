from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, ConfigDict, Field

from app.schemas.base import INT32_MAX, CamelModel


class CommentaryListQuery(CamelModel):
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class CommentaryCreate(CamelModel):
    minute: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    sequence: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    period: Optional[str] = None
    event_type: Optional[str] = None
    actor: Optional[str] = None
    team: Optional[str] = None
    message: Optional[str] = None
    # Opaque payload, stored and returned untouched
    metadata: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None


class CommentaryResponse(CamelModel):
    id: int
    match_id: int
    minute: Optional[int] = None
    sequence: Optional[int] = None
    period: Optional[str] = None
    event_type: Optional[str] = None
    actor: Optional[str] = None
    team: Optional[str] = None
    message: Optional[str] = None
    # ORM rows expose the column as `metadata_`
    metadata: Optional[dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("metadata_", "metadata"),
        serialization_alias="metadata",
    )
    tags: Optional[list[str]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
