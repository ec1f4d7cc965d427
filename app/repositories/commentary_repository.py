import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConstraintError, NotFoundError
from app.models.commentary import Commentary
from app.repositories.match_repository import MatchRepository
from app.schemas.commentary import CommentaryCreate

logger = logging.getLogger(__name__)


class CommentaryRepository:
    def __init__(self, db: Session):
        self.db = db
        self.matches = MatchRepository(db)

    def add(self, match_id: int, data: CommentaryCreate) -> Commentary:
        """Appends a commentary entry to an existing match."""
        if not self.matches.exists(match_id):
            raise NotFoundError("Match", match_id)

        entry = Commentary(
            match_id=match_id,
            minute=data.minute,
            sequence=data.sequence,
            period=data.period,
            event_type=data.event_type,
            actor=data.actor,
            team=data.team,
            message=data.message,
            metadata_=data.metadata,
            tags=data.tags,
        )
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as e:
            # The match was deleted between the check and the insert
            self.db.rollback()
            raise ConstraintError(f"Commentary rejected for match {match_id}: {e.orig}") from e

        self.db.refresh(entry)
        logger.info("Added commentary %s to match %s", entry.id, match_id)
        return entry

    def list_for_match(self, match_id: int, limit: Optional[int] = None) -> list[Commentary]:
        """Commentary for one match, newest first."""
        if not self.matches.exists(match_id):
            raise NotFoundError("Match", match_id)

        stmt = (
            select(Commentary)
            .where(Commentary.match_id == match_id)
            .order_by(Commentary.created_at.desc(), Commentary.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).all())
