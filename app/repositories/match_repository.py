import logging
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConstraintError, NotFoundError
from app.models.commentary import Commentary  # noqa: F401  (registers the relationship target)
from app.models.match import Match, MatchStatus
from app.schemas.match import MatchCreate

logger = logging.getLogger(__name__)


class MatchRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_matches(self, limit: Optional[int] = None, status: Optional[MatchStatus] = None) -> list[Match]:
        """Newest matches first, optionally filtered by status and capped at `limit`."""
        stmt = select(Match).order_by(Match.created_at.desc(), Match.id.desc())
        if status is not None:
            stmt = stmt.where(Match.status == status)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).all())

    def get(self, match_id: int) -> Match:
        match = self.db.get(Match, match_id)
        if match is None:
            raise NotFoundError("Match", match_id)
        return match

    def exists(self, match_id: int) -> bool:
        return self.db.scalar(select(Match.id).where(Match.id == match_id)) is not None

    def create(self, data: MatchCreate) -> Match:
        # Omitted status / scores fall back to the column defaults
        fields = data.model_dump(exclude_none=True)
        match = Match(**fields)
        self._commit(lambda: self.db.add(match))
        self.db.refresh(match)
        logger.info("Created match %s (%s: %s vs %s)", match.id, match.sport, match.home_team, match.away_team)
        return match

    def update_score(self, match_id: int, home_score: int, away_score: int) -> Match:
        stmt = (
            update(Match)
            .where(Match.id == match_id)
            .values(home_score=home_score, away_score=away_score)
            .returning(Match)
        )
        match = self._commit(lambda: self.db.scalar(stmt))
        if match is None:
            raise NotFoundError("Match", match_id)
        self.db.refresh(match)
        logger.info("Match %s score -> %s-%s", match_id, home_score, away_score)
        return match

    def update_status(self, match_id: int, status: MatchStatus) -> Match:
        stmt = (
            update(Match)
            .where(Match.id == match_id)
            .values(status=status)
            .returning(Match)
        )
        match = self._commit(lambda: self.db.scalar(stmt))
        if match is None:
            raise NotFoundError("Match", match_id)
        self.db.refresh(match)
        logger.info("Match %s status -> %s", match_id, status.value)
        return match

    def delete(self, match_id: int) -> None:
        """Deletes the match; its commentary goes with it (ON DELETE CASCADE)."""
        stmt = delete(Match).where(Match.id == match_id).execution_options(synchronize_session=False)
        result = self._commit(lambda: self.db.execute(stmt))
        if result.rowcount == 0:
            raise NotFoundError("Match", match_id)
        logger.info("Deleted match %s", match_id)

    def _commit(self, operation):
        try:
            result = operation()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConstraintError(str(e.orig)) from e
        except Exception:
            self.db.rollback()
            raise
        return result
