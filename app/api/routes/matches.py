from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.match_repository import MatchRepository
from app.schemas.base import INT32_MAX
from app.schemas.match import (
    ListMatchesQuery,
    MatchCreate,
    MatchResponse,
    ScoreUpdate,
    StatusUpdate,
)

router = APIRouter()

# Path ids are coerced to int and must fit the INTEGER primary key
MatchId = Annotated[int, Path(gt=0, le=INT32_MAX, description="Match id")]


@router.get("", response_model=list[MatchResponse])
def list_matches(
    query: Annotated[ListMatchesQuery, Query()],
    db: Session = Depends(get_db),
):
    """Lists matches, newest first. `limit` must be between 1 and 100."""
    return MatchRepository(db).list_matches(limit=query.limit, status=query.status)


@router.get("/{id}", response_model=MatchResponse)
def get_match(id: MatchId, db: Session = Depends(get_db)):
    return MatchRepository(db).get(id)


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
def create_match(payload: MatchCreate, db: Session = Depends(get_db)):
    """
    Creates a match. Status defaults to 'scheduled' and both scores to 0.
    `endTime`, when given, must be after `startTime`.
    """
    return MatchRepository(db).create(payload)


@router.patch("/{id}/score", response_model=MatchResponse)
def update_score(id: MatchId, payload: ScoreUpdate, db: Session = Depends(get_db)):
    return MatchRepository(db).update_score(id, payload.home_score, payload.away_score)


@router.patch("/{id}/status", response_model=MatchResponse)
def update_status(id: MatchId, payload: StatusUpdate, db: Session = Depends(get_db)):
    return MatchRepository(db).update_status(id, payload.status)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_match(id: MatchId, db: Session = Depends(get_db)):
    """Deletes a match together with its commentary."""
    MatchRepository(db).delete(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
