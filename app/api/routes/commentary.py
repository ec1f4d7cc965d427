from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.commentary_repository import CommentaryRepository
from app.schemas.commentary import CommentaryCreate, CommentaryListQuery, CommentaryResponse
from app.schemas.base import INT32_MAX

router = APIRouter()

MatchId = Annotated[int, Path(gt=0, le=INT32_MAX, description="Match id")]


@router.post(
    "/{id}/commentary",
    response_model=CommentaryResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_commentary(id: MatchId, payload: CommentaryCreate, db: Session = Depends(get_db)):
    """Appends a commentary entry. 404 if the match does not exist."""
    return CommentaryRepository(db).add(id, payload)


@router.get("/{id}/commentary", response_model=list[CommentaryResponse])
def list_commentary(
    id: MatchId,
    query: Annotated[CommentaryListQuery, Query()],
    db: Session = Depends(get_db),
):
    return CommentaryRepository(db).list_for_match(id, limit=query.limit)
