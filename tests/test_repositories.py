from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from app.core.errors import NotFoundError
from app.models.commentary import Commentary
from app.models.match import MatchStatus
from app.repositories.commentary_repository import CommentaryRepository
from app.repositories.match_repository import MatchRepository
from app.schemas.commentary import CommentaryCreate
from app.schemas.match import MatchCreate


def new_match(**overrides):
    fields = {
        "sport": "basketball",
        "home_team": "Oviedo",
        "away_team": "Gijon",
        "start_time": datetime(2026, 3, 1, 18, 30, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return MatchCreate(**fields)


@pytest.fixture
def matches(db):
    return MatchRepository(db)


@pytest.fixture
def commentary(db):
    return CommentaryRepository(db)


def test_create_uses_column_defaults(matches):
    match = matches.create(new_match())

    assert match.id is not None
    assert match.status is MatchStatus.SCHEDULED
    assert (match.home_score, match.away_score) == (0, 0)
    assert match.created_at is not None


def test_create_honours_overrides(matches):
    match = matches.create(new_match(status=MatchStatus.LIVE, home_score=12, away_score=9))

    assert match.status is MatchStatus.LIVE
    assert (match.home_score, match.away_score) == (12, 9)


def test_get_and_not_found(matches):
    created = matches.create(new_match())

    assert matches.get(created.id).home_team == "Oviedo"
    with pytest.raises(NotFoundError, match="Match 404 not found"):
        matches.get(404)


def test_list_filters_and_limits(matches):
    for status in (MatchStatus.SCHEDULED, MatchStatus.LIVE, MatchStatus.LIVE):
        matches.create(new_match(status=status))

    assert len(matches.list_matches()) == 3
    assert len(matches.list_matches(limit=1)) == 1
    assert {m.status for m in matches.list_matches(status=MatchStatus.LIVE)} == {MatchStatus.LIVE}
    assert len(matches.list_matches(status=MatchStatus.FINISHED)) == 0


def test_update_score_and_status(matches):
    match_id = matches.create(new_match()).id

    updated = matches.update_score(match_id, 3, 2)
    assert (updated.home_score, updated.away_score) == (3, 2)
    assert updated.status is MatchStatus.SCHEDULED

    updated = matches.update_status(match_id, MatchStatus.FINISHED)
    assert updated.status is MatchStatus.FINISHED
    assert (updated.home_score, updated.away_score) == (3, 2)


def test_updates_on_missing_match(matches):
    with pytest.raises(NotFoundError):
        matches.update_score(9, 1, 1)
    with pytest.raises(NotFoundError):
        matches.update_status(9, MatchStatus.LIVE)


def test_delete_is_not_found_on_every_retry(matches):
    match_id = matches.create(new_match()).id
    matches.delete(match_id)

    for _ in range(2):
        with pytest.raises(NotFoundError):
            matches.delete(match_id)


def test_commentary_requires_existing_match(commentary):
    with pytest.raises(NotFoundError):
        commentary.add(1, CommentaryCreate(message="Tip-off"))
    with pytest.raises(NotFoundError):
        commentary.list_for_match(1)


def test_commentary_add_and_list(matches, commentary):
    match_id = matches.create(new_match()).id
    entry = commentary.add(
        match_id,
        CommentaryCreate(minute=4, eventType="three-pointer", metadata={"distance": 7.2}, tags=["3pt"]),
    )

    assert entry.match_id == match_id
    assert entry.metadata_ == {"distance": 7.2}
    assert entry.tags == ["3pt"]
    assert [c.id for c in commentary.list_for_match(match_id)] == [entry.id]


def test_delete_match_removes_its_commentary(matches, commentary, db):
    match_id = matches.create(new_match()).id
    commentary.add(match_id, CommentaryCreate(message="Tip-off"))

    matches.delete(match_id)

    assert db.scalar(select(func.count()).select_from(Commentary)) == 0
