import os

# Settings are read at import time; point them at SQLite before anything loads app.*
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, build_engine, get_db
from app.main import app


@pytest.fixture
def engine():
    # One shared in-memory connection so every session sees the same tables
    test_engine = build_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def match_payload():
    return {
        "sport": "football",
        "homeTeam": "Team A",
        "awayTeam": "Team B",
        "startTime": "2026-03-01T15:00:00Z",
    }


@pytest.fixture
def created_match(client, match_payload):
    response = client.post("/matches", json=match_payload)
    assert response.status_code == 201
    return response.json()
