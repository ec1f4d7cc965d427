# app/core/database.py
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from app.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str, **overrides):
    """
    Creates the engine for `url`.

    Postgres gets a bounded QueuePool (pool_size + max_overflow) that recycles
    connections every DB_POOL_RECYCLE seconds and pings them before use.
    SQLite keeps SQLAlchemy's default pool and has foreign keys switched on.
    """
    backend = make_url(url).get_backend_name()
    options = {"pool_pre_ping": True}

    if backend != "sqlite":
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    options.update(overrides)

    new_engine = create_engine(url, **options)

    if backend == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

class Base(DeclarativeBase):
    pass

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def check_connection(bind=None):
    """Runs SELECT 1 against the store. Raises if it cannot be reached."""
    bind = bind or engine
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection OK (%s)", bind.url.render_as_string(hide_password=True))
