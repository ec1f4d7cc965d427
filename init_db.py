import argparse
import logging

from app.core.database import engine, Base, check_connection

# Import every model so its table is registered on Base.metadata
from app.models.match import Match  # noqa: F401
from app.models.commentary import Commentary  # noqa: F401

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger("init_db")


def init_db(reset: bool = False):
    check_connection()

    if reset:
        # Drops matches, commentary and the match_status type with all their data
        logger.warning("Dropping existing tables...")
        Base.metadata.drop_all(bind=engine)

    logger.info("Creating tables (matches, commentary)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the Matchday database schema.")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    init_db(reset=args.reset)
