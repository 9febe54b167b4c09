"""Generate database sessions for the game archive"""

import logging
import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("ICN_DATABASE_URL", "sqlite:///./icn_games.db")


def create_session_factory(database_url: str = DATABASE_URL) -> sessionmaker[Session]:
    """Connect to the database, and make sure all tables exist."""
    engine = create_engine(database_url)
    Base.metadata.create_all(bind=engine)
    logger.info("Connected to game archive at %s", engine.url.render_as_string())
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
