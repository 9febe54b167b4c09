"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

# A short game: both sides push a pawn two squares, then white moves the king.
SAMPLE_ICN = (
    '[Event "Casual local game"]\n'
    '[Variant "Classical"]\n'
    "\n"
    "w 0/100 1\n"
    "P1,2+|p1,7+|K5,1+|k5,8+\n"
    "1. P1,2 > 1,4 | p1,7 > 1,5\n"
    "2. K5,1 > 5,2"
)

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def sample_icn() -> str:
    return SAMPLE_ICN


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()
