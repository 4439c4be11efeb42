"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fractalizer.database.schema import Base, Comment, Post, User


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blog(session):
    """
    Seed a small blog graph:
    
    - users 1 (admin), 2, 6
    - post 3 "a"/"T" by user 6 with comments 10 (by 1) and 11 (by 2)
    - post 4 "b"/"U" by user 1 with no comments
    """
    session.add_all([
        User(id=1, name="Ada", email="ada@example.com", is_admin=True),
        User(id=2, name="Grace", email="grace@example.com"),
        User(id=6, name="X", email="x@example.com"),
    ])
    session.add_all([
        Post(id=3, slug="a", title="T", body="Body A", author_id=6, published_at_utc="2025-01-05T09:00:00Z"),
        Post(id=4, slug="b", title="U", body=None, author_id=1, published_at_utc=None),
    ])
    session.add_all([
        Comment(id=10, post_id=3, author_id=1, body="First!", created_at_utc="2025-01-05T10:00:00Z"),
        Comment(id=11, post_id=3, author_id=2, body="Second", created_at_utc="2025-01-05T11:00:00Z"),
    ])
    session.commit()
    session.expire_all()
    return session
