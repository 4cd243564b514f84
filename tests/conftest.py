# tests/conftest.py
"""Shared fixtures: an in-memory database wired into the FastAPI app."""
import os
from datetime import datetime, timezone

os.environ.setdefault("POSTGRES_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import crud  # noqa: E402
from app.db import Base, get_db  # noqa: E402
from app.models import VISIBILITY_PUBLIC  # noqa: E402
from app.main import app  # noqa: E402

NOW = datetime(2026, 1, 20, 12, 0, 0, tzinfo=timezone.utc)

# one shared connection so the request thread sees the fixture's rows
test_engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    return crud.create_user(db, "collector", "collector@example.com",
                            display_name="Coin Collector", avatar_url="https://example.com/a.png")


@pytest.fixture
def fans(db):
    return [crud.create_user(db, f"fan{i}", f"fan{i}@example.com") for i in range(5)]


@pytest.fixture
def make_coin(db, owner, fans):
    """Factory for listings with a given number of likes, comments and images."""
    def _make(title="Morgan Dollar", country="USA", year=1921, visibility=VISIBILITY_PUBLIC,
              created_at=None, likes=0, comments=0, images=()):
        created = created_at or NOW
        coin = crud.create_listing(db, owner.id, {
            "title": title,
            "country": country,
            "year": year,
            "condition": "good",
            "description": f"{title} ({year})",
            "visibility": visibility,
            "created_at": created,
            "updated_at": created,
        })
        for order_index, url in images:
            crud.add_image(db, coin.id, url, order_index=order_index)
        for fan in fans[:likes]:
            crud.add_like(db, coin.id, fan.id)
        for i in range(comments):
            crud.add_comment(db, coin.id, fans[0].id, f"comment {i}")
        return coin
    return _make
