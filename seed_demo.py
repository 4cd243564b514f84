"""Seed a local database with a few users and coin listings.

Run from the project root: ``python seed_demo.py``. Re-running is a no-op
once the demo user exists.
"""
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

load_dotenv()

from app import crud  # noqa: E402
from app.db import Base, engine, SessionLocal  # noqa: E402
from app.models import VISIBILITY_PUBLIC, VISIBILITY_PRIVATE  # noqa: E402
from app.utils import logger  # noqa: E402

DEMO_COINS = [
    {"title": "Morgan Dollar", "country": "USA", "year": 1921, "condition": "good", "days_ago": 1, "likes": 2},
    {"title": "Maple Leaf", "country": "Canada", "year": 1988, "condition": "mint", "days_ago": 3, "likes": 1},
    {"title": "Sovereign", "country": "UK", "year": 1911, "condition": "fair", "days_ago": 12, "likes": 3},
    {"title": "Challenge Coin", "country": "USA", "year": 2004, "condition": "excellent", "days_ago": 5, "likes": 0,
     "visibility": VISIBILITY_PRIVATE},
]


def seed(db):
    if crud.get_user_by_username(db, "demo"):
        logger.info("Demo data already exists")
        return False

    owner = crud.create_user(db, "demo", "demo@example.com", display_name="Demo Collector")
    fans = [crud.create_user(db, f"fan{i}", f"fan{i}@example.com") for i in range(3)]
    now = datetime.now(timezone.utc)
    for sample in DEMO_COINS:
        created = now - timedelta(days=sample["days_ago"])
        coin = crud.create_listing(db, owner.id, {
            "title": sample["title"],
            "country": sample["country"],
            "year": sample["year"],
            "condition": sample["condition"],
            "visibility": sample.get("visibility", VISIBILITY_PUBLIC),
            "created_at": created,
            "updated_at": created,
        })
        crud.add_image(db, coin.id, f"https://example.com/coins/{coin.id}/obverse.jpg", order_index=0)
        crud.add_image(db, coin.id, f"https://example.com/coins/{coin.id}/reverse.jpg", order_index=1)
        for fan in fans[:sample["likes"]]:
            crud.add_like(db, coin.id, fan.id)
        crud.add_comment(db, coin.id, fans[0].id, "Great piece!")
    logger.info("Seeded %d coin listings", len(DEMO_COINS))
    return True


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
    except Exception as e:
        logger.exception("Database seed failed: %s", e)
        raise SystemExit(1)
    finally:
        session.close()
