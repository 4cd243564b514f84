# app/ranking.py
"""Feed ranking strategies.

Chronological pages are pushed down to the store (count + one ordered,
limited fetch). Trending needs the like count, which isn't a stored column,
so it materializes every public listing of the trailing window, sorts in
memory and slices.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from . import crud
from .engagement import for_listing
from .errors import StoreUnavailableError
from .filters import FeedFilter, PUBLIC_ONLY
from .models import Listing
from .schemas import FeedItem, FeedUser, FeedImage
from .utils import logger as default_logger

TRENDING_WINDOW = timedelta(days=7)

@dataclass
class FeedPage:
    items: List[FeedItem] = field(default_factory=list)
    total: int = 0

def to_feed_item(listing: Listing) -> FeedItem:
    metrics = for_listing(listing)
    owner = listing.user
    return FeedItem(
        id=listing.id,
        title=listing.title,
        country=listing.country,
        year=listing.year,
        condition=listing.condition,
        description=listing.description,
        trade_status=listing.trade_status,
        user=FeedUser(
            id=owner.id,
            username=owner.username,
            display_name=owner.display_name,
            avatar_url=owner.avatar_url,
        ),
        images=[
            FeedImage(id=img.id, url=img.url, order_index=img.order_index)
            for img in sorted(listing.images, key=lambda img: img.order_index)
        ],
        like_count=metrics.like_count,
        comment_count=metrics.comment_count,
        created_at=listing.created_at,
        updated_at=listing.updated_at,
    )

def _as_utc(ts: datetime) -> datetime:
    # sqlite hands back naive timestamps; they are stored as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)

def rank_recent(db: Session, feed_filter: FeedFilter, limit: int, offset: int,
                logger=default_logger) -> FeedPage:
    predicate = feed_filter.to_clause()
    try:
        total = crud.count_listings(db, predicate)
    except Exception as e:
        logger.error("Database error counting coins: %s", e)
        raise StoreUnavailableError("count") from e

    if offset >= total:
        return FeedPage(items=[], total=total)

    try:
        # id breaks created_at ties so pages never overlap or skip rows
        listings = crud.find_listings(
            db, predicate, order_by=(Listing.created_at.desc(), Listing.id.desc()), limit=limit, offset=offset
        )
    except Exception as e:
        logger.error("Database error fetching coins limit=%s offset=%s: %s", limit, offset, e)
        raise StoreUnavailableError("fetch") from e

    return FeedPage(items=[to_feed_item(c) for c in listings], total=total)

def select_trending(listings, now: datetime, window: timedelta = TRENDING_WINDOW) -> List[Listing]:
    """Return listings created within ``window`` of ``now``, most liked first.

    The cutoff is inclusive. Python's sort is stable, so listings with equal
    like counts stay in the order the store returned them.
    """
    cutoff = _as_utc(now) - window
    recent = [c for c in listings if _as_utc(c.created_at) >= cutoff]
    return sorted(recent, key=lambda c: for_listing(c).like_count, reverse=True)

def rank_trending(db: Session, limit: int, offset: int, now: Optional[datetime] = None,
                  logger=default_logger) -> FeedPage:
    now = now or datetime.now(timezone.utc)
    try:
        listings = crud.find_listings(db, PUBLIC_ONLY.to_clause())
    except Exception as e:
        logger.error("Database error fetching coins: %s", e)
        raise StoreUnavailableError("fetch") from e

    ranked = select_trending(listings, now)
    page = ranked[offset:offset + limit]
    return FeedPage(items=[to_feed_item(c) for c in page], total=len(ranked))
