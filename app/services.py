# app/services.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from . import ranking
from .errors import FeedError, StoreUnavailableError
from .filters import FeedFilter
from .schemas import FeedResponse
from .utils import logger as default_logger, parse_int, clamp

FEED_DEFAULT_LIMIT, FEED_MAX_LIMIT = 20, 100
TRENDING_DEFAULT_LIMIT, TRENDING_MAX_LIMIT = 10, 50
# largest offset a 64-bit store column accepts
MAX_OFFSET = 2**63 - 1

@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int

    @classmethod
    def parse(cls, limit: Optional[str], offset: Optional[str], default_limit: int, max_limit: int) -> "Pagination":
        """Parse-then-clamp; malformed values fall back to defaults, never raise."""
        raw_limit = parse_int(limit)
        raw_offset = parse_int(offset)
        return cls(
            limit=clamp(default_limit if raw_limit is None else raw_limit, 1, max_limit),
            offset=clamp(0 if raw_offset is None else raw_offset, 0, MAX_OFFSET),
        )

class FeedService:
    """Builds the public coin feed and the trending feed for one request."""

    def __init__(self, db: Session, logger=None):
        self.db = db
        self.logger = logger or default_logger

    def recent(self, limit: Optional[str] = None, offset: Optional[str] = None,
               country: Optional[str] = None, year: Optional[str] = None) -> FeedResponse:
        page = Pagination.parse(limit, offset, FEED_DEFAULT_LIMIT, FEED_MAX_LIMIT)
        feed_filter = FeedFilter.from_query(country, year)
        self.logger.info("Fetching public coins feed limit=%d offset=%d country=%s year=%s",
                         page.limit, page.offset, feed_filter.country, feed_filter.year)
        try:
            result = ranking.rank_recent(self.db, feed_filter, page.limit, page.offset, logger=self.logger)
            response = FeedResponse(coins=result.items, total=result.total, limit=page.limit, offset=page.offset)
        except StoreUnavailableError:
            raise
        except Exception as e:
            self.logger.exception("Unexpected error fetching coins feed limit=%d offset=%d country=%s year=%s",
                                  page.limit, page.offset, feed_filter.country, feed_filter.year)
            raise FeedError("Failed to fetch feed") from e

        self.logger.info("Public coins feed fetched count=%d total=%d limit=%d offset=%d",
                         len(response.coins), response.total, page.limit, page.offset)
        return response

    def trending(self, limit: Optional[str] = None, offset: Optional[str] = None,
                 now: Optional[datetime] = None) -> FeedResponse:
        page = Pagination.parse(limit, offset, TRENDING_DEFAULT_LIMIT, TRENDING_MAX_LIMIT)
        self.logger.info("Fetching trending coins limit=%d offset=%d", page.limit, page.offset)
        try:
            result = ranking.rank_trending(self.db, page.limit, page.offset, now=now, logger=self.logger)
            response = FeedResponse(coins=result.items, total=result.total, limit=page.limit, offset=page.offset)
        except StoreUnavailableError:
            raise
        except Exception as e:
            self.logger.exception("Unexpected error fetching trending coins limit=%d offset=%d",
                                  page.limit, page.offset)
            raise FeedError("Failed to fetch trending feed") from e

        self.logger.info("Trending coins fetched count=%d total=%d limit=%d offset=%d",
                         len(response.coins), response.total, page.limit, page.offset)
        return response
