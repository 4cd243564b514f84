# tests/test_services.py
import logging
from datetime import datetime, timedelta, timezone

import pytest

from app import ranking
from app.errors import FeedError, StoreUnavailableError
from app.services import FeedService, Pagination
from conftest import NOW


@pytest.mark.parametrize("limit,offset,expected", [
    (None, None, (20, 0)),
    ("0", "-5", (1, 0)),
    ("500", "10", (100, 10)),
    ("abc", "xyz", (20, 0)),
    ("", "", (20, 0)),
    ("35", "3", (35, 3)),
])
def test_pagination_parse_clamps_and_defaults(limit, offset, expected):
    page = Pagination.parse(limit, offset, default_limit=20, max_limit=100)
    assert (page.limit, page.offset) == expected


def test_trending_pagination_bounds(db):
    response = FeedService(db).trending(limit="80")
    assert response.limit == 50
    assert FeedService(db).trending().limit == 10


def test_recent_logs_request_and_result(db, make_coin, caplog):
    make_coin()
    log = logging.getLogger("coin-feed.test")
    with caplog.at_level(logging.INFO, logger="coin-feed.test"):
        FeedService(db, logger=log).recent(country="USA")
    messages = [r.getMessage() for r in caplog.records]
    assert any("Fetching public coins feed" in m and "country=USA" in m for m in messages)
    assert any("count=1 total=1" in m for m in messages)


def test_store_errors_pass_through(db, monkeypatch):
    def boom(*args, **kwargs):
        raise StoreUnavailableError("count")
    monkeypatch.setattr(ranking, "rank_recent", boom)
    with pytest.raises(StoreUnavailableError):
        FeedService(db).recent()


def test_unexpected_errors_become_feed_errors(db, make_coin, monkeypatch, caplog):
    make_coin(created_at=NOW - timedelta(days=1))

    def broken(listing):
        raise ValueError("cannot serialize")
    monkeypatch.setattr(ranking, "to_feed_item", broken)
    log = logging.getLogger("coin-feed.test")
    with caplog.at_level(logging.ERROR, logger="coin-feed.test"):
        with pytest.raises(FeedError) as exc:
            FeedService(db, logger=log).recent(limit="5", year="1921")
    assert not isinstance(exc.value, StoreUnavailableError)
    assert any("limit=5" in r.getMessage() and "year=1921" in r.getMessage() for r in caplog.records)


def test_pagination_caps_huge_offset():
    page = Pagination.parse("10", "99999999999999999999", default_limit=20, max_limit=100)
    assert page.offset == 2**63 - 1


def test_trending_unexpected_errors_become_feed_errors(db, make_coin, monkeypatch):
    make_coin(created_at=datetime.now(timezone.utc))

    def broken(listing):
        raise ValueError("cannot serialize")
    monkeypatch.setattr(ranking, "to_feed_item", broken)
    with pytest.raises(FeedError) as exc:
        FeedService(db).trending()
    assert not isinstance(exc.value, StoreUnavailableError)
    assert str(exc.value) == "Failed to fetch trending feed"
