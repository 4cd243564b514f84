# app/engagement.py
"""Per-listing engagement metrics derived from loaded relation sets."""
from typing import NamedTuple, Sized


class Engagement(NamedTuple):
    like_count: int
    comment_count: int


def aggregate(likes: Sized, comments: Sized) -> Engagement:
    # (user, coin) uniqueness of likes is enforced by the store, not here
    return Engagement(like_count=len(likes), comment_count=len(comments))


def for_listing(listing) -> Engagement:
    return aggregate(listing.likes, listing.comments)
