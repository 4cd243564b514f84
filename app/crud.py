# app/crud.py
"""Record store operations for coin listings and their relations.

The feed reads through ``count_listings`` and ``find_listings``; the insert
and update helpers back the demo seed and the test fixtures.
"""
from sqlalchemy.orm import Session, selectinload
from .models import User, Listing, ListingImage, Like, Comment
from typing import Dict, Any, List, Optional

FEED_RELATIONS = (
    selectinload(Listing.user),
    selectinload(Listing.images),
    selectinload(Listing.likes),
    selectinload(Listing.comments),
)

def count_listings(db: Session, predicate) -> int:
    return db.query(Listing).filter(predicate).count()

def find_listings(db: Session, predicate, order_by=(), limit: Optional[int] = None,
                  offset: Optional[int] = None) -> List[Listing]:
    # relations are batch-loaded so per-item metrics never hit the store again
    q = db.query(Listing).options(*FEED_RELATIONS).filter(predicate)
    if order_by:
        q = q.order_by(*order_by)
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all()

def get_listing(db: Session, coin_id: str):
    return db.query(Listing).filter(Listing.id == coin_id).first()

def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()

def create_user(db: Session, username: str, email: str, display_name: str = None,
                avatar_url: str = None, **extra) -> User:
    obj = User(username=username, email=email, display_name=display_name or username,
               avatar_url=avatar_url, **extra)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def create_listing(db: Session, user_id: str, data: Dict[str, Any]) -> Listing:
    obj = Listing(user_id=user_id, **data)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def add_image(db: Session, coin_id: str, url: str, order_index: int = 0) -> ListingImage:
    obj = ListingImage(coin_id=coin_id, url=url, order_index=order_index)
    db.add(obj)
    db.commit()
    return obj

def add_like(db: Session, coin_id: str, user_id: str) -> Like:
    obj = Like(coin_id=coin_id, user_id=user_id)
    db.add(obj)
    db.commit()
    return obj

def add_comment(db: Session, coin_id: str, user_id: str, content: str) -> Comment:
    obj = Comment(coin_id=coin_id, user_id=user_id, content=content)
    db.add(obj)
    db.commit()
    return obj

def update_listing(db: Session, coin_id: str, updates: Dict[str, Any]):
    obj = get_listing(db, coin_id)
    if not obj:
        return None
    for k, v in updates.items():
        setattr(obj, k, v)
    db.commit()
    db.refresh(obj)
    return obj
