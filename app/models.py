# app/models.py
"""SQLAlchemy ORM models for persisted entities.

Users own coin listings; each listing carries ordered images and the like and
comment relations the feed counts.
"""
import uuid
from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, func, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from .db import Base

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"
VISIBILITY_UNLISTED = "unlisted"

def _uuid():
    return str(uuid.uuid4())

class User(Base):
    __tablename__ = "users"
    id = Column(Text, primary_key=True, default=_uuid)
    email = Column(Text, nullable=False, unique=True)
    username = Column(Text, nullable=False, unique=True, index=True)
    display_name = Column(Text, nullable=False)
    avatar_url = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    coins = relationship("Listing", back_populates="user")

class Listing(Base):
    __tablename__ = "coins"
    id = Column(Text, primary_key=True, default=_uuid)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    country = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
    condition = Column(Text)
    description = Column(Text)
    visibility = Column(Text, nullable=False, default=VISIBILITY_PUBLIC)
    trade_status = Column(Text, nullable=False, default="not_for_trade")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="coins")
    images = relationship(
        "ListingImage",
        back_populates="coin",
        cascade="all, delete-orphan",
        order_by="[ListingImage.order_index, ListingImage.created_at]",
    )
    likes = relationship("Like", back_populates="coin", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="coin", cascade="all, delete-orphan")

class ListingImage(Base):
    __tablename__ = "coin_images"
    id = Column(Text, primary_key=True, default=_uuid)
    coin_id = Column(Text, ForeignKey("coins.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    coin = relationship("Listing", back_populates="images")

class Like(Base):
    __tablename__ = "likes"
    id = Column(Text, primary_key=True, default=_uuid)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    coin_id = Column(Text, ForeignKey("coins.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    coin = relationship("Listing", back_populates="likes")

    __table_args__ = (UniqueConstraint("user_id", "coin_id", name="idx_user_coin_like"),)

class Comment(Base):
    __tablename__ = "comments"
    id = Column(Text, primary_key=True, default=_uuid)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    coin_id = Column(Text, ForeignKey("coins.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    coin = relationship("Listing", back_populates="comments")

Index("idx_coin_user", Listing.user_id)
Index("idx_coin_visibility", Listing.visibility)
Index("idx_coin_country", Listing.country)
Index("idx_coin_year", Listing.year)
Index("idx_coin_trade_status", Listing.trade_status)
