# app/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class FeedUser(CamelModel):
    id: str
    username: str
    display_name: str
    avatar_url: Optional[str] = None

class FeedImage(CamelModel):
    id: str
    url: str
    order_index: int

class FeedItem(CamelModel):
    id: str
    title: str
    country: str
    year: int
    condition: Optional[str] = None
    description: Optional[str] = None
    trade_status: str
    user: FeedUser
    images: List[FeedImage]
    like_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

class FeedResponse(BaseModel):
    coins: List[FeedItem]
    total: int
    limit: int
    offset: int
