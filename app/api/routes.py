# app/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from .. import schemas
from ..db import get_db
from ..errors import FeedError, StoreUnavailableError
from ..services import FeedService

router = APIRouter()

def get_feed_service(db: Session = Depends(get_db)) -> FeedService:
    return FeedService(db)

@router.get("/health")
def health():
    return {"status": "ok"}

# limit/offset/year stay strings: bad values are defaulted by the service, not rejected here
@router.get("/feed", response_model=schemas.FeedResponse)
def feed(
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    country: str | None = Query(None),
    year: str | None = Query(None),
    service: FeedService = Depends(get_feed_service)
):
    try:
        return service.recent(limit=limit, offset=offset, country=country, year=year)
    except StoreUnavailableError:
        raise HTTPException(status_code=503, detail="Database error")
    except FeedError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/feed/trending", response_model=schemas.FeedResponse)
def trending_feed(
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    service: FeedService = Depends(get_feed_service)
):
    try:
        return service.trending(limit=limit, offset=offset)
    except StoreUnavailableError:
        raise HTTPException(status_code=503, detail="Database error")
    except FeedError as e:
        raise HTTPException(status_code=500, detail=str(e))
