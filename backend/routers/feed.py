from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import crud.feed as crud_feed
from database import get_db
from schemas.feed import FeedRecordCreate, FeedRecordUpdate, FeedRecord, FeedStats
from utils.lookups import get_batch_or_404
from utils.tenancy import get_tenant_id, get_changed_by
import logging

router = APIRouter(tags=["Feed"])
logger = logging.getLogger(__name__)


@router.post("/batches/{batch_id}/feed/", response_model=FeedRecord)
def create_feed_record(
    batch_id: int,
    feed: FeedRecordCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    db_batch = get_batch_or_404(db, batch_id, tenant_id)
    logger.info("Recording %.2f kg of %s for batch_id=%d", feed.quantity_kg, feed.feed_type.value, batch_id)
    return crud_feed.create_feed_record(db, db_batch, feed, changed_by=changed_by)


@router.get("/batches/{batch_id}/feed/", response_model=List[FeedRecord])
def read_feed_records(
    batch_id: int,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    get_batch_or_404(db, batch_id, tenant_id)
    return crud_feed.get_feed_records(db, batch_id, tenant_id, skip=skip, limit=limit)


@router.get("/batches/{batch_id}/feed/stats", response_model=FeedStats)
def read_feed_stats(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    get_batch_or_404(db, batch_id, tenant_id)
    return crud_feed.get_feed_stats(db, batch_id, tenant_id)


@router.patch("/feed/{record_id}", response_model=FeedRecord)
def update_feed_record(
    record_id: int,
    feed: FeedRecordUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    db_record = crud_feed.update_feed_record(db, record_id, tenant_id, feed, changed_by=changed_by)
    if db_record is None:
        logger.warning("Feed record %d not found for tenant %s", record_id, tenant_id)
        raise HTTPException(status_code=404, detail="Feed record not found")
    return db_record


@router.delete("/feed/{record_id}")
def delete_feed_record(record_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    if not crud_feed.delete_feed_record(db, record_id, tenant_id):
        raise HTTPException(status_code=404, detail="Feed record not found")
    return {"message": "Feed record deleted successfully"}
