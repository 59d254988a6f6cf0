import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from models.batch import Batch
from models.feed import FeedRecord
from schemas.feed import FeedRecordCreate, FeedRecordUpdate
from utils.metrics import build_feed_stats

logger = logging.getLogger(__name__)


def create_feed_record(db: Session, db_batch: Batch, feed: FeedRecordCreate, changed_by: Optional[str] = None) -> FeedRecord:
    db_record = FeedRecord(
        batch_id=db_batch.id,
        tenant_id=db_batch.tenant_id,
        date=feed.date,
        feed_type=feed.feed_type,
        quantity_kg=Decimal(str(feed.quantity_kg)),
        cost=Decimal(str(feed.cost)),
        created_by=changed_by,
        updated_by=changed_by
    )
    db.add(db_record)
    db.commit()
    db.refresh(db_record)
    return db_record


def get_feed_records(db: Session, batch_id: int, tenant_id: str, skip: int = 0, limit: int = 100) -> List[FeedRecord]:
    return db.query(FeedRecord).filter(
        FeedRecord.batch_id == batch_id, FeedRecord.tenant_id == tenant_id
    ).order_by(FeedRecord.date.desc(), FeedRecord.id.desc()).offset(skip).limit(limit).all()


def get_feed_stats(db: Session, batch_id: int, tenant_id: str) -> dict:
    records = db.query(FeedRecord).filter(
        FeedRecord.batch_id == batch_id, FeedRecord.tenant_id == tenant_id
    ).all()
    return build_feed_stats(
        {"quantity_kg": record.quantity_kg, "cost": record.cost or 0} for record in records
    )


def get_feed_record(db: Session, record_id: int, tenant_id: str) -> Optional[FeedRecord]:
    return db.query(FeedRecord).filter(FeedRecord.id == record_id, FeedRecord.tenant_id == tenant_id).first()


def update_feed_record(db: Session, record_id: int, tenant_id: str, feed: FeedRecordUpdate, changed_by: Optional[str] = None) -> Optional[FeedRecord]:
    db_record = get_feed_record(db, record_id, tenant_id)
    if db_record is None:
        return None

    update_data = {key: value for key, value in feed.model_dump(exclude_unset=True).items() if value is not None}
    for key in ('quantity_kg', 'cost'):
        if key in update_data:
            update_data[key] = Decimal(str(update_data[key]))
    for key, value in update_data.items():
        setattr(db_record, key, value)
    db_record.updated_by = changed_by

    db.commit()
    db.refresh(db_record)
    logger.info("Updated feed record %d fields %s", record_id, sorted(update_data))
    return db_record


def delete_feed_record(db: Session, record_id: int, tenant_id: str) -> bool:
    db_record = get_feed_record(db, record_id, tenant_id)
    if db_record is None:
        return False
    batch_id = db_record.batch_id
    db.delete(db_record)
    db.commit()
    logger.info("Deleted feed record %d from batch_id=%d", record_id, batch_id)
    return True
