import logging
from datetime import timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
from models.audit_mixin import now_ist
from models.batch import Batch
from models.mortality import MortalityRecord
from schemas.mortality import MortalityRecordCreate, MortalityRecordUpdate
from crud.batch import get_batch_for_update
from utils.metrics import (
    build_mortality_summary,
    build_mortality_trends,
    calculate_cause_distribution,
    calculate_new_quantity,
    calculate_quantity_adjustment,
    determine_batch_status,
)

logger = logging.getLogger(__name__)


def record_mortality(db: Session, db_batch: Batch, mortality: MortalityRecordCreate, changed_by: Optional[str] = None) -> MortalityRecord:
    """
    Record deaths against a batch and take them off its current quantity.

    Raises ValueError when the quantity is more than the batch currently holds.
    The batch row is locked for the stock check, and the record and the batch
    update are committed together.
    """
    db_batch = get_batch_for_update(db, db_batch.id, db_batch.tenant_id)
    if mortality.quantity > db_batch.current_quantity:
        raise ValueError(
            f"Mortality quantity ({mortality.quantity}) cannot exceed current batch quantity ({db_batch.current_quantity})."
        )

    db_record = MortalityRecord(
        **mortality.model_dump(),
        batch_id=db_batch.id,
        tenant_id=db_batch.tenant_id,
        created_by=changed_by,
        updated_by=changed_by
    )
    db.add(db_record)

    db_batch.current_quantity = calculate_new_quantity(db_batch.current_quantity, mortality.quantity)
    db_batch.status = determine_batch_status(db_batch.current_quantity)
    db_batch.updated_by = changed_by

    db.commit()
    db.refresh(db_record)
    logger.info("Recorded %d deaths (%s) for batch_id=%d, %d remaining",
                mortality.quantity, mortality.cause.value, db_batch.id, db_batch.current_quantity)
    return db_record


def get_mortality_record(db: Session, record_id: int, tenant_id: str) -> Optional[MortalityRecord]:
    return db.query(MortalityRecord).filter(
        MortalityRecord.id == record_id, MortalityRecord.tenant_id == tenant_id
    ).first()


def get_mortality_records(db: Session, batch_id: int, tenant_id: str, skip: int = 0, limit: int = 100) -> List[MortalityRecord]:
    return db.query(MortalityRecord).filter(
        MortalityRecord.batch_id == batch_id, MortalityRecord.tenant_id == tenant_id
    ).order_by(MortalityRecord.date.desc(), MortalityRecord.id.desc()).offset(skip).limit(limit).all()


def update_mortality_record(db: Session, record_id: int, tenant_id: str, mortality: MortalityRecordUpdate, changed_by: Optional[str] = None) -> Optional[MortalityRecord]:
    """
    Edit a mortality record, moving the quantity difference onto the batch.

    Lowering the quantity gives animals back; raising it takes more away and
    raises ValueError when the batch does not hold that many.
    """
    db_record = get_mortality_record(db, record_id, tenant_id)
    if db_record is None:
        return None

    update_data = {key: value for key, value in mortality.model_dump(exclude_unset=True).items() if value is not None}

    new_quantity = update_data.get('quantity')
    if new_quantity is not None and new_quantity != db_record.quantity:
        db_batch = get_batch_for_update(db, db_record.batch_id, tenant_id)
        adjustment = calculate_quantity_adjustment(db_record.quantity, new_quantity)
        if -adjustment > db_batch.current_quantity:
            raise ValueError(
                f"Mortality quantity increase ({-adjustment}) cannot exceed current batch quantity ({db_batch.current_quantity})."
            )
        db_batch.current_quantity += adjustment
        db_batch.status = determine_batch_status(db_batch.current_quantity)
        db_batch.updated_by = changed_by
        logger.info("Adjusted batch_id=%d by %d for mortality record %d", db_batch.id, adjustment, record_id)

    for key, value in update_data.items():
        setattr(db_record, key, value)
    db_record.updated_by = changed_by

    db.commit()
    db.refresh(db_record)
    return db_record


def delete_mortality_record(db: Session, record_id: int, tenant_id: str) -> bool:
    db_record = get_mortality_record(db, record_id, tenant_id)
    if db_record is None:
        return False

    # Deleting a record gives the animals back to the batch
    db_batch = get_batch_for_update(db, db_record.batch_id, tenant_id)
    db_batch.current_quantity += db_record.quantity
    db_batch.status = 'active'
    db.delete(db_record)
    db.commit()
    logger.info("Deleted mortality record %d, batch_id=%d restored to %d",
                record_id, db_batch.id, db_batch.current_quantity)
    return True


def get_cause_distribution(db: Session, batch_id: int, tenant_id: str) -> List[dict]:
    records = db.query(MortalityRecord).filter(
        MortalityRecord.batch_id == batch_id, MortalityRecord.tenant_id == tenant_id
    ).order_by(MortalityRecord.id).all()
    return calculate_cause_distribution(
        {"cause": record.cause.value, "quantity": record.quantity} for record in records
    )


def get_mortality_trends(db: Session, batch_id: int, tenant_id: str, period: str = 'daily', days: int = 30) -> List[dict]:
    # Grouped in Python so the same query runs on PostgreSQL and SQLite
    start_date = now_ist().date() - timedelta(days=days)
    records = db.query(MortalityRecord.date, MortalityRecord.quantity).filter(
        MortalityRecord.batch_id == batch_id,
        MortalityRecord.tenant_id == tenant_id,
        MortalityRecord.date >= start_date
    ).all()
    return build_mortality_trends(
        ({"date": record_date, "quantity": quantity} for record_date, quantity in records), period
    )


def get_mortality_summary(db: Session, tenant_id: str) -> dict:
    quantities = db.query(MortalityRecord.quantity).filter(MortalityRecord.tenant_id == tenant_id).all()
    return build_mortality_summary({"quantity": quantity} for (quantity,) in quantities)
