import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.batch import Batch
from models.mortality import MortalityRecord
from models.feed import FeedRecord
from models.weight_sample import WeightSample
from schemas.batch import BatchCreate, BatchUpdate
from utils.metrics import (
    calculate_batch_total_cost,
    calculate_fcr,
    calculate_mortality_rate,
    calculate_weight_gain,
    determine_batch_status,
)

logger = logging.getLogger(__name__)


def get_batch_by_id(db: Session, batch_id: int, tenant_id: str) -> Optional[Batch]:
    return db.query(Batch).filter(Batch.id == batch_id, Batch.tenant_id == tenant_id).first()


def get_batch_for_update(db: Session, batch_id: int, tenant_id: str) -> Optional[Batch]:
    """
    Reload a batch with a row lock so quantity checks see the committed stock.

    populate_existing() overwrites whatever the session already holds for the row.
    """
    return db.query(Batch).filter(
        Batch.id == batch_id, Batch.tenant_id == tenant_id
    ).with_for_update().populate_existing().first()


def get_batches(db: Session, tenant_id: str, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Batch]:
    query = db.query(Batch).filter(Batch.tenant_id == tenant_id)
    if status:
        query = query.filter(Batch.status == status)
    return query.order_by(Batch.batch_no).offset(skip).limit(limit).all()


def create_batch(db: Session, batch: BatchCreate, tenant_id: str, changed_by: Optional[str] = None) -> Batch:
    cost_per_unit = Decimal(str(batch.cost_per_unit))
    db_batch = Batch(
        **batch.model_dump(exclude={'cost_per_unit'}),
        cost_per_unit=cost_per_unit,
        total_cost=calculate_batch_total_cost(batch.initial_quantity, cost_per_unit),
        current_quantity=batch.initial_quantity,
        status='active',
        tenant_id=tenant_id,
        created_by=changed_by,
        updated_by=changed_by
    )
    db.add(db_batch)
    db.commit()
    db.refresh(db_batch)
    logger.info("Created batch %s (id=%d) with %d head for tenant %s",
                db_batch.batch_no, db_batch.id, db_batch.initial_quantity, tenant_id)
    return db_batch


def update_batch(db: Session, batch_id: int, tenant_id: str, batch: BatchUpdate, changed_by: Optional[str] = None) -> Optional[Batch]:
    """
    Apply a partial update to a batch.

    current_quantity may only go down (stock is added through new batches) and,
    unless a status is given explicitly, the status follows the new quantity.
    Raises ValueError for invalid quantity or harvest date changes.
    """
    db_batch = get_batch_for_update(db, batch_id, tenant_id)
    if db_batch is None:
        return None

    # None means "leave unchanged", except for target_harvest_date which may be cleared
    update_data = {
        key: value for key, value in batch.model_dump(exclude_unset=True).items()
        if value is not None or key == 'target_harvest_date'
    }

    new_quantity = update_data.get('current_quantity')
    if new_quantity is not None and new_quantity > db_batch.current_quantity:
        raise ValueError(
            f"New quantity ({new_quantity}) cannot exceed current quantity ({db_batch.current_quantity}) without adding stock."
        )
    target_harvest_date = update_data.get('target_harvest_date')
    if target_harvest_date is not None and target_harvest_date <= db_batch.acquisition_date:
        raise ValueError("Target harvest date must be after acquisition date.")

    if new_quantity is not None and 'status' not in update_data:
        update_data['status'] = determine_batch_status(new_quantity)
    for key, value in update_data.items():
        setattr(db_batch, key, value)
    db_batch.updated_by = changed_by

    db.commit()
    db.refresh(db_batch)
    logger.info("Updated batch_id=%d fields %s", batch_id, sorted(update_data))
    return db_batch


def has_related_records(db: Session, batch_id: int) -> bool:
    for model in (MortalityRecord, FeedRecord, WeightSample):
        if db.query(model.id).filter(model.batch_id == batch_id).first() is not None:
            return True
    return False


def delete_batch(db: Session, batch_id: int, tenant_id: str) -> bool:
    """
    Delete a batch that has no mortality, feed or weight records.

    Returns False when the batch does not exist and raises ValueError when
    related records still reference it.
    """
    db_batch = get_batch_by_id(db, batch_id, tenant_id)
    if db_batch is None:
        return False
    if has_related_records(db, batch_id):
        raise ValueError("Batch has related records and cannot be deleted.")
    db.delete(db_batch)
    db.commit()
    return True


def get_batch_stats(db: Session, batch_id: int, tenant_id: str) -> Optional[dict]:
    """
    Aggregate mortality, feed and weight data for one batch.

    FCR is only reported when there are at least two weight samples, some
    feed on record and a positive weight gain between the oldest and newest
    sample (scaled by the current head count).
    """
    db_batch = get_batch_by_id(db, batch_id, tenant_id)
    if db_batch is None:
        return None

    total_deaths, total_mortality = db.query(
        func.count(MortalityRecord.id),
        func.coalesce(func.sum(MortalityRecord.quantity), 0)
    ).filter(MortalityRecord.batch_id == batch_id, MortalityRecord.tenant_id == tenant_id).one()

    total_feedings, total_feed_kg, total_feed_cost = db.query(
        func.count(FeedRecord.id),
        func.coalesce(func.sum(FeedRecord.quantity_kg), 0),
        func.coalesce(func.sum(FeedRecord.cost), 0)
    ).filter(FeedRecord.batch_id == batch_id, FeedRecord.tenant_id == tenant_id).one()

    weights = [
        sample.average_weight_kg
        for sample in db.query(WeightSample)
        .filter(WeightSample.batch_id == batch_id, WeightSample.tenant_id == tenant_id)
        .order_by(WeightSample.date, WeightSample.id)
        .all()
    ]

    total_feed_kg = float(total_feed_kg)
    fcr = None
    if total_feed_kg > 0:
        weight_gain = calculate_weight_gain(weights, db_batch.current_quantity)
        if weight_gain is not None and weight_gain > 0:
            fcr = calculate_fcr(total_feed_kg, weight_gain)

    return {
        "batch": db_batch,
        "mortality": {
            "total_deaths": total_deaths,
            "total_quantity": int(total_mortality),
            "rate": calculate_mortality_rate(db_batch.initial_quantity, int(total_mortality)),
        },
        "feed": {
            "total_feedings": total_feedings,
            "total_kg": total_feed_kg,
            "total_cost": float(total_feed_cost),
            "fcr": fcr,
        },
        "current_weight": float(weights[-1]) if weights else None,
    }
