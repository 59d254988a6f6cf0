from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import crud.mortality as crud_mortality
from database import get_db
from schemas.mortality import (
    CauseDistributionEntry,
    MortalityRecord,
    MortalityRecordCreate,
    MortalityRecordUpdate,
    MortalitySummary,
    MortalityTrend,
    TrendPeriod,
)
from utils.lookups import get_batch_or_404
from utils.tenancy import get_tenant_id, get_changed_by
import logging

router = APIRouter(tags=["Mortality"])
logger = logging.getLogger(__name__)


@router.post("/batches/{batch_id}/mortality", response_model=MortalityRecord)
def create_mortality_record(
    batch_id: int,
    mortality: MortalityRecordCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    db_batch = get_batch_or_404(db, batch_id, tenant_id)
    try:
        return crud_mortality.record_mortality(db, db_batch, mortality, changed_by=changed_by)
    except ValueError as e:
        logger.warning("Rejected mortality record for batch_id=%d: %s", batch_id, e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/batches/{batch_id}/mortality", response_model=List[MortalityRecord])
def read_mortality_records(
    batch_id: int,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    get_batch_or_404(db, batch_id, tenant_id)
    return crud_mortality.get_mortality_records(db, batch_id, tenant_id, skip=skip, limit=limit)


@router.get("/batches/{batch_id}/mortality/causes", response_model=List[CauseDistributionEntry])
def read_cause_distribution(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    """
    Deaths grouped by cause with each cause's share of the batch total.
    """
    get_batch_or_404(db, batch_id, tenant_id)
    return crud_mortality.get_cause_distribution(db, batch_id, tenant_id)


@router.get("/batches/{batch_id}/mortality/trends", response_model=List[MortalityTrend])
def read_mortality_trends(
    batch_id: int,
    period: TrendPeriod = TrendPeriod.DAILY,
    days: int = Query(30, ge=1),
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    """
    Deaths over the last `days` days, grouped by day, week or month, oldest first.
    """
    get_batch_or_404(db, batch_id, tenant_id)
    logger.info("Fetching %s mortality trends for batch_id=%d over %d days", period.value, batch_id, days)
    return crud_mortality.get_mortality_trends(db, batch_id, tenant_id, period=period.value, days=days)


@router.get("/mortality/summary", response_model=MortalitySummary)
def read_mortality_summary(db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    return crud_mortality.get_mortality_summary(db, tenant_id)


@router.patch("/mortality/{record_id}", response_model=MortalityRecord)
def update_mortality_record(
    record_id: int,
    mortality: MortalityRecordUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    try:
        db_record = crud_mortality.update_mortality_record(db, record_id, tenant_id, mortality, changed_by=changed_by)
    except ValueError as e:
        logger.warning("Rejected update for mortality record %d: %s", record_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    if db_record is None:
        logger.warning("Mortality record %d not found for tenant %s", record_id, tenant_id)
        raise HTTPException(status_code=404, detail="Mortality record not found")
    return db_record


@router.delete("/mortality/{record_id}")
def delete_mortality_record(record_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    if not crud_mortality.delete_mortality_record(db, record_id, tenant_id):
        raise HTTPException(status_code=404, detail="Mortality record not found")
    return {"message": "Mortality record deleted successfully"}
