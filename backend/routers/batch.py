from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import crud.batch as crud_batch
from database import get_db
from models.batch import Batch as BatchModel
from schemas.batch import BatchCreate, BatchUpdate, Batch as BatchSchema
from schemas.metrics import BatchStats
from utils.lookups import get_batch_or_404
from utils.tenancy import get_tenant_id, get_changed_by

# --- Logging Configuration (import and get logger) ---
import logging
logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/batches",
    tags=["Batches"],
)


@router.post("/", response_model=BatchSchema)
def create_batch(
    batch: BatchCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    # Application-level uniqueness check for active batches
    existing = db.query(BatchModel).filter(
        (BatchModel.batch_no == batch.batch_no) &
        (BatchModel.is_active) &
        (BatchModel.tenant_id == tenant_id)
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="An active batch with the same batch_no already exists.")
    return crud_batch.create_batch(db=db, batch=batch, tenant_id=tenant_id, changed_by=changed_by)


@router.get("/", response_model=List[BatchSchema])
def read_batches(
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id)
):
    logger.info("Fetching batches with skip=%d, limit=%d, status=%s", skip, limit, status)
    batches = crud_batch.get_batches(db, tenant_id=tenant_id, status=status, skip=skip, limit=limit)
    logger.info("Fetched %d batches", len(batches))
    return batches


@router.get("/{batch_id}", response_model=BatchSchema)
def read_batch(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    logger.info("Fetching batch with batch_id=%d", batch_id)
    return get_batch_or_404(db, batch_id, tenant_id)


@router.patch("/{batch_id}", response_model=BatchSchema)
def update_batch(
    batch_id: int,
    batch: BatchUpdate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    get_batch_or_404(db, batch_id, tenant_id)
    try:
        return crud_batch.update_batch(db, batch_id, tenant_id, batch, changed_by=changed_by)
    except ValueError as e:
        logger.warning("Rejected update for batch_id=%d: %s", batch_id, e)
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{batch_id}")
def delete_batch(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    try:
        deleted = crud_batch.delete_batch(db, batch_id, tenant_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Batch not found")
    return {"message": "Batch deleted successfully"}


@router.get("/{batch_id}/stats", response_model=BatchStats)
def read_batch_stats(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    """
    Mortality, feed and weight summary for a batch, including mortality rate and FCR.
    """
    try:
        stats = crud_batch.get_batch_stats(db, batch_id, tenant_id)
    except Exception as e:
        logger.exception(f"Error computing stats for batch_id={batch_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error while computing batch stats.")
    if stats is None:
        logger.warning("Batch with batch_id=%d not found for tenant %s", batch_id, tenant_id)
        raise HTTPException(status_code=404, detail="Batch not found")
    return stats
