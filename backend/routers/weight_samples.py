from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
import crud.weight_sample as crud_weight_sample
from database import get_db
from schemas.weight_sample import WeightSampleCreate, WeightSample
from utils.lookups import get_batch_or_404
from utils.tenancy import get_tenant_id, get_changed_by
import logging

router = APIRouter(prefix="/batches/{batch_id}/weights", tags=["Weight Samples"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=WeightSample)
def create_weight_sample(
    batch_id: int,
    sample: WeightSampleCreate,
    db: Session = Depends(get_db),
    tenant_id: str = Depends(get_tenant_id),
    changed_by: Optional[str] = Depends(get_changed_by)
):
    db_batch = get_batch_or_404(db, batch_id, tenant_id)
    logger.info("Recording weight sample of %d head for batch_id=%d", sample.sample_size, batch_id)
    return crud_weight_sample.create_weight_sample(db, db_batch, sample, changed_by=changed_by)


@router.get("/", response_model=List[WeightSample])
def read_weight_samples(batch_id: int, db: Session = Depends(get_db), tenant_id: str = Depends(get_tenant_id)):
    get_batch_or_404(db, batch_id, tenant_id)
    return crud_weight_sample.get_weight_samples(db, batch_id, tenant_id)
