import logging
from fastapi import HTTPException
from sqlalchemy.orm import Session
import crud.batch as crud_batch
from models.batch import Batch

logger = logging.getLogger(__name__)


def get_batch_or_404(db: Session, batch_id: int, tenant_id: str) -> Batch:
    """Load a tenant's batch for a route, logging and raising 404 when it does not exist."""
    db_batch = crud_batch.get_batch_by_id(db, batch_id, tenant_id)
    if db_batch is None:
        logger.warning("Batch with batch_id=%d not found for tenant %s", batch_id, tenant_id)
        raise HTTPException(status_code=404, detail="Batch not found")
    return db_batch
