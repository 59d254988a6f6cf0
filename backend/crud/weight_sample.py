from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from models.batch import Batch
from models.weight_sample import WeightSample
from schemas.weight_sample import WeightSampleCreate


def create_weight_sample(db: Session, db_batch: Batch, sample: WeightSampleCreate, changed_by: Optional[str] = None) -> WeightSample:
    db_sample = WeightSample(
        batch_id=db_batch.id,
        tenant_id=db_batch.tenant_id,
        date=sample.date,
        sample_size=sample.sample_size,
        average_weight_kg=Decimal(str(sample.average_weight_kg)),
        created_by=changed_by,
        updated_by=changed_by
    )
    db.add(db_sample)
    db.commit()
    db.refresh(db_sample)
    return db_sample


def get_weight_samples(db: Session, batch_id: int, tenant_id: str) -> List[WeightSample]:
    """Newest sample first."""
    return db.query(WeightSample).filter(
        WeightSample.batch_id == batch_id, WeightSample.tenant_id == tenant_id
    ).order_by(WeightSample.date.desc(), WeightSample.id.desc()).all()
