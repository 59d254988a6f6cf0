from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin, now_ist


class WeightSample(Base, TimestampMixin):
    __tablename__ = "weight_sample"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    batch_id = Column(Integer, ForeignKey("batch.id"), nullable=False, index=True)
    date = Column(Date, default=lambda: now_ist().date())
    sample_size = Column(Integer, nullable=False)
    average_weight_kg = Column(Numeric(10, 3), nullable=False)

    batch = relationship("Batch", back_populates="weight_samples")
