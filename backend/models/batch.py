from sqlalchemy import Column, Integer, String, Date, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.ext.hybrid import hybrid_property
from database import Base
from models.audit_mixin import TimestampMixin, now_ist


class Batch(Base, TimestampMixin):
    __tablename__ = "batch"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    batch_no = Column(String, nullable=False)
    species = Column(String, nullable=False)
    initial_quantity = Column(Integer, nullable=False)
    current_quantity = Column(Integer, nullable=False)
    cost_per_unit = Column(Numeric(12, 2), default=0)
    total_cost = Column(Numeric(14, 2), default=0)
    status = Column(String, default='active', nullable=False)  # 'active', 'depleted' or 'sold'
    acquisition_date = Column(Date, default=lambda: now_ist().date())
    target_harvest_date = Column(Date, nullable=True)

    mortality_records = relationship("MortalityRecord", back_populates="batch")
    feed_records = relationship("FeedRecord", back_populates="batch")
    weight_samples = relationship("WeightSample", back_populates="batch")

    @hybrid_property
    def is_active(self):
        return self.status == 'active'

    @is_active.expression
    def is_active(cls):
        return cls.status == 'active'

    def __repr__(self):
        return f"<Batch(id={self.id}, batch_no={self.batch_no}, species={self.species}, current_quantity={self.current_quantity}, status={self.status})>"
