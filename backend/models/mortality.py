from sqlalchemy import Column, Integer, String, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin, now_ist


class MortalityCause(enum.Enum):
    DISEASE = "disease"
    PREDATOR = "predator"
    WEATHER = "weather"
    UNKNOWN = "unknown"
    OTHER = "other"
    STARVATION = "starvation"
    INJURY = "injury"
    POISONING = "poisoning"
    SUFFOCATION = "suffocation"
    CULLING = "culling"


class MortalityRecord(Base, TimestampMixin):
    __tablename__ = "mortality_record"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, index=True, nullable=False)
    batch_id = Column(Integer, ForeignKey("batch.id"), nullable=False, index=True)
    date = Column(Date, default=lambda: now_ist().date())
    quantity = Column(Integer, nullable=False)
    cause = Column(Enum(MortalityCause), default=MortalityCause.UNKNOWN, nullable=False)
    notes = Column(String, nullable=True)

    batch = relationship("Batch", back_populates="mortality_records")
