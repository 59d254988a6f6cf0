import enum
from typing import Optional
from pydantic import BaseModel, validator
import datetime
from datetime import date
from models.mortality import MortalityCause


class TrendPeriod(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MortalityRecordBase(BaseModel):
    quantity: int
    date: date
    cause: MortalityCause = MortalityCause.UNKNOWN
    notes: Optional[str] = None


class MortalityRecordCreate(MortalityRecordBase):

    @validator('quantity')
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError('Mortality quantity must be greater than 0')
        return v


class MortalityRecordUpdate(BaseModel):
    quantity: Optional[int] = None
    date: Optional[datetime.date] = None
    cause: Optional[MortalityCause] = None
    notes: Optional[str] = None

    @validator('quantity')
    def validate_quantity(cls, v):
        if v is not None and v <= 0:
            raise ValueError('Mortality quantity must be greater than 0')
        return v


class MortalityRecord(MortalityRecordBase):
    id: int
    batch_id: int
    tenant_id: Optional[str] = None

    class Config:
        from_attributes = True


class CauseDistributionEntry(BaseModel):
    cause: str
    count: int
    quantity: int
    percentage: float


class MortalityTrend(BaseModel):
    period: str
    records: int
    quantity: int


class MortalitySummary(BaseModel):
    total_deaths: int
    record_count: int
