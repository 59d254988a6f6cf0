from typing import Optional
from pydantic import BaseModel, validator
import datetime
from datetime import date
from models.feed import FeedType


class FeedRecordBase(BaseModel):
    feed_type: FeedType
    quantity_kg: float
    cost: float = 0.0
    date: date


class FeedRecordCreate(FeedRecordBase):

    @validator('quantity_kg')
    def validate_quantity_kg(cls, v):
        if v <= 0:
            raise ValueError('Quantity must be greater than 0')
        return v

    @validator('cost')
    def validate_cost(cls, v):
        if v < 0:
            raise ValueError('Cost cannot be negative')
        return v


class FeedRecordUpdate(BaseModel):
    feed_type: Optional[FeedType] = None
    quantity_kg: Optional[float] = None
    cost: Optional[float] = None
    date: Optional[datetime.date] = None

    @validator('quantity_kg')
    def validate_quantity_kg(cls, v):
        if v is not None and v <= 0:
            raise ValueError('Quantity must be greater than 0')
        return v

    @validator('cost')
    def validate_cost(cls, v):
        if v is not None and v < 0:
            raise ValueError('Cost cannot be negative')
        return v


class FeedRecord(FeedRecordBase):
    id: int
    batch_id: int
    tenant_id: Optional[str] = None

    class Config:
        from_attributes = True


class FeedStats(BaseModel):
    total_quantity_kg: float
    total_cost: float
    record_count: int
