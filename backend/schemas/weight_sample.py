from typing import Optional
from pydantic import BaseModel, validator
from datetime import date


class WeightSampleBase(BaseModel):
    date: date
    sample_size: int
    average_weight_kg: float


class WeightSampleCreate(WeightSampleBase):

    @validator('sample_size')
    def validate_sample_size(cls, v):
        if v <= 0:
            raise ValueError('Sample size must be greater than 0')
        return v

    @validator('average_weight_kg')
    def validate_average_weight(cls, v):
        if v <= 0:
            raise ValueError('Average weight must be greater than 0')
        return v


class WeightSample(WeightSampleBase):
    id: int
    batch_id: int
    tenant_id: Optional[str] = None

    class Config:
        from_attributes = True
