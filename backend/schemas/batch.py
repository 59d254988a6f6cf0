from typing import Optional
from pydantic import BaseModel, validator, computed_field
from datetime import date, datetime
from utils.metrics import calculate_depletion_percentage

BATCH_STATUSES = ("active", "depleted", "sold")


class BatchBase(BaseModel):
    batch_no: str
    species: str
    initial_quantity: int
    cost_per_unit: float = 0.0
    acquisition_date: date
    target_harvest_date: Optional[date] = None


class BatchCreate(BatchBase):

    @validator('batch_no', 'species')
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

    @validator('initial_quantity')
    def validate_initial_quantity(cls, v):
        if v <= 0:
            raise ValueError('Initial quantity must be greater than 0')
        return v

    @validator('cost_per_unit')
    def validate_cost_per_unit(cls, v):
        if v < 0:
            raise ValueError('Cost per unit cannot be negative')
        return v

    @validator('target_harvest_date')
    def validate_target_harvest_date(cls, v, values):
        acquisition_date = values.get('acquisition_date')
        if v is not None and acquisition_date is not None and acquisition_date >= v:
            raise ValueError('Target harvest date must be after acquisition date')
        return v


class BatchUpdate(BaseModel):
    species: Optional[str] = None
    status: Optional[str] = None
    current_quantity: Optional[int] = None
    target_harvest_date: Optional[date] = None

    @validator('species')
    def validate_species(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Species cannot be empty')
        return v.strip() if v is not None else v

    @validator('status')
    def validate_status(cls, v):
        if v is not None and v not in BATCH_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(BATCH_STATUSES)}")
        return v

    @validator('current_quantity')
    def validate_current_quantity(cls, v):
        if v is not None and v < 0:
            raise ValueError('Quantity cannot be negative')
        return v


class Batch(BatchBase):
    id: int
    tenant_id: Optional[str] = None
    current_quantity: int
    total_cost: float
    status: str
    created_at: Optional[datetime] = None

    @computed_field
    def depletion_percentage(self) -> float:
        return calculate_depletion_percentage(self.initial_quantity, self.current_quantity)

    class Config:
        from_attributes = True
