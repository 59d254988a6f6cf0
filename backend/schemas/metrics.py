from typing import Optional
from pydantic import BaseModel
from schemas.batch import Batch


class FCRRequest(BaseModel):
    feed_consumed_kg: float
    weight_gain_kg: float


class FCRResponse(BaseModel):
    fcr: Optional[float] = None


class MortalityRateRequest(BaseModel):
    initial_quantity: float
    mortality_count: float


class MortalityRateResponse(BaseModel):
    mortality_rate: Optional[float] = None


class MortalityStats(BaseModel):
    total_deaths: int
    total_quantity: int
    rate: float


class FeedSummary(BaseModel):
    total_feedings: int
    total_kg: float
    total_cost: float
    fcr: Optional[float] = None


class BatchStats(BaseModel):
    batch: Batch
    mortality: MortalityStats
    feed: FeedSummary
    current_weight: Optional[float] = None
