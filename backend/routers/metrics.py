import math
from fastapi import APIRouter
from schemas.metrics import FCRRequest, FCRResponse, MortalityRateRequest, MortalityRateResponse
from utils.metrics import calculate_fcr, calculate_mortality_rate

router = APIRouter(prefix="/metrics", tags=["Metrics"])


def _json_number(value):
    # JSON has no infinity; a result beyond the float range is reported as null
    if value is not None and math.isinf(value):
        return None
    return value


@router.post("/fcr", response_model=FCRResponse)
def feed_conversion_ratio(payload: FCRRequest):
    """
    Feed conversion ratio for ad-hoc inputs. `fcr` is null when feed or gain is not positive.
    """
    return {"fcr": _json_number(calculate_fcr(payload.feed_consumed_kg, payload.weight_gain_kg))}


@router.post("/mortality-rate", response_model=MortalityRateResponse)
def mortality_rate(payload: MortalityRateRequest):
    return {"mortality_rate": _json_number(calculate_mortality_rate(payload.initial_quantity, payload.mortality_count))}
