"""
Batch performance metrics.

Pure helpers used by the batch stats endpoint and the /metrics routes.
None of these touch the database and none of them raise for numeric input.
"""

import math
from datetime import date
from decimal import Decimal, Overflow, ROUND_HALF_UP, localcontext
from typing import Iterable, List, Optional, Union

Number = Union[int, float, Decimal]

TWO_PLACES = Decimal('0.01')


def _to_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _to_float(value: Number) -> float:
    try:
        return float(value)
    except OverflowError:
        # ints beyond the float range
        return math.inf if value > 0 else -math.inf


def _is_finite(value: Number) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def calculate_fcr(feed_consumed_kg: Number, weight_gain_kg: Number) -> Optional[float]:
    """
    Feed conversion ratio: kg of feed per kg of live-weight gain, rounded half-up to 2 places.

    Returns None when either input is not positive (or not finite), so callers can render "N/A".
    """
    if not (_is_finite(feed_consumed_kg) and _is_finite(weight_gain_kg)):
        return None
    if feed_consumed_kg <= 0 or weight_gain_kg <= 0:
        return None
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        ratio = _to_decimal(feed_consumed_kg) / _to_decimal(weight_gain_kg)
        if not ratio.is_finite():
            return float(ratio)
        # quantize needs every integer digit plus the two decimals to fit in the precision
        ctx.prec = max(ctx.prec, ratio.adjusted() + 3)
        return float(ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def calculate_mortality_rate(initial_quantity: Number, mortality_count: Number) -> float:
    """
    Percentage of the initial population that died. Not rounded and not clamped,
    so a mortality count above the initial quantity yields more than 100.
    """
    initial_quantity = _to_float(initial_quantity)
    if initial_quantity <= 0:
        return 0
    return (_to_float(mortality_count) / initial_quantity) * 100


def calculate_new_quantity(current_quantity: int, mortality_count: int) -> int:
    return max(0, current_quantity - mortality_count)


def determine_batch_status(current_quantity: int, sold_quantity: Optional[int] = None) -> str:
    if sold_quantity is not None and sold_quantity > 0 and current_quantity == 0:
        return 'sold'
    return 'depleted' if current_quantity <= 0 else 'active'


def calculate_depletion_percentage(initial_quantity: Number, current_quantity: Number) -> float:
    if initial_quantity <= 0:
        return 0
    depleted = float(initial_quantity) - float(current_quantity)
    return min(100, (depleted / float(initial_quantity)) * 100)


def calculate_batch_total_cost(initial_quantity: int, cost_per_unit: Number) -> Decimal:
    if initial_quantity <= 0 or cost_per_unit < 0:
        return Decimal('0.00')
    total = Decimal(initial_quantity) * _to_decimal(cost_per_unit)
    return total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_cause_distribution(records: Iterable[dict]) -> List[dict]:
    """
    Group mortality records by cause.

    Each record needs 'cause' and 'quantity'. Entries keep the order in which
    causes first appear; percentage is each cause's share of total deaths.
    """
    records = list(records)
    total_deaths = sum(r['quantity'] for r in records)
    if total_deaths == 0:
        return []

    by_cause = {}
    for record in records:
        entry = by_cause.setdefault(record['cause'], {'count': 0, 'quantity': 0})
        entry['count'] += 1
        entry['quantity'] += record['quantity']

    return [
        {
            'cause': cause,
            'count': data['count'],
            'quantity': data['quantity'],
            'percentage': (data['quantity'] / total_deaths) * 100,
        }
        for cause, data in by_cause.items()
    ]


def build_feed_stats(records: Iterable[dict]) -> dict:
    # Summed in hundredths so 0.1 + 0.2 style drift never shows up in totals
    total_quantity_cents = 0
    total_cost_cents = 0
    record_count = 0
    for record in records:
        total_quantity_cents += int((_to_decimal(record['quantity_kg']) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
        total_cost_cents += int((_to_decimal(record['cost']) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
        record_count += 1
    return {
        'total_quantity_kg': total_quantity_cents / 100,
        'total_cost': total_cost_cents / 100,
        'record_count': record_count,
    }


def calculate_weight_gain(average_weights_kg: List[Number], head_count: int) -> Optional[float]:
    """
    Total live-weight gain for a batch.

    average_weights_kg is ordered oldest sample first. Gain per head is the newest
    average minus the oldest; None when fewer than two samples exist.
    """
    if len(average_weights_kg) < 2:
        return None
    gain_per_head = float(average_weights_kg[-1]) - float(average_weights_kg[0])
    return gain_per_head * head_count


def calculate_quantity_adjustment(original_quantity: int, new_quantity: int) -> int:
    """
    Change to a batch's head count when a mortality record is edited.

    Positive gives animals back to the batch, negative takes more away.
    """
    return original_quantity - new_quantity


TREND_PERIODS = ('daily', 'weekly', 'monthly')


def format_trend_period(day: date, period: str) -> str:
    """
    Bucket label for a date.

    daily -> '2026-01-05', weekly -> '2026-W01', monthly -> '2026-01'.
    Week 1 starts on January 1st and every week is seven days long.
    """
    if period == 'weekly':
        week = (day.timetuple().tm_yday - 1) // 7 + 1
        return f"{day.year}-W{week:02d}"
    if period == 'monthly':
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def build_mortality_trends(records: Iterable[dict], period: str = 'daily') -> List[dict]:
    """
    Group mortality records ('date', 'quantity') into period buckets, oldest first.
    """
    buckets = {}
    for record in records:
        key = format_trend_period(record['date'], period)
        bucket = buckets.setdefault(key, {'period': key, 'records': 0, 'quantity': 0})
        bucket['records'] += 1
        bucket['quantity'] += record['quantity']
    return [buckets[key] for key in sorted(buckets)]


def build_mortality_summary(records: Iterable[dict]) -> dict:
    total_deaths = 0
    record_count = 0
    for record in records:
        total_deaths += record['quantity']
        record_count += 1
    return {'total_deaths': total_deaths, 'record_count': record_count}
