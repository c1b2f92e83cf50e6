"""Statistical primitives shared by the scoring engines"""

import math
from decimal import Decimal, ROUND_CEILING, ROUND_DOWN, ROUND_HALF_UP, localcontext
from typing import Dict, Iterable, List, Sequence

from autovest.domain.exceptions import InvalidInputError
from autovest.domain.models import Transaction
from autovest.utils.date_utils import month_key

# Digits kept beyond the integer part so quantizing large magnitudes stays exact
EXTRA_PRECISION = 40


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence"""
    if not values:
        return 0.0
    return sum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N), 0 for an empty sequence"""
    if not values:
        return 0.0
    avg = mean(values)
    variance = mean([(v - avg) ** 2 for v in values])
    return math.sqrt(variance)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """
    Relative variability: stdev / mean.

    Lower CV = more stable spending. A zero mean yields 0 rather than a
    division error.
    """
    avg = mean(values)
    if avg == 0:
        return 0.0
    return standard_deviation(values) / avg


def normalize_score(value: float, min_value: float = 0, max_value: float = 100) -> float:
    """Clamp value into [min_value, max_value] (no rounding)"""
    return max(min_value, min(max_value, value))


def round_half_up(value: float, ndigits: int = 0):
    """
    Round with halves going away from zero (62.5 -> 63, 2.345 -> 2.35).

    Python's round() uses banker's rounding, which would score 62.5 as 62.
    Returns an int when ndigits is 0, a float otherwise.
    """
    exact = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + ndigits + EXTRA_PRECISION)
        rounded = exact.quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def calculate_spare_change(amount: float, cap: float = 10) -> float:
    """
    Round amount up to the next multiple of cap and return the difference.

    Decimal arithmetic keeps exact multiples at exactly 0.0; the result is
    truncated (not rounded) to 2 decimal places.

    Example:
        143 with cap 10 -> 7.0
        45.5 with cap 50 -> 4.5
    """
    if not math.isfinite(cap) or cap <= 0:
        raise InvalidInputError(f"Round-up cap must be positive, got {cap}")
    if not math.isfinite(amount):
        raise InvalidInputError(f"Transaction amount must be finite, got {amount}")

    exact = Decimal(str(amount))
    step = Decimal(str(cap))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + EXTRA_PRECISION)
        rounded_up = (exact / step).to_integral_value(rounding=ROUND_CEILING) * step
        spare = (rounded_up - exact).quantize(Decimal("0.01"), rounding=ROUND_DOWN)
    return float(spare)


def monthly_spending(transactions: Iterable[Transaction]) -> List[float]:
    """Total transaction amount per calendar month, in first-seen order"""
    totals: Dict[str, float] = {}
    for txn in transactions:
        key = month_key(txn.date)
        totals[key] = totals.get(key, 0.0) + txn.amount
    return list(totals.values())
