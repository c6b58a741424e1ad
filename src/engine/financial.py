"""Financial math primitives shared by every engine module.

Pure functions: Decimal in, Decimal out. No I/O.
"""

import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from dateutil.relativedelta import relativedelta
from scipy.stats import linregress

TWO_PLACES = Decimal("0.01")
TREND_THRESHOLD = Decimal("0.01")

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

Number = Decimal | int | float | str


class TrendDirection(Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


def to_decimal(value: Number) -> Decimal:
    """Coerce a plain number to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(amount: Number) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(amount).quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    """Annual percentage (18.99) to monthly fraction (0.015825)."""
    return to_decimal(annual_rate_percent) / 12 / 100


def mean(values: list[Number]) -> Decimal:
    if not values:
        return Decimal("0")
    return sum((to_decimal(v) for v in values), Decimal("0")) / len(values)


def median(values: list[Number]) -> Decimal:
    if not values:
        return Decimal("0")
    ordered = sorted(to_decimal(v) for v in values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def standard_deviation(values: list[Number]) -> Decimal:
    """Population standard deviation."""
    if not values:
        return Decimal("0")
    avg = mean(values)
    variance = mean([(to_decimal(v) - avg) ** 2 for v in values])
    return variance.sqrt()


def percentage(part: Number, whole: Number) -> Decimal:
    """part / whole as a 0-100 percentage; 0 when whole is 0."""
    whole = to_decimal(whole)
    if whole == 0:
        return Decimal("0")
    return round_currency(to_decimal(part) / whole * 100)


def clamp(value: Number, lo: Number, hi: Number) -> Decimal:
    return min(max(to_decimal(value), to_decimal(lo)), to_decimal(hi))


def growth_rate(old_value: Number, new_value: Number) -> Decimal:
    """Growth in percent. From zero, any increase counts as 100%."""
    old_value = to_decimal(old_value)
    new_value = to_decimal(new_value)
    if old_value == 0:
        return Decimal("100") if new_value > 0 else Decimal("0")
    return (new_value - old_value) / old_value * 100


def is_payment_consistent(
    payment: Number, mean_payment: Number, threshold: Number = Decimal("0.2")
) -> bool:
    """True when payment is within threshold (fraction) of the mean."""
    payment = to_decimal(payment)
    mean_payment = to_decimal(mean_payment)
    if mean_payment == 0:
        return payment == 0
    deviation = abs(payment - mean_payment) / mean_payment
    return deviation <= to_decimal(threshold)


def trend_slope(values: list[Number]) -> Decimal:
    """Least-squares slope of value against index. 0 for fewer than two points."""
    if len(values) < 2:
        return Decimal("0")
    result = linregress(range(len(values)), [float(v) for v in values])
    return to_decimal(result.slope)


def trend_direction(values: list[Number]) -> TrendDirection:
    slope = trend_slope(values)
    if abs(slope) < TREND_THRESHOLD:
        return TrendDirection.STABLE
    return TrendDirection.INCREASING if slope > 0 else TrendDirection.DECREASING


# ---- Calendar helpers ----

def month_key(d: date) -> str:
    """Sortable bucket key, e.g. "2025-01"."""
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(key: str) -> date:
    year, month = key.split("-")
    return date(int(year), int(month), 1)


def month_label(d: date) -> str:
    """Display label, e.g. "Jan 2025"."""
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def label_for_key(key: str) -> str:
    return month_label(parse_month_key(key))


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def add_months(d: date, months: int) -> date:
    return d + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    return abs((end - start).days)


def elapsed_months(start: date, as_of: date) -> Decimal:
    """Elapsed 30-day months, floored at 1 so new accounts don't blow up averages."""
    return max(Decimal("1"), Decimal(days_between(start, as_of)) / 30)


def months_to_clear(balance: Decimal, monthly_reduction: Decimal) -> int:
    """Whole months needed to retire balance at a steady monthly reduction."""
    return math.ceil(balance / monthly_reduction)
