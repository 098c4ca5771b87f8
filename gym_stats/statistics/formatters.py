# gym_stats/statistics/formatters.py
"""
Number helpers shared by the aggregations.

Rounding is half-up (2.5 -> 3, 12.25 -> 12.3) to match the dashboard's
display values, not Python's banker's rounding.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Union

import numpy as np
import pandas as pd


def to_number(value: Any) -> float:
    """Convert to float; None, NaN, booleans and junk become NaN."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    if isinstance(value, str):
        value = value.strip().replace(',', '')
        if not value:
            return math.nan
    try:
        result = float(value)
    except (TypeError, ValueError):
        return math.nan
    return result if math.isfinite(result) else math.nan


def round_half_up(value: Union[int, float], digits: int = 0) -> Union[int, float]:
    """Round half away from zero; digits=0 returns an int."""
    if value is None or pd.isna(value):
        return 0 if digits == 0 else 0.0
    try:
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0 if digits == 0 else 0.0
    if digits == 0:
        return int(rounded)
    return float(rounded)


def round1(value: Union[int, float]) -> float:
    return round_half_up(value, 1)
