# gym_stats/statistics/date_ranges.py
"""
Date Range Calculations

Inclusive YYYY-MM-DD windows for the dashboard's date pickers:
- today / week / month / year windows around an anchor date, shifted by an
  integer offset (0 = the anchor's own window, -1 = previous, +1 = next)
- the window containing wall-clock today (through an injected Clock)
- "last N days" windows and prev/next navigation from a selected start

Weeks run Monday to Sunday. Month windows end on the real last day of the
month (February is leap-year aware) and roll the year over transparently.

Usage:
    compute_date_range('2025-05-15', 'week')        # 2025-05-12 .. 2025-05-18
    compute_date_range('2025-01-15', 'month', -1)   # 2024-12-01 .. 2024-12-31
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Any, Tuple, Union

import pandas as pd

from .clock import Clock, resolve_clock
from .constants import DATE_FORMAT, RANGE_UNITS, UNIT_ALIASES
from .exceptions import DateParseError, InvalidDateRangeError, UnknownUnitError
from .models import DateRange

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime]


# =============================================================================
# PARSING / FORMATTING
# =============================================================================

def parse_date(value: Any) -> date:
    """
    Parse a controlling date input.

    Accepts 'YYYY-MM-DD', ISO datetime strings, date, datetime and
    pandas.Timestamp. Anything else raises DateParseError.
    """
    if value is None or value is pd.NaT:
        raise DateParseError(value)

    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.strptime(text, DATE_FORMAT).date()
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError as e:
            raise DateParseError(value) from e

    raise DateParseError(value)


def format_date(value: DateLike) -> str:
    """Format as YYYY-MM-DD."""
    if isinstance(value, datetime):
        value = value.date()
    elif not isinstance(value, date):
        value = parse_date(value)
    return value.isoformat()


def normalize_unit(unit: str) -> str:
    unit = UNIT_ALIASES.get(unit, unit)
    if unit not in RANGE_UNITS:
        raise UnknownUnitError(
            f"Unknown range unit {unit!r}; expected one of {', '.join(RANGE_UNITS)}"
        )
    return unit


def as_date_range(value: Any) -> DateRange:
    """Accept a DateRange, a {'start', 'end'} dict or a (start, end) pair."""
    if isinstance(value, DateRange):
        return value
    if isinstance(value, dict):
        if 'start' not in value or 'end' not in value:
            raise InvalidDateRangeError(f"Date range dict needs 'start' and 'end': {value!r}")
        return DateRange(value['start'], value['end'])
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return DateRange(value[0], value[1])
    raise InvalidDateRangeError(f"Cannot interpret {value!r} as a date range")


# =============================================================================
# RANGE COMPUTATION
# =============================================================================

def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Add offset months to (year, month), rolling the year over."""
    index = year * 12 + (month - 1) + offset
    shifted_year, month_index = divmod(index, 12)
    return shifted_year, month_index + 1


def compute_date_range(anchor: DateLike, unit: str, offset: int = 0) -> DateRange:
    """
    Calculate the inclusive window of a granularity around an anchor date.

    Args:
        anchor: Reference date (YYYY-MM-DD string, date or datetime)
        unit: 'today', 'week', 'month' or 'year' ('day' is accepted for 'today')
        offset: Number of windows to shift (negative = earlier)

    Returns:
        DateRange with start <= end

    Raises:
        DateParseError: anchor cannot be parsed
        UnknownUnitError: unit is not supported
        InvalidDateRangeError: the shifted window leaves the calendar (year 1..9999)
    """
    base = parse_date(anchor)
    unit = normalize_unit(unit)
    offset = int(offset)

    try:
        if unit == 'today':
            start = end = base + timedelta(days=offset)

        elif unit == 'week':
            # weekday(): Monday=0 .. Sunday=6, so Sunday stays in the week that
            # started six days earlier
            monday = base - timedelta(days=base.weekday())
            start = monday + timedelta(weeks=offset)
            end = start + timedelta(days=6)

        elif unit == 'month':
            year, month = shift_month(base.year, base.month, offset)
            start = date(year, month, 1)
            end = date(year, month, calendar.monthrange(year, month)[1])

        else:  # year
            year = base.year + offset
            start = date(year, 1, 1)
            end = date(year, 12, 31)

    except (OverflowError, ValueError) as e:
        raise InvalidDateRangeError(
            f"{unit} range for {base.isoformat()} with offset {offset} is out of calendar bounds"
        ) from e

    return DateRange.from_dates(start, end)


def current_date_range(unit: str, clock: Clock = None) -> DateRange:
    """Window of the given unit containing wall-clock today."""
    today = resolve_clock(clock).today()
    return compute_date_range(today, unit, 0)


def recent_days_range(days: int, offset: int = 0, clock: Clock = None) -> DateRange:
    """
    Last N days ending on today (+ offset days), both ends included.

    recent_days_range(7) on 2025-05-15 -> 2025-05-09 .. 2025-05-15
    """
    days = int(days)
    if days < 1:
        raise InvalidDateRangeError(f"Day count must be at least 1, got {days}")

    today = resolve_clock(clock).today()
    try:
        end = today + timedelta(days=int(offset))
        start = end - timedelta(days=days - 1)
    except OverflowError as e:
        raise InvalidDateRangeError(f"Last {days} days with offset {offset} is out of calendar bounds") from e
    return DateRange.from_dates(start, end)


def relative_date_range(current_start: DateLike, unit: str, direction: str) -> DateRange:
    """
    Previous/next window computed from the currently selected start date.

    Args:
        current_start: Start of the range currently shown
        unit: Range unit
        direction: 'prev' or 'next'
    """
    if direction == 'prev':
        offset = -1
    elif direction == 'next':
        offset = 1
    else:
        raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")
    return compute_date_range(current_start, unit, offset)
