# gym_stats/statistics/summaries.py
"""
Categorical Summaries for the dashboard cards

- summarize(): count and percent of total per fixed category
- consultation_status_summary(): pending / in progress / completed / follow-up
- member_summary(): active, expired, expiring soon, top membership types
- staff_summary(): active / inactive and head count by position
- consultation_record_stats(): completion figures and recent monthly counts

total is always the full collection length, so records with an unknown or
missing category count towards total but land in no bucket.
"""

import logging
from typing import Any, Dict, Iterable, List

import pandas as pd

from ..config import config, StatisticsSettings
from .clock import Clock, resolve_clock
from .constants import (
    COLUMN_ALIASES,
    CONSULTATION_COLUMNS,
    CONSULTATION_RECORD_STATUSES,
    CONSULTATION_STATUSES,
    MEMBER_COLUMNS,
    MEMBER_TYPE_UNSPECIFIED,
    STAFF_COLUMNS,
    STAFF_STATUS_ACTIVE,
    STAFF_STATUS_INACTIVE,
)
from .date_ranges import shift_month
from .filters import coerce_datetime, on_or_after, to_frame
from .formatters import round1, round_half_up
from .models import CategoricalSummary, CategoryCount

logger = logging.getLogger(__name__)


def _counts_in_order(values: pd.Series) -> Dict[Any, int]:
    """Counts per value, keyed in order of first appearance."""
    if values.empty:
        return {}
    counts = values.groupby(values, sort=False).size()
    return {key: int(count) for key, count in counts.items()}


def summarize(records, categories: Iterable[str], field: str = 'status') -> CategoricalSummary:
    """
    Count records per category.

    Args:
        records: DataFrame or list of records
        categories: The closed set of categories, in display order
        field: Field holding the category

    Returns:
        CategoricalSummary; every percent is 0 when there are no records
    """
    field = COLUMN_ALIASES.get(field, field)
    df = to_frame(records, [field])
    total = len(df)
    counts = _counts_in_order(df[field].dropna())

    buckets = {}
    for category in categories:
        count = counts.get(category, 0)
        percent = round1(count / total * 100) if total > 0 else 0.0
        buckets[category] = CategoryCount(count=count, percent=percent)

    unbucketed = total - sum(b.count for b in buckets.values())
    if unbucketed:
        logger.debug(f"{unbucketed} record(s) with no known '{field}' category")

    return CategoricalSummary(total=total, buckets=buckets)


def consultation_status_summary(records, field: str = 'status') -> CategoricalSummary:
    """Consultation members by progress state."""
    return summarize(records, CONSULTATION_STATUSES, field)


def member_summary(members, clock: Clock = None, settings: StatisticsSettings = None) -> Dict[str, Any]:
    """
    Member card figures.

    A member is active while membership_end is today or later; members with
    no end date count as expired. Expiring members are active members whose
    membership ends within the configured number of days.
    """
    settings = settings or config.get_statistics_settings()
    today = resolve_clock(clock).today()
    df = to_frame(members, MEMBER_COLUMNS)

    ends = coerce_datetime(df['membership_end'])
    active = on_or_after(ends, today)
    days_left = (ends - pd.Timestamp(today)).dt.days
    expiring = active & (days_left <= settings.expiring_days_threshold)

    types = df['membership_type'].where(
        df['membership_type'].notna() & (df['membership_type'] != ''),
        MEMBER_TYPE_UNSPECIFIED,
    )
    type_counts = _counts_in_order(types)
    # sorted() is stable, so equal counts keep first-appearance order
    top_types = sorted(type_counts.items(), key=lambda item: item[1], reverse=True)

    return {
        'total': len(df),
        'active': int(active.sum()),
        'expired': len(df) - int(active.sum()),
        'expiring_soon': int(expiring.sum()),
        'top_membership_types': top_types[:settings.top_membership_types],
    }


def staff_summary(staff) -> Dict[str, Any]:
    """Staff card figures."""
    df = to_frame(staff, STAFF_COLUMNS)
    positions = df['position'].where(df['position'].notna(), MEMBER_TYPE_UNSPECIFIED)

    return {
        'total': len(df),
        'active': int((df['status'] == STAFF_STATUS_ACTIVE).sum()),
        'inactive': int((df['status'] == STAFF_STATUS_INACTIVE).sum()),
        'by_position': _counts_in_order(positions),
    }


def _recent_months(clock: Clock, months: int) -> List[str]:
    today = resolve_clock(clock).today()
    keys = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(today.year, today.month, -offset)
        keys.append(f"{year:04d}-{month:02d}")
    return keys


def consultation_record_stats(records, clock: Clock = None, settings: StatisticsSettings = None) -> Dict[str, Any]:
    """
    Consultation history figures.

    Returns:
        Dict with total, completed, scheduled, cancelled, completion_rate
        (whole percent), type_stats and monthly_stats for the most recent
        months including the current one
    """
    settings = settings or config.get_statistics_settings()
    df = to_frame(records, CONSULTATION_COLUMNS)
    total = len(df)

    status_counts = {status: int((df['status'] == status).sum()) for status in CONSULTATION_RECORD_STATUSES}
    completed = status_counts['completed']

    types = df['consultation_type'].where(df['consultation_type'].notna(), MEMBER_TYPE_UNSPECIFIED)

    month_keys = _recent_months(clock, settings.monthly_stats_months)
    dates = coerce_datetime(df['consultation_date']).dropna()
    month_counts = _counts_in_order(dates.dt.strftime('%Y-%m')) if len(dates) else {}

    return {
        'total': total,
        **status_counts,
        'completion_rate': round_half_up(completed / total * 100) if total > 0 else 0,
        'type_stats': _counts_in_order(types),
        'monthly_stats': [{'month': key, 'count': month_counts.get(key, 0)} for key in month_keys],
    }
