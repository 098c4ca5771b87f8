# gym_stats/statistics/filters.py
"""
Record Filtering

Period and status filters shared by every aggregation. Records may arrive
as a DataFrame, a list of dicts or a list of record dataclasses; filters hand
back the same shape they were given (DataFrame rows, or the original
objects in their original order).

A record whose date cannot be read is skipped, never raised: one bad row
must not blank the whole dashboard.
"""

import dataclasses
import logging
import math
from datetime import date
from typing import Any, Iterable, List, Optional

import numpy as np
import pandas as pd

from .constants import COLUMN_ALIASES, STATUS_ALL
from .date_ranges import as_date_range

logger = logging.getLogger(__name__)


# =============================================================================
# NORMALISATION
# =============================================================================

def _field_candidates(field: str) -> List[str]:
    """The canonical field name first, then every alias mapping to it."""
    canonical = COLUMN_ALIASES.get(field, field)
    candidates = [field, canonical]
    candidates += [alias for alias, target in COLUMN_ALIASES.items() if target == canonical]
    return list(dict.fromkeys(candidates))


def _record_to_dict(record: Any) -> dict:
    if isinstance(record, dict):
        return record
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    if hasattr(record, '_asdict'):
        return record._asdict()
    if hasattr(record, '__dict__'):
        return vars(record)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def to_frame(records: Any, columns: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Build a DataFrame with canonical snake_case column names.

    Args:
        records: DataFrame, iterable of dicts / dataclasses, or None
        columns: Columns guaranteed to exist in the result (filled with None)

    Returns:
        A new DataFrame; the input is never modified
    """
    if records is None:
        df = pd.DataFrame()
    elif isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame([_record_to_dict(r) for r in records])

    rename = {
        alias: target for alias, target in COLUMN_ALIASES.items()
        if alias in df.columns and target not in df.columns
    }
    if rename:
        df = df.rename(columns=rename)

    for col in columns or []:
        if col not in df.columns:
            df[col] = None

    return df


def to_timestamp(value: Any) -> pd.Timestamp:
    """
    Convert one record date to a naive Timestamp, NaT when unreadable.

    Numbers are unix seconds (consultation records store them that way).
    Timezone-aware values keep their wall-clock time.
    """
    if value is None or value is pd.NaT or isinstance(value, bool):
        return pd.NaT
    try:
        if isinstance(value, (int, float, np.integer, np.floating)):
            if not math.isfinite(float(value)):
                return pd.NaT
            ts = pd.Timestamp(float(value), unit='s')
        else:
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    return pd.NaT
            ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        return pd.NaT

    if ts is pd.NaT:
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def coerce_datetime(values: Iterable[Any]) -> pd.Series:
    """Vector form of to_timestamp; keeps the index of a Series input."""
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=object)
    if series.empty:
        return pd.Series([], index=series.index, dtype='datetime64[ns]')
    if pd.api.types.is_datetime64_any_dtype(series):
        if getattr(series.dt, 'tz', None) is not None:
            return series.dt.tz_localize(None)
        return series
    return pd.to_datetime(series.map(to_timestamp))


def _field_values(records: Any, field: str) -> pd.Series:
    """Values of a field across records, resolving column aliases."""
    candidates = _field_candidates(field)

    if isinstance(records, pd.DataFrame):
        for name in candidates:
            if name in records.columns:
                return records[name]
        return pd.Series([None] * len(records), index=records.index, dtype=object)

    values = []
    for record in records:
        data = _record_to_dict(record)
        values.append(next((data[name] for name in candidates if name in data), None))
    return pd.Series(values, dtype=object)


def _select(records: Any, mask: pd.Series):
    """Return the records where mask is True, in the input's own shape."""
    keep = mask.to_numpy(dtype=bool)
    if isinstance(records, pd.DataFrame):
        return records.loc[keep]
    return [record for record, selected in zip(records, keep) if selected]


def _materialize(records: Any):
    if records is None:
        return []
    if isinstance(records, (pd.DataFrame, list)):
        return records
    return list(records)


# =============================================================================
# FILTERS
# =============================================================================

class PeriodFilter:
    """
    Inclusive [start, end] date filter.

    The end boundary covers the whole end day: a payment at
    2025-05-31 23:59:59.999 is inside a range ending 2025-05-31.

    Usage:
        may = PeriodFilter.apply(payments, {'start': '2025-05-01', 'end': '2025-05-31'}, 'date')
    """

    @staticmethod
    def bounds(date_range) -> tuple:
        """(inclusive start, exclusive end) timestamps of a range."""
        date_range = as_date_range(date_range)
        start = pd.Timestamp(date_range.start)
        end_exclusive = pd.Timestamp(date_range.end) + pd.Timedelta(days=1)
        return start, end_exclusive

    @staticmethod
    def mask(records: Any, date_range, date_field: str) -> pd.Series:
        """Boolean mask of records inside the range; unreadable dates are False."""
        start, end_exclusive = PeriodFilter.bounds(date_range)
        timestamps = coerce_datetime(_field_values(records, date_field))

        valid = timestamps.notna()
        skipped = int((~valid).sum())
        if skipped:
            logger.debug(f"PeriodFilter: skipped {skipped} record(s) with unreadable '{date_field}'")

        return valid & (timestamps >= start) & (timestamps < end_exclusive)

    @classmethod
    def apply(cls, records: Any, date_range, date_field: str):
        """
        Filter records to a date range.

        Args:
            records: DataFrame or list of records
            date_range: DateRange, {'start', 'end'} dict or (start, end) pair
            date_field: Field holding the record date (aliases accepted)

        Returns:
            Records inside the range, same shape as the input
        """
        records = _materialize(records)
        if len(records) == 0:
            # still validate the controlling input
            as_date_range(date_range)
            return records.copy() if isinstance(records, pd.DataFrame) else []
        return _select(records, cls.mask(records, date_range, date_field))


def filter_by_period(records: Any, date_range, date_field: str):
    """Shortcut for PeriodFilter.apply."""
    return PeriodFilter.apply(records, date_range, date_field)


def filter_by_status(records: Any, status_filter: Optional[str] = STATUS_ALL, field: str = 'status'):
    """Keep records with the given status; 'all' (or None) keeps everything."""
    records = _materialize(records)
    if status_filter is None or status_filter == STATUS_ALL:
        return records.copy() if isinstance(records, pd.DataFrame) else list(records)
    if len(records) == 0:
        return records.copy() if isinstance(records, pd.DataFrame) else []

    statuses = _field_values(records, field)
    return _select(records, statuses == status_filter)


def on_or_after(values: pd.Series, day: date) -> pd.Series:
    """Mask of timestamps falling on or after a calendar day; NaT is False."""
    timestamps = coerce_datetime(values)
    return timestamps.notna() & (timestamps >= pd.Timestamp(day))
