# gym_stats/statistics/metrics.py
"""
KPI Calculations for the Statistics Dashboard

Handles all metric calculations:
- Period aggregations (sum / count / average) over a selected date range
- Period-over-period comparison against the equally long preceding period
- Growth percentages and ratios, guarded against zero denominators
- Membership, locker and renewal KPIs
- Staff breakdowns (delegated to ranking.StaffPerformance)

Every figure is recomputed from the supplied collections on each call;
nothing is cached and the inputs are never modified.
"""

import logging
import math
import time
from datetime import timedelta
from typing import Any, Dict, Optional

import pandas as pd

from ..config import config, StatisticsSettings
from .clock import Clock, resolve_clock
from .constants import (
    LOCKER_COLUMNS,
    LOCKER_STATUS_OCCUPIED,
    MEMBER_COLUMNS,
    METRICS,
    PAYMENT_COLUMNS,
    PAYMENT_STATUS_COMPLETED,
    STATUS_ALL,
)
from .date_ranges import as_date_range, compute_date_range
from .exceptions import InvalidDateRangeError, UnknownMetricError
from .filters import PeriodFilter, coerce_datetime, filter_by_status, on_or_after, to_frame
from .formatters import to_number
from .models import DateRange, PeriodMetrics
from .ranking import StaffPerformance

logger = logging.getLogger(__name__)


# =============================================================================
# GUARDED ARITHMETIC
# =============================================================================

def growth_percent(current: float, previous: float) -> float:
    """(current - previous) / previous * 100, or 0 when previous is not positive."""
    current = to_number(current)
    previous = to_number(previous)
    if math.isnan(previous) or previous <= 0:
        return 0.0
    if math.isnan(current):
        current = 0.0
    return (current - previous) / previous * 100


def safe_ratio(numerator: float, denominator: float, scale: float = 100) -> float:
    """numerator / denominator * scale, or 0 when the denominator is 0."""
    numerator = to_number(numerator)
    denominator = to_number(denominator)
    if math.isnan(denominator) or denominator == 0 or math.isnan(numerator):
        return 0.0
    return numerator / denominator * scale


def previous_period(date_range) -> DateRange:
    """
    The period of the same inclusive length ending the day before.

    May 2025 (31 days) -> 2025-03-31 .. 2025-04-30. The window counts days,
    not calendar months, so a month's previous period is not the previous
    calendar month when the two differ in length (here it includes 31 March).
    """
    date_range = as_date_range(date_range)
    try:
        prev_end = date_range.start_date - timedelta(days=1)
        prev_start = prev_end - timedelta(days=date_range.days - 1)
    except OverflowError as e:
        raise InvalidDateRangeError(
            f"No previous period before {date_range.start}: out of calendar bounds"
        ) from e
    return DateRange.from_dates(prev_start, prev_end)


# =============================================================================
# AGGREGATOR
# =============================================================================

class MetricsAggregator:
    """
    KPI calculations for the statistics dashboard.

    Usage:
        aggregator = MetricsAggregator(payments, members, lockers, staff, clock=clock)

        kpis = aggregator.calculate_kpis({'start': '2025-05-01', 'end': '2025-05-31'})
        revenue = MetricsAggregator.compare(payments, date_range, 'date', 'sum', 'amount')
    """

    def __init__(
        self,
        payments=None,
        members=None,
        lockers=None,
        staff=None,
        clock: Clock = None,
        settings: Optional[StatisticsSettings] = None,
    ):
        """
        Initialize with data.

        Args:
            payments: Payment records (amount, date, status, entity_id)
            members: Member records (id, join_date, membership_end, staff_id)
            lockers: Locker records (id, status)
            staff: Staff records (id, name, position)
            clock: Source of "today" for active-member and renewal figures
            settings: Statistics settings (defaults to the global config)
        """
        self.payments = payments
        self.members = members
        self.lockers = lockers
        self.staff = staff
        self.clock = resolve_clock(clock)
        self.settings = settings or config.get_statistics_settings()

    # =========================================================================
    # GENERIC PERIOD COMPARISON
    # =========================================================================

    @staticmethod
    def _metric_value(records: pd.DataFrame, metric: str, value_field: Optional[str]) -> float:
        if metric == 'count':
            return float(len(records))

        values = records[value_field].map(to_number).dropna() if len(records) else pd.Series(dtype=float)
        skipped = len(records) - len(values)
        if skipped:
            logger.debug(f"Skipped {skipped} record(s) with unreadable '{value_field}'")

        if metric == 'sum':
            return float(values.sum())
        return float(values.mean()) if len(values) else 0.0

    @staticmethod
    def compare(
        records,
        date_range,
        date_field: str,
        metric: str = 'count',
        value_field: Optional[str] = None,
    ) -> PeriodMetrics:
        """
        Compute a metric for a period and the equally long period before it.

        Args:
            records: DataFrame or list of records
            date_range: Current period
            date_field: Field holding the record date
            metric: 'sum', 'count' or 'average'
            value_field: Numeric field for 'sum' and 'average'

        Returns:
            PeriodMetrics with growth_percent guarded to 0 when previous is 0
        """
        if metric not in METRICS:
            raise UnknownMetricError(f"Unknown metric {metric!r}; expected one of {', '.join(METRICS)}")
        if metric != 'count' and not value_field:
            raise UnknownMetricError(f"Metric {metric!r} needs a value_field")

        current_range = as_date_range(date_range)
        previous_range = previous_period(current_range)
        frame = to_frame(records, [value_field] if value_field else None)

        current_records = PeriodFilter.apply(frame, current_range, date_field)
        previous_records = PeriodFilter.apply(frame, previous_range, date_field)

        current = MetricsAggregator._metric_value(current_records, metric, value_field)
        previous = MetricsAggregator._metric_value(previous_records, metric, value_field)

        return PeriodMetrics(
            current=current,
            previous=previous,
            growth_percent=growth_percent(current, previous),
        )

    # =========================================================================
    # DASHBOARD KPIs
    # =========================================================================

    def _prepare_payments(self) -> pd.DataFrame:
        payments = to_frame(self.payments, PAYMENT_COLUMNS)
        payments['amount'] = payments['amount'].map(to_number)
        skipped = int(payments['amount'].isna().sum())
        if skipped:
            logger.debug(f"Skipped {skipped} payment(s) with unreadable amount")
        return payments[payments['amount'].notna()]

    def calculate_kpis(self, date_range, status_filter: str = STATUS_ALL) -> Dict[str, Any]:
        """
        Calculate the dashboard KPIs for a selected period.

        Args:
            date_range: Selected period
            status_filter: 'all' or a payment status

        Returns:
            Dict with all KPI values
        """
        start_time = time.perf_counter()

        current_range = as_date_range(date_range)
        prev_range = previous_period(current_range)
        today = self.clock.today()

        all_payments = self._prepare_payments()
        payments = filter_by_status(all_payments, status_filter)
        members = to_frame(self.members, MEMBER_COLUMNS)
        lockers = to_frame(self.lockers, LOCKER_COLUMNS)

        current_payments = PeriodFilter.apply(payments, current_range, 'date')
        prev_payments = PeriodFilter.apply(payments, prev_range, 'date')

        # === Revenue ===
        total_revenue = float(current_payments['amount'].sum())
        prev_revenue = float(prev_payments['amount'].sum())

        # === Payments ===
        total_payments = len(current_payments)
        prev_total_payments = len(prev_payments)
        average_payment = total_revenue / total_payments if total_payments else 0.0
        prev_average_payment = prev_revenue / prev_total_payments if prev_total_payments else 0.0

        # === Members ===
        total_members = len(members)
        new_members = len(PeriodFilter.apply(members, current_range, 'join_date'))
        prev_new_members = len(PeriodFilter.apply(members, prev_range, 'join_date'))
        active_members = int(on_or_after(members['membership_end'], today).sum())

        # === Lockers ===
        occupied_lockers = int((lockers['status'] == LOCKER_STATUS_OCCUPIED).sum())

        staff = StaffPerformance(current_payments, members, self.staff, current_range)

        kpis = {
            'total_revenue': total_revenue,
            'revenue_growth': growth_percent(total_revenue, prev_revenue),
            'total_members': total_members,
            'new_members': new_members,
            'member_growth': growth_percent(new_members, prev_new_members),
            'active_members': active_members,
            'average_payment': average_payment,
            'average_payment_growth': growth_percent(average_payment, prev_average_payment),
            'total_payments': total_payments,
            'total_payments_growth': growth_percent(total_payments, prev_total_payments),
            'locker_utilization': safe_ratio(occupied_lockers, len(lockers)),
            'member_retention': safe_ratio(active_members, total_members),
            'monthly_recurring': total_revenue,
            'renewal_rate': self.renewal_rate(members, all_payments, today),
            **staff.to_dict(),
        }

        elapsed = time.perf_counter() - start_time
        if self.settings.debug_timing:
            logger.info(
                f"KPIs for {current_range.start}..{current_range.end} "
                f"(status={status_filter}): {len(all_payments):,} payments, "
                f"{total_members:,} members in {elapsed:.3f}s"
            )

        return kpis

    def renewal_rate(self, members: pd.DataFrame, payments: pd.DataFrame, today) -> float:
        """
        Share of memberships ending this calendar month that were renewed.

        A membership counts as renewed when the same member has a completed
        payment after the end date and within the renewal window.
        """
        month = compute_date_range(today, 'month')
        expired = PeriodFilter.apply(members, month, 'membership_end')
        if expired.empty:
            return 0.0

        completed = payments[payments['status'] == PAYMENT_STATUS_COMPLETED]
        completed = completed.assign(paid_at=coerce_datetime(completed['date']))
        completed = completed[completed['paid_at'].notna()]
        paid_by_member = {}
        for member_id, paid_at in zip(completed['entity_id'], completed['paid_at']):
            paid_by_member.setdefault(member_id, []).append(paid_at)

        window = pd.DateOffset(months=self.settings.renewal_window_months)
        ends = coerce_datetime(expired['membership_end'])

        renewed = 0
        for member_id, ended_at in zip(expired['id'], ends):
            deadline = ended_at + window
            if any(ended_at < paid_at <= deadline for paid_at in paid_by_member.get(member_id, [])):
                renewed += 1

        return safe_ratio(renewed, len(expired))
