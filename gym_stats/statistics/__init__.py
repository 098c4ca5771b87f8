# gym_stats/statistics/__init__.py
"""
Statistics Dashboard Engine

Pure, in-process calculations over in-memory record collections:
- date_ranges: today/week/month/year windows with offsets
- quick_ranges: the four quick range buttons (current / prev / next)
- filters: inclusive period filter and status filter
- metrics: period-over-period KPIs with guarded growth and ratios
- ranking: staff composite scores and ranking
- summaries: categorical bucket counts and percentages

Usage:
    from gym_stats.statistics import (
        FixedClock, MetricsAggregator, QuickRangeNavigator, compute_date_range,
    )

    clock = FixedClock(date(2025, 5, 15))
    month = compute_date_range('2025-05-15', 'month')
    kpis = MetricsAggregator(payments, members, lockers, staff, clock=clock).calculate_kpis(month)
"""

from .clock import Clock, SystemClock, FixedClock, resolve_clock

from .exceptions import (
    StatisticsError,
    DateParseError,
    InvalidDateRangeError,
    UnknownUnitError,
    UnknownMetricError,
)

from .models import (
    DateRange,
    TransactionRecord,
    MembershipRecord,
    StaffRecord,
    LockerRecord,
    ConsultationRecord,
    PeriodMetrics,
    CompositeScore,
    CategoryCount,
    CategoricalSummary,
)

from .date_ranges import (
    parse_date,
    format_date,
    as_date_range,
    compute_date_range,
    current_date_range,
    recent_days_range,
    relative_date_range,
)

from .quick_ranges import QuickRange, QuickRangeNavigator

from .filters import (
    PeriodFilter,
    filter_by_period,
    filter_by_status,
    to_frame,
    coerce_datetime,
)

from .metrics import (
    MetricsAggregator,
    growth_percent,
    safe_ratio,
    previous_period,
)

from .ranking import StaffPerformance, composite_score, rank

from .summaries import (
    summarize,
    consultation_status_summary,
    member_summary,
    staff_summary,
    consultation_record_stats,
)

__all__ = [
    # Clock
    'Clock', 'SystemClock', 'FixedClock', 'resolve_clock',
    # Errors
    'StatisticsError', 'DateParseError', 'InvalidDateRangeError',
    'UnknownUnitError', 'UnknownMetricError',
    # Models
    'DateRange', 'TransactionRecord', 'MembershipRecord', 'StaffRecord',
    'LockerRecord', 'ConsultationRecord', 'PeriodMetrics', 'CompositeScore',
    'CategoryCount', 'CategoricalSummary',
    # Date ranges
    'parse_date', 'format_date', 'as_date_range', 'compute_date_range',
    'current_date_range', 'recent_days_range', 'relative_date_range',
    'QuickRange', 'QuickRangeNavigator',
    # Filters
    'PeriodFilter', 'filter_by_period', 'filter_by_status', 'to_frame', 'coerce_datetime',
    # Metrics
    'MetricsAggregator', 'growth_percent', 'safe_ratio', 'previous_period',
    # Ranking
    'StaffPerformance', 'composite_score', 'rank',
    # Summaries
    'summarize', 'consultation_status_summary', 'member_summary',
    'staff_summary', 'consultation_record_stats',
]
