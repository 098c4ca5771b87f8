# gym_stats/statistics/models.py
"""
Record and result containers for the statistics dashboard.

Input records are read-only snapshots supplied by the persistence layer;
result objects are built fresh on every call.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from .exceptions import InvalidDateRangeError


# =============================================================================
# DATE RANGE
# =============================================================================

@dataclass(frozen=True)
class DateRange:
    """Inclusive window of two YYYY-MM-DD strings."""
    start: str
    end: str

    def __post_init__(self):
        # Local import: date_ranges imports this module
        from .date_ranges import parse_date, format_date

        start = parse_date(self.start)
        end = parse_date(self.end)
        if start > end:
            raise InvalidDateRangeError(
                f"Range start {format_date(start)} is after end {format_date(end)}"
            )
        object.__setattr__(self, 'start', format_date(start))
        object.__setattr__(self, 'end', format_date(end))

    @classmethod
    def from_dates(cls, start: date, end: date) -> 'DateRange':
        return cls(start.isoformat(), end.isoformat())

    @property
    def start_date(self) -> date:
        return date.fromisoformat(self.start)

    @property
    def end_date(self) -> date:
        return date.fromisoformat(self.end)

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end_date - self.start_date).days + 1

    def to_dict(self) -> Dict[str, str]:
        return {'start': self.start, 'end': self.end}


# =============================================================================
# INPUT RECORDS
# =============================================================================

@dataclass(frozen=True)
class TransactionRecord:
    """A payment. entity_id is the paying member."""
    amount: float
    date: Any
    status: str
    entity_id: Any = None


@dataclass(frozen=True)
class MembershipRecord:
    id: Any
    join_date: Any
    membership_end: Any = None
    staff_id: Any = None
    membership_type: Optional[str] = None


@dataclass(frozen=True)
class StaffRecord:
    id: Any
    name: str
    position: str
    status: str = 'active'


@dataclass(frozen=True)
class LockerRecord:
    id: Any
    status: str


@dataclass(frozen=True)
class ConsultationRecord:
    id: Any
    status: Optional[str]
    consultation_type: Optional[str] = None
    consultation_date: Any = None


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class PeriodMetrics:
    current: float
    previous: float
    growth_percent: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'current': self.current,
            'previous': self.previous,
            'growth_percent': self.growth_percent,
        }


@dataclass(frozen=True)
class CompositeScore:
    entity_id: Any
    sub_scores: Dict[str, int]
    total: int
    name: Optional[str] = None
    position: Optional[str] = None
    revenue: float = 0
    new_members: int = 0
    consultations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entity_id': self.entity_id,
            'name': self.name,
            'position': self.position,
            'total': self.total,
            'sub_scores': dict(self.sub_scores),
            'revenue': self.revenue,
            'new_members': self.new_members,
            'consultations': self.consultations,
        }


@dataclass(frozen=True)
class CategoryCount:
    count: int
    percent: float


@dataclass(frozen=True)
class CategoricalSummary:
    total: int
    buckets: Dict[str, CategoryCount] = field(default_factory=dict)

    def __getitem__(self, category: str) -> CategoryCount:
        return self.buckets[category]

    def to_dict(self) -> Dict[str, Any]:
        result = {'total': self.total}
        for category, bucket in self.buckets.items():
            result[category] = {'count': bucket.count, 'percent': bucket.percent}
        return result
