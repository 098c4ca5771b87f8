# gym_stats/statistics/ranking.py
"""
Staff Performance Scoring

Composite score out of 100 built from three capped sub-scores:
- revenue:       revenue / 10,000, capped at 40
- registration:  new members * 10, capped at 30
- consultation:  consultations * 2, capped at 30

The caps and coefficients are fixed business constants. Sub-scores are
also floored at 0, so the total always lies in [0, 100].

Staff figures for a period:
- revenue: payments made by members assigned to the staff member
- registrations: assigned members who joined in the period
- consultations: new members + floor(30% of payment count)
"""

import logging
import math
from typing import Any, Dict, Iterable, List

from .constants import (
    CONSULTATION_PAYMENT_FACTOR,
    CONSULTATION_SCORE_CAP,
    CONSULTATION_SCORE_WEIGHT,
    MEMBER_COLUMNS,
    PAYMENT_COLUMNS,
    REGISTRATION_SCORE_CAP,
    REGISTRATION_SCORE_WEIGHT,
    REVENUE_SCORE_CAP,
    REVENUE_SCORE_DIVISOR,
    STAFF_COLUMNS,
)
from .filters import PeriodFilter, to_frame
from .formatters import round_half_up, to_number
from .models import CompositeScore

logger = logging.getLogger(__name__)


def _capped(value: float, cap: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(value, cap))


def composite_score(
    revenue: float,
    new_registrations: int,
    consultations: int,
    entity_id: Any = None,
    name: str = None,
    position: str = None,
) -> CompositeScore:
    """
    Score one entity.

    The total is rounded from the unrounded sub-scores; the sub-scores are
    rounded individually for display.
    """
    revenue = to_number(revenue)
    new_registrations = to_number(new_registrations)
    consultations = to_number(consultations)

    revenue_score = _capped(revenue / REVENUE_SCORE_DIVISOR, REVENUE_SCORE_CAP)
    registration_score = _capped(new_registrations * REGISTRATION_SCORE_WEIGHT, REGISTRATION_SCORE_CAP)
    consultation_score = _capped(consultations * CONSULTATION_SCORE_WEIGHT, CONSULTATION_SCORE_CAP)

    return CompositeScore(
        entity_id=entity_id,
        name=name,
        position=position,
        sub_scores={
            'revenue': round_half_up(revenue_score),
            'registration': round_half_up(registration_score),
            'consultation': round_half_up(consultation_score),
        },
        total=round_half_up(revenue_score + registration_score + consultation_score),
        revenue=0.0 if math.isnan(revenue) else revenue,
        new_members=0 if math.isnan(new_registrations) else int(new_registrations),
        consultations=0 if math.isnan(consultations) else int(consultations),
    )


def rank(scores: Iterable[CompositeScore]) -> List[CompositeScore]:
    """Sort by total, highest first; ties keep their input order."""
    return sorted(scores, key=lambda s: s.total, reverse=True)


class StaffPerformance:
    """
    Per-staff breakdowns for one period.

    Usage:
        perf = StaffPerformance(period_payments, members, staff, date_range)
        perf.revenue_by_staff()
        perf.performance_scores()

    Args:
        payments: Payments already filtered to the period (and status)
        members: All members; staff_id links a member to a staff member
        staff: Staff records
        date_range: The period, used for new registrations
    """

    def __init__(self, payments, members, staff, date_range):
        self._payments = to_frame(payments, PAYMENT_COLUMNS)
        self._payments['amount'] = self._payments['amount'].map(to_number)
        self._payments = self._payments[self._payments['amount'].notna()]

        self._members = to_frame(members, MEMBER_COLUMNS)
        self._staff = to_frame(staff, STAFF_COLUMNS)
        self._date_range = date_range

        self._prepare()

    def _prepare(self):
        assigned = self._members[self._members['staff_id'].notna()]
        member_staff = dict(zip(assigned['id'], assigned['staff_id']))

        payments = self._payments.assign(
            staff_id=self._payments['entity_id'].map(lambda m: member_staff.get(m))
        )
        payments = payments[payments['staff_id'].notna()]
        grouped = payments.groupby('staff_id', sort=False)['amount']
        self._revenue = grouped.sum().to_dict()
        self._payment_counts = grouped.size().to_dict()

        self._member_counts = assigned['staff_id'].value_counts(sort=False).to_dict()

        joined = PeriodFilter.apply(assigned, self._date_range, 'join_date')
        self._new_members = joined['staff_id'].value_counts(sort=False).to_dict()

    def _staff_rows(self) -> List[Dict[str, Any]]:
        return [
            {'staff_id': row['id'], 'staff_name': row['name'], 'position': row['position']}
            for row in self._staff[['id', 'name', 'position']].to_dict('records')
        ]

    def _consultations(self, staff_id) -> int:
        new_members = int(self._new_members.get(staff_id, 0))
        payments = int(self._payment_counts.get(staff_id, 0))
        return new_members + math.floor(payments * CONSULTATION_PAYMENT_FACTOR)

    # =========================================================================
    # BREAKDOWNS
    # =========================================================================

    def revenue_by_staff(self) -> List[Dict[str, Any]]:
        rows = []
        for row in self._staff_rows():
            staff_id = row['staff_id']
            rows.append({
                **row,
                'revenue': float(self._revenue.get(staff_id, 0.0)),
                'payment_count': int(self._payment_counts.get(staff_id, 0)),
                'member_count': int(self._member_counts.get(staff_id, 0)),
            })
        return sorted(rows, key=lambda r: r['revenue'], reverse=True)

    def registrations_by_staff(self) -> List[Dict[str, Any]]:
        rows = []
        for row in self._staff_rows():
            staff_id = row['staff_id']
            rows.append({
                **row,
                'new_members': int(self._new_members.get(staff_id, 0)),
                'total_members': int(self._member_counts.get(staff_id, 0)),
            })
        return sorted(rows, key=lambda r: r['new_members'], reverse=True)

    def consultations_by_staff(self) -> List[Dict[str, Any]]:
        rows = []
        for row in self._staff_rows():
            staff_id = row['staff_id']
            rows.append({
                **row,
                'consultations': self._consultations(staff_id),
                'new_members': int(self._new_members.get(staff_id, 0)),
                'payments': int(self._payment_counts.get(staff_id, 0)),
            })
        return sorted(rows, key=lambda r: r['consultations'], reverse=True)

    def performance_scores(self) -> List[CompositeScore]:
        scores = [
            composite_score(
                revenue=float(self._revenue.get(row['staff_id'], 0.0)),
                new_registrations=int(self._new_members.get(row['staff_id'], 0)),
                consultations=self._consultations(row['staff_id']),
                entity_id=row['staff_id'],
                name=row['staff_name'],
                position=row['position'],
            )
            for row in self._staff_rows()
        ]
        return rank(scores)

    def to_dict(self) -> Dict[str, List]:
        return {
            'staff_revenue': self.revenue_by_staff(),
            'staff_registration': self.registrations_by_staff(),
            'staff_consultation': self.consultations_by_staff(),
            'staff_performance': self.performance_scores(),
        }
