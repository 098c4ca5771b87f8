"""
Categorical summaries and dashboard cards
"""
import pandas as pd
import pytest

from gym_stats.statistics import (
    ConsultationRecord,
    consultation_record_stats,
    consultation_status_summary,
    member_summary,
    staff_summary,
    summarize,
)

STATUSES = ['pending', 'in_progress', 'completed', 'follow_up']


class TestSummarize:

    @pytest.fixture
    def records(self):
        return [
            {'status': 'pending'},
            {'status': 'pending'},
            {'status': 'in_progress'},
            {'status': 'pending'},
            {'status': 'follow_up'},
            {'status': 'archived'},
        ]

    def test_counts_and_percents(self, records):
        summary = consultation_status_summary(records)
        assert summary.total == 6
        assert summary['pending'].count == 3
        assert summary['pending'].percent == 50.0
        assert summary['in_progress'].percent == 16.7
        assert summary['completed'].count == 0
        assert summary['completed'].percent == 0.0
        assert summary['follow_up'].percent == 16.7

    def test_unknown_category_counts_only_in_total(self, records):
        summary = summarize(records, STATUSES)
        assert sum(b.count for b in summary.buckets.values()) == 5
        assert summary.total == 6

    def test_counts_add_up_when_all_known(self):
        records = [{'status': s} for s in ['pending', 'completed', 'completed']]
        summary = summarize(records, STATUSES)
        assert sum(b.count for b in summary.buckets.values()) == summary.total
        assert summary['completed'].percent == 66.7
        assert summary['pending'].percent == 33.3

    def test_empty(self):
        summary = summarize([], STATUSES)
        assert summary.total == 0
        assert all(b.count == 0 and b.percent == 0 for b in summary.buckets.values())
        assert list(summary.buckets) == STATUSES

    def test_other_field_and_dataframe(self):
        df = pd.DataFrame({'consultationStatus': ['pending', None, 'completed']})
        summary = summarize(df, STATUSES, field='consultationStatus')
        assert summary.total == 3
        assert summary['pending'].count == 1

    def test_to_dict(self):
        summary = summarize([{'status': 'pending'}], STATUSES)
        data = summary.to_dict()
        assert data['total'] == 1
        assert data['pending'] == {'count': 1, 'percent': 100.0}


class TestMemberSummary:

    def test_figures(self, clock, settings):
        members = [
            {'id': 1, 'membershipEnd': '2025-12-31', 'membershipType': 'monthly'},
            {'id': 2, 'membershipEnd': '2025-05-10', 'membershipType': 'monthly'},
            {'id': 3, 'membershipEnd': '2025-05-25', 'membershipType': 'yearly'},
            {'id': 4, 'membershipEnd': None, 'membershipType': None},
            {'id': 5, 'membershipEnd': '2025-06-19', 'membershipType': 'pt'},
            {'id': 6, 'membershipEnd': '2025-06-20', 'membershipType': ''},
        ]
        summary = member_summary(members, clock=clock, settings=settings)
        assert summary['total'] == 6
        assert summary['active'] == 4
        assert summary['expired'] == 2
        # 5 and 30 days left; 31 days is outside the threshold
        assert summary['expiring_soon'] == 2
        assert summary['top_membership_types'] == [('monthly', 2), ('unspecified', 2), ('yearly', 1)]

    def test_membership_ending_today_is_active(self, clock, settings):
        summary = member_summary([{'id': 1, 'membershipEnd': '2025-05-20'}], clock=clock, settings=settings)
        assert summary['active'] == 1
        assert summary['expiring_soon'] == 1

    def test_empty(self, clock, settings):
        summary = member_summary([], clock=clock, settings=settings)
        assert summary == {'total': 0, 'active': 0, 'expired': 0, 'expiring_soon': 0, 'top_membership_types': []}


class TestStaffSummary:

    def test_figures(self, staff):
        summary = staff_summary(staff)
        assert summary == {
            'total': 3,
            'active': 2,
            'inactive': 1,
            'by_position': {'trainer': 2, 'manager': 1},
        }


class TestConsultationRecordStats:

    def test_figures(self, clock, settings):
        records = [
            ConsultationRecord(id=1, status='completed', consultation_type='pt', consultation_date=1747267200),
            ConsultationRecord(id=2, status='scheduled', consultation_type='pt', consultation_date='2025-04-02'),
            ConsultationRecord(id=3, status='cancelled', consultation_type='diet', consultation_date='2025-01-10'),
            ConsultationRecord(id=4, status='completed', consultation_type=None, consultation_date='2024-11-30'),
            ConsultationRecord(id=5, status=None, consultation_type='pt', consultation_date=None),
        ]
        stats = consultation_record_stats(records, clock=clock, settings=settings)
        assert stats['total'] == 5
        assert (stats['completed'], stats['scheduled'], stats['cancelled']) == (2, 1, 1)
        assert stats['completion_rate'] == 40
        assert stats['type_stats'] == {'pt': 3, 'diet': 1, 'unspecified': 1}
        assert stats['monthly_stats'] == [
            {'month': '2024-12', 'count': 0},
            {'month': '2025-01', 'count': 1},
            {'month': '2025-02', 'count': 0},
            {'month': '2025-03', 'count': 0},
            {'month': '2025-04', 'count': 1},
            {'month': '2025-05', 'count': 1},
        ]

    def test_empty(self, clock, settings):
        stats = consultation_record_stats([], clock=clock, settings=settings)
        assert stats['total'] == 0
        assert stats['completion_rate'] == 0
        assert len(stats['monthly_stats']) == 6
