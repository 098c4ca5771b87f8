"""
Date range calculations
"""
from datetime import date, datetime, timedelta

import pandas as pd
import pytest

from gym_stats.statistics import (
    DateParseError,
    DateRange,
    FixedClock,
    InvalidDateRangeError,
    UnknownUnitError,
    compute_date_range,
    current_date_range,
    parse_date,
    recent_days_range,
    relative_date_range,
)

ANCHORS = ['2024-02-29', '2025-01-01', '2025-05-15', '2025-05-18', '2025-12-31', '2000-03-01']
UNITS = ['today', 'week', 'month', 'year']
OFFSETS = [-13, -1, 0, 1, 12]


class TestParseDate:

    def test_accepted_inputs(self):
        assert parse_date('2025-05-15') == date(2025, 5, 15)
        assert parse_date(' 2025-05-15 ') == date(2025, 5, 15)
        assert parse_date('2025-05-15T22:10:00') == date(2025, 5, 15)
        assert parse_date('2025-05-15T22:10:00Z') == date(2025, 5, 15)
        assert parse_date(date(2025, 5, 15)) == date(2025, 5, 15)
        assert parse_date(datetime(2025, 5, 15, 8)) == date(2025, 5, 15)
        assert parse_date(pd.Timestamp('2025-05-15 08:00')) == date(2025, 5, 15)

    @pytest.mark.parametrize('value', ['', 'yesterday', '2025-02-30', '15/05/2025', None, 20250515, pd.NaT])
    def test_rejected_inputs(self, value):
        with pytest.raises(DateParseError):
            parse_date(value)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date('not a date')


class TestComputeDateRange:

    def test_today_with_offset(self):
        assert compute_date_range('2025-05-15', 'today').to_dict() == {'start': '2025-05-15', 'end': '2025-05-15'}
        assert compute_date_range('2025-03-01', 'today', -1).start == '2025-02-28'
        assert compute_date_range('2024-03-01', 'today', -1).start == '2024-02-29'
        assert compute_date_range('2025-12-31', 'today', 1).end == '2026-01-01'

    def test_week_starts_monday(self):
        # 2025-05-15 is a Thursday
        assert compute_date_range('2025-05-15', 'week').to_dict() == {'start': '2025-05-12', 'end': '2025-05-18'}

    def test_week_sunday_belongs_to_previous_monday(self):
        assert compute_date_range('2025-05-18', 'week').start == '2025-05-12'
        assert compute_date_range('2025-05-12', 'week').start == '2025-05-12'
        assert compute_date_range('2025-05-19', 'week').start == '2025-05-19'

    def test_week_offsets_cross_year(self):
        week = compute_date_range('2025-01-01', 'week', -1)
        assert week.to_dict() == {'start': '2024-12-23', 'end': '2024-12-29'}

    @pytest.mark.parametrize('anchor, days', [
        ('2024-02-10', 29),
        ('2025-02-10', 28),
        ('1900-02-10', 28),
        ('2000-02-10', 29),
        ('2025-04-30', 30),
        ('2025-01-01', 31),
    ])
    def test_month_length(self, anchor, days):
        assert compute_date_range(anchor, 'month').days == days

    def test_month_year_rollover(self):
        assert compute_date_range('2025-01-15', 'month', -1).to_dict() == {'start': '2024-12-01', 'end': '2024-12-31'}
        assert compute_date_range('2025-12-15', 'month', 1).to_dict() == {'start': '2026-01-01', 'end': '2026-01-31'}
        assert compute_date_range('2025-05-15', 'month', -17).to_dict() == {'start': '2023-12-01', 'end': '2023-12-31'}
        assert compute_date_range('2025-05-15', 'month', 21).start == '2027-02-01'

    def test_month_from_day_31(self):
        # no day-of-month overflow into the following month
        assert compute_date_range('2025-01-31', 'month', 1).to_dict() == {'start': '2025-02-01', 'end': '2025-02-28'}

    def test_year(self):
        assert compute_date_range('2025-05-15', 'year').to_dict() == {'start': '2025-01-01', 'end': '2025-12-31'}
        assert compute_date_range('2025-05-15', 'year', -2).to_dict() == {'start': '2023-01-01', 'end': '2023-12-31'}

    def test_day_alias(self):
        assert compute_date_range('2025-05-15', 'day', 1).start == '2025-05-16'

    def test_unknown_unit(self):
        with pytest.raises(UnknownUnitError):
            compute_date_range('2025-05-15', 'quarter')

    def test_bad_anchor(self):
        with pytest.raises(DateParseError):
            compute_date_range('2025-13-01', 'month')

    def test_out_of_calendar(self):
        with pytest.raises(InvalidDateRangeError):
            compute_date_range('9999-12-15', 'month', 1)
        with pytest.raises(InvalidDateRangeError):
            compute_date_range('0001-01-01', 'today', -1)

    @pytest.mark.parametrize('unit', UNITS)
    @pytest.mark.parametrize('anchor', ANCHORS)
    def test_start_not_after_end(self, anchor, unit):
        for offset in OFFSETS:
            date_range = compute_date_range(anchor, unit, offset)
            assert date_range.start <= date_range.end

    @pytest.mark.parametrize('unit', UNITS)
    @pytest.mark.parametrize('anchor', ANCHORS)
    def test_previous_range_is_contiguous(self, anchor, unit):
        previous = compute_date_range(anchor, unit, -1)
        current = compute_date_range(anchor, unit, 0)
        following = compute_date_range(anchor, unit, 1)
        assert previous.end_date + timedelta(days=1) == current.start_date
        assert current.end_date + timedelta(days=1) == following.start_date

    @pytest.mark.parametrize('unit', UNITS)
    def test_anchor_inside_own_window(self, unit):
        for anchor in ANCHORS:
            date_range = compute_date_range(anchor, unit)
            assert date_range.start <= anchor <= date_range.end

    def test_repeatable(self):
        assert compute_date_range('2025-05-15', 'month', 3) == compute_date_range('2025-05-15', 'month', 3)


class TestDateRange:

    def test_start_after_end_rejected(self):
        with pytest.raises(InvalidDateRangeError):
            DateRange('2025-05-31', '2025-05-01')

    def test_normalises_strings(self):
        date_range = DateRange('2025-5-1', '2025-05-31T10:00:00')
        assert date_range.to_dict() == {'start': '2025-05-01', 'end': '2025-05-31'}
        assert date_range.days == 31


class TestClockRanges:

    def test_current_date_range_uses_clock(self):
        clock = FixedClock(date(2025, 6, 1))
        assert current_date_range('month', clock).to_dict() == {'start': '2025-06-01', 'end': '2025-06-30'}
        assert current_date_range('week', clock).to_dict() == {'start': '2025-05-26', 'end': '2025-06-01'}

    def test_recent_days_range(self):
        clock = FixedClock(date(2025, 5, 15))
        assert recent_days_range(7, clock=clock).to_dict() == {'start': '2025-05-09', 'end': '2025-05-15'}
        assert recent_days_range(1, clock=clock).days == 1
        assert recent_days_range(30, offset=-30, clock=clock).end == '2025-04-15'

    def test_recent_days_range_needs_positive_days(self):
        with pytest.raises(InvalidDateRangeError):
            recent_days_range(0, clock=FixedClock(date(2025, 5, 15)))

    def test_relative_date_range(self):
        assert relative_date_range('2025-05-01', 'month', 'prev').start == '2025-04-01'
        assert relative_date_range('2025-05-01', 'month', 'next').end == '2025-06-30'
        with pytest.raises(ValueError):
            relative_date_range('2025-05-01', 'month', 'sideways')
