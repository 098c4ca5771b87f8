# gym_stats/statistics/exceptions.py
"""Errors raised for invalid controlling inputs (anchor dates, ranges, units)."""


class StatisticsError(Exception):
    """Base class for statistics errors."""


class DateParseError(StatisticsError, ValueError):
    """A date string could not be parsed."""

    def __init__(self, value, message: str = None):
        self.value = value
        super().__init__(message or f"Cannot parse date: {value!r}")


class InvalidDateRangeError(StatisticsError, ValueError):
    """Start after end, or a range outside the representable calendar."""


class UnknownUnitError(StatisticsError, ValueError):
    """Range unit is not one of today/week/month/year."""


class UnknownMetricError(StatisticsError, ValueError):
    """Aggregation metric is not supported."""
