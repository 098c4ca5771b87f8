# gym_stats/statistics/quick_ranges.py
"""
Quick Range Buttons

Four fixed entries (today / week / month / year) for the statistics filter
bar. Each entry exposes:
- current(): window containing wall-clock today (read from the clock)
- prev() / next(): window before / after the one containing the selected
  anchor date

current() deliberately ignores the selected anchor: the "This week" button
always jumps to the real current week, while the arrows step from whatever
the user has selected.

Usage:
    navigator = QuickRangeNavigator('2025-05-15', clock=FixedClock(date(2025, 6, 1)))
    navigator.get('month').prev()      # 2025-04-01 .. 2025-04-30
    navigator.get('month').current()   # 2025-06-01 .. 2025-06-30
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

from .clock import Clock, resolve_clock
from .constants import QUICK_RANGES
from .date_ranges import DateLike, compute_date_range, current_date_range, parse_date, normalize_unit
from .models import DateRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuickRange:
    """One quick range button."""
    unit: str
    type: str
    label: str
    anchor: str
    clock: Clock

    def current(self) -> DateRange:
        return current_date_range(self.unit, self.clock)

    def prev(self) -> DateRange:
        return compute_date_range(self.anchor, self.unit, -1)

    def next(self) -> DateRange:
        return compute_date_range(self.anchor, self.unit, 1)

    def to_dict(self) -> Dict[str, object]:
        return {
            'unit': self.unit,
            'type': self.type,
            'label': self.label,
            'current': self.current().to_dict(),
            'prev': self.prev().to_dict(),
            'next': self.next().to_dict(),
        }


class QuickRangeNavigator:
    """
    Builds the quick range buttons for a selected anchor date.

    The anchor is validated up front so a bad selection fails here rather than
    on the first button press.
    """

    def __init__(self, anchor: DateLike, clock: Clock = None):
        self.anchor = parse_date(anchor).isoformat()
        self.clock = resolve_clock(clock)

    def ranges(self) -> List[QuickRange]:
        return [
            QuickRange(unit=unit, type=range_type, label=label, anchor=self.anchor, clock=self.clock)
            for unit, range_type, label in QUICK_RANGES
        ]

    def get(self, unit: str) -> QuickRange:
        unit = normalize_unit(unit)
        return {quick_range.unit: quick_range for quick_range in self.ranges()}[unit]

    def __repr__(self):
        return f"QuickRangeNavigator(anchor={self.anchor!r}, clock={self.clock!r})"
