# gym_stats/__init__.py
"""
Gym back-office statistics package

This package contains the statistics dashboard engine:
- config: Configuration management (.env + environment)
- statistics: Date ranges, period filtering, KPI aggregation, staff ranking
  and categorical summaries

Usage:
    from gym_stats import configure_logging
    from gym_stats.statistics import MetricsAggregator, QuickRangeNavigator
"""

import logging
from typing import Optional, Union

from .config import config, Config, StatisticsSettings

__version__ = "1.0.0"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[Union[int, str]] = None):
    """Apply the standard log format; level defaults to GYM_STATS_LOG_LEVEL."""
    if level is None:
        level = config.get_statistics_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    'config',
    'Config',
    'StatisticsSettings',
    'configure_logging',
    '__version__',
]
