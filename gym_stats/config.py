# gym_stats/config.py
"""
Centralized Configuration Management

Features:
- Local .env support via python-dotenv
- Singleton pattern for efficiency
- Type-safe getters with defaults

Usage:
    from gym_stats.config import config

    settings = config.get_statistics_settings()
    threshold = settings.expiring_days_threshold

The composite score constants (40/30/30 caps and their coefficients) are
business constants and live in gym_stats.statistics.constants, not here.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Any
from dotenv import load_dotenv

# Initialize logger
logger = logging.getLogger(__name__)

ENV_PREFIX = "GYM_STATS_"


@dataclass
class StatisticsSettings:
    """Statistics configuration container"""
    expiring_days_threshold: int = 30
    top_membership_types: int = 3
    renewal_window_months: int = 2
    monthly_stats_months: int = 6
    log_level: str = "INFO"
    debug_timing: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'expiring_days_threshold': self.expiring_days_threshold,
            'top_membership_types': self.top_membership_types,
            'renewal_window_months': self.renewal_window_months,
            'monthly_stats_months': self.monthly_stats_months,
            'log_level': self.log_level,
            'debug_timing': self.debug_timing,
        }


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {ENV_PREFIX}{name}={raw!r}, using default {default}")
        return default
    if value < 0:
        logger.warning(f"Negative value for {ENV_PREFIX}{name}={value}, using default {default}")
        return default
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Centralized configuration management

    Settings are read once per process; call reload() after changing the
    environment (tests do this through monkeypatch).
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._load_config()
        self._initialized = True

    def _load_config(self):
        """Load configuration from .env and the environment"""
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

        defaults = StatisticsSettings()
        self._settings = StatisticsSettings(
            expiring_days_threshold=_get_int("EXPIRING_DAYS_THRESHOLD", defaults.expiring_days_threshold),
            top_membership_types=_get_int("TOP_MEMBERSHIP_TYPES", defaults.top_membership_types),
            renewal_window_months=_get_int("RENEWAL_WINDOW_MONTHS", defaults.renewal_window_months),
            monthly_stats_months=_get_int("MONTHLY_STATS_MONTHS", defaults.monthly_stats_months),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
            debug_timing=_get_bool("DEBUG_TIMING", defaults.debug_timing),
        )
        logger.debug(f"Statistics settings: {self._settings.to_dict()}")

    def reload(self):
        """Re-read .env and environment variables"""
        self._load_config()

    # ==================== PUBLIC GETTERS ====================

    def get_statistics_settings(self) -> StatisticsSettings:
        """Get statistics settings"""
        return self._settings

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a single setting by attribute name"""
        return getattr(self._settings, key, default)


# Create singleton instance
config = Config()
