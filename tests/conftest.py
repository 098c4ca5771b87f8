"""
Shared fixtures: a frozen clock and a small gym data set.

Wall-clock "today" for every fixture is 2025-05-20 (a Tuesday).
"""
from datetime import datetime

import pytest

from gym_stats.config import StatisticsSettings
from gym_stats.statistics import FixedClock


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 5, 20, 9, 30))


@pytest.fixture
def settings():
    return StatisticsSettings()


@pytest.fixture
def may_2025():
    return {'start': '2025-05-01', 'end': '2025-05-31'}


@pytest.fixture
def payments():
    """Payments as the desktop layer sends them (camelCase keys)."""
    return [
        {'amount': 100000, 'paymentDate': '2025-05-02', 'status': 'completed', 'memberId': 1},
        {'amount': 200000, 'paymentDate': '2025-05-31T23:59:59.999', 'status': 'completed', 'memberId': 2},
        {'amount': 50000, 'paymentDate': '2025-04-10', 'status': 'completed', 'memberId': 1},
        {'amount': 'abc', 'paymentDate': '2025-05-03', 'status': 'completed', 'memberId': 3},
        {'amount': 70000, 'paymentDate': None, 'status': 'completed', 'memberId': 3},
        {'amount': 30000, 'paymentDate': '2025-05-20', 'status': 'cancelled', 'memberId': 3},
    ]


@pytest.fixture
def members():
    return [
        {'id': 1, 'joinDate': '2025-05-05', 'membershipEnd': '2025-12-31', 'staffId': 10},
        {'id': 2, 'joinDate': '2025-04-15', 'membershipEnd': '2025-05-10', 'staffId': 10},
        {'id': 3, 'joinDate': '2025-05-18', 'membershipEnd': '2025-05-25', 'staffId': 20},
        {'id': 4, 'joinDate': '2024-01-01', 'membershipEnd': None, 'staffId': None},
    ]


@pytest.fixture
def lockers():
    return [
        {'id': 1, 'status': 'occupied'},
        {'id': 2, 'status': 'occupied'},
        {'id': 3, 'status': 'available'},
        {'id': 4, 'status': 'occupied'},
    ]


@pytest.fixture
def staff():
    return [
        {'id': 10, 'name': 'Kim', 'position': 'trainer', 'status': 'active'},
        {'id': 20, 'name': 'Lee', 'position': 'manager', 'status': 'active'},
        {'id': 30, 'name': 'Park', 'position': 'trainer', 'status': 'inactive'},
    ]
