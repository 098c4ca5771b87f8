# gym_stats/statistics/constants.py
"""
Constants for the Statistics Dashboard

VERSION: 1.0.0
"""

# =============================================================================
# DATE RANGE UNITS
# =============================================================================
RANGE_UNITS = ['today', 'week', 'month', 'year']

# Quick range type names accepted as units
UNIT_ALIASES = {'day': 'today'}

# Quick range buttons: (unit, type, label)
QUICK_RANGES = [
    ('today', 'day', 'Today'),
    ('week', 'week', 'This week'),
    ('month', 'month', 'This month'),
    ('year', 'year', 'This year'),
]

DATE_FORMAT = '%Y-%m-%d'

# Aggregation metrics supported by MetricsAggregator.compare
METRICS = ['sum', 'count', 'average']

# =============================================================================
# PAYMENT STATUS FILTER
# =============================================================================
STATUS_ALL = 'all'
PAYMENT_STATUS_COMPLETED = 'completed'

# =============================================================================
# LOCKERS / STAFF
# =============================================================================
LOCKER_STATUS_OCCUPIED = 'occupied'
STAFF_STATUS_ACTIVE = 'active'
STAFF_STATUS_INACTIVE = 'inactive'

# =============================================================================
# CONSULTATION STATES
# =============================================================================
CONSULTATION_STATUSES = ['pending', 'in_progress', 'completed', 'follow_up']

CONSULTATION_RECORD_STATUSES = ['completed', 'scheduled', 'cancelled']

# =============================================================================
# COMPOSITE SCORE (fixed business constants)
# =============================================================================
REVENUE_SCORE_DIVISOR = 10000
REVENUE_SCORE_CAP = 40
REGISTRATION_SCORE_WEIGHT = 10
REGISTRATION_SCORE_CAP = 30
CONSULTATION_SCORE_WEIGHT = 2
CONSULTATION_SCORE_CAP = 30

# Consultations are approximated as new members + 30% of payments
CONSULTATION_PAYMENT_FACTOR = 0.3

# =============================================================================
# COLUMN NAMES
# =============================================================================
COLUMN_ALIASES = {
    'paymentDate': 'date',
    'payment_date': 'date',
    'memberId': 'entity_id',
    'member_id': 'entity_id',
    'entityId': 'entity_id',
    'joinDate': 'join_date',
    'membershipEnd': 'membership_end',
    'membershipType': 'membership_type',
    'staffId': 'staff_id',
    'consultationType': 'consultation_type',
    'consultationDate': 'consultation_date',
    'consultationStatus': 'consultation_status',
}

MEMBER_TYPE_UNSPECIFIED = 'unspecified'

# Columns each aggregation expects after alias normalisation
PAYMENT_COLUMNS = ['amount', 'date', 'status', 'entity_id']
MEMBER_COLUMNS = ['id', 'join_date', 'membership_end', 'staff_id', 'membership_type']
STAFF_COLUMNS = ['id', 'name', 'position', 'status']
LOCKER_COLUMNS = ['id', 'status']
CONSULTATION_COLUMNS = ['id', 'status', 'consultation_type', 'consultation_date']
