"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIME_ZONE = "Asia/Kolkata"

# Face descriptors
FACE_MATCH_THRESHOLD = 0.60
DESCRIPTOR_CACHE_SIZE = 500
MIN_DESCRIPTOR_LENGTH = 32

# Geofence
EARTH_RADIUS_M = 6_371_000.0
DEFAULT_GEOFENCE_RADIUS_M = 3000.0

# Punch flow
HALF_DAY_HOURS_THRESHOLD = 4.0
MIN_DAILY_REPORT_LENGTH = 5
MAX_DAILY_REPORT_LENGTH = 2000
MAX_PLANNED_TASKS_LENGTH = 1500
MAX_REMARKS_LENGTH = 800
MAX_LEAVE_REASON_LENGTH = 1200
MAX_HOLIDAY_REASON_LENGTH = 300
MAX_PHOTO_BYTES = 8 * 1024 * 1024

# Synthetic punch window used by manual entry and leave reconciliation
SYNTHETIC_PUNCH_IN = time(9, 0)
SYNTHETIC_PUNCH_OUT = time(18, 0)
FULL_DAY_HOURS = 8.0
HALF_DAY_HOURS = 4.0

DEFAULT_HISTORY_LIMIT = 31
