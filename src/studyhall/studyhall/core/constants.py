"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SEAT_POOL_SIZE = 50
SEAT_PREFIX = "S"

REGISTRATION_FEE = 50
ADMISSION_DURATIONS = (1, 3, 6)

ABSENCE_REASON_NO_CHECKIN = "no_checkin"
