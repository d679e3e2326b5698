"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LATE_AFTER_HOURS = 48
OVERDUE_AFTER_HOURS = 96

MIN_BILLING_DAY = 1
MAX_BILLING_DAY = 28

NEXT_CONTACT_DAYS = 7

ROSTER_TIME_FORMAT = "%H:%M"
EMPTY_ROSTER_MESSAGE = "No students to mark attendance for"
