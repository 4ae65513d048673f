"""Default configuration constants for the Class Attendance Tracker."""

# Class-unit weighting: every count, percentage and impact uses these
LAB_UNIT_WEIGHT = 3      # A lab session counts as 3 classes
REGULAR_UNIT_WEIGHT = 1

# Target attendance % used when a snapshot doesn't set one
DEFAULT_TARGET_PCT = 65.0
MIN_TARGET_PCT = 0.0
MAX_TARGET_PCT = 100.0

# Past classes without a record count as held-but-missed
COUNT_UNMARKED_AS_ABSENT = True

# Skip priority thresholds (impact = shortfall % x unit weight)
HIGH_IMPACT_THRESHOLD = 10.0    # impact above this => "high" (attend if possible)
MEDIUM_IMPACT_THRESHOLD = 5.0   # impact above this => "medium" (skip with caution)

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

# Attendance statuses
STATUS_PRESENT = "present"
STATUS_ABSENT = "absent"
STATUS_HOLIDAY = "holiday"
ATTENDANCE_STATUSES = [STATUS_PRESENT, STATUS_ABSENT, STATUS_HOLIDAY]

# Timetable days (weekends never have classes)
WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]

# Canonical date-only key format
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Cycle labels
CYCLE_LABELS = ["first", "second"]
DEFAULT_CYCLE_LABEL = "second"

DEFAULT_HOLIDAY_NAME = "Holiday"
