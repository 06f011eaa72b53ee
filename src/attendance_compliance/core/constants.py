"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

MIN_OFFICE_RADIUS_METERS = 50
MAX_OFFICE_RADIUS_METERS = 500
DEFAULT_OFFICE_RADIUS_METERS = 100

DEFAULT_FACE_MATCH_THRESHOLD = 0.8
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_STANDARD_HOURS = 8.0

# Check window around the shift (masuk opens early, both close late).
CHECK_WINDOW_EARLY_MINUTES = 30
CHECK_WINDOW_LATE_MINUTES = 30

DEFAULT_WORK_DAYS = frozenset({0, 1, 2, 3, 4})

OFFICE_LOCATION_SETTING_KEY = "office_location"
EXPORT_FILENAME_PREFIX = "attendance_report"
