"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0

MAX_NOTE_LENGTH = 500

DEFAULT_ORGANIZATION_ID = "default"
DEFAULT_ORGANIZATION_NAME = "Healthcare Organization"
DEFAULT_PERIMETER_RADIUS_M = 2000.0

DEFAULT_MOVEMENT_THRESHOLD_M = 2.0
DEFAULT_STATS_WINDOW_DAYS = 7
DEFAULT_CLOCK_IN_PERIOD_HOURS = 24
