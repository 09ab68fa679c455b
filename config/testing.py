SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "shiftclock_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

REPORT_TIMEZONE = "UTC"
STATS_WINDOW_DAYS = 7
DEFAULT_PERIMETER_RADIUS_M = 2000.0
REQUIRE_LOCATION_FOR_CLOCK_IN = False
DUPLICATE_CLOCK_IN_POLICY = "last_wins"
MOVEMENT_THRESHOLD_M = 2.0
