import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "shiftclock"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftclock"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")
STATS_WINDOW_DAYS = int(os.getenv("STATS_WINDOW_DAYS", "7"))
DEFAULT_PERIMETER_RADIUS_M = float(os.getenv("DEFAULT_PERIMETER_RADIUS_M", "2000"))
REQUIRE_LOCATION_FOR_CLOCK_IN = bool(int(os.getenv("REQUIRE_LOCATION_FOR_CLOCK_IN", "0")))
DUPLICATE_CLOCK_IN_POLICY = os.getenv("DUPLICATE_CLOCK_IN_POLICY", "last_wins")
MOVEMENT_THRESHOLD_M = float(os.getenv("MOVEMENT_THRESHOLD_M", "2.0"))
