import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftclock"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed a demo manager, care worker and the default organization
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Attendance rules
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")
STATS_WINDOW_DAYS = int(os.getenv("STATS_WINDOW_DAYS", "7"))
DEFAULT_PERIMETER_RADIUS_M = float(os.getenv("DEFAULT_PERIMETER_RADIUS_M", "2000"))
REQUIRE_LOCATION_FOR_CLOCK_IN = bool(int(os.getenv("REQUIRE_LOCATION_FOR_CLOCK_IN", "0")))
DUPLICATE_CLOCK_IN_POLICY = os.getenv("DUPLICATE_CLOCK_IN_POLICY", "last_wins")
MOVEMENT_THRESHOLD_M = float(os.getenv("MOVEMENT_THRESHOLD_M", "2.0"))
