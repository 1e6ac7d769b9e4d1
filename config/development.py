import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

# Employees' local timezone: decides entry dates and shift windows.
TIMEZONE = os.getenv("TIMEZONE", "UTC")

PAID_BREAK_LIMIT_MINUTES = int(os.getenv("PAID_BREAK_LIMIT_MINUTES", "15"))
UNPAID_BREAK_LIMIT_MINUTES = int(os.getenv("UNPAID_BREAK_LIMIT_MINUTES", "30"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo shifts/departments/tasks on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
