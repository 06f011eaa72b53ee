import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_compliance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Face gate
FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.8"))
FACE_VERIFICATION_ENABLED = bool(int(os.getenv("FACE_VERIFICATION_ENABLED", "1")))
FACE_RECOGNIZER = os.getenv("FACE_RECOGNIZER", "")

# Global shift; leave SHIFT_START_TIME empty to run without a shift
SHIFT_START_TIME = os.getenv("SHIFT_START_TIME", "08:00")
SHIFT_END_TIME = os.getenv("SHIFT_END_TIME", "17:00")
SHIFT_GRACE_MINUTES = int(os.getenv("SHIFT_GRACE_MINUTES", "15"))
SHIFT_STANDARD_HOURS = float(os.getenv("SHIFT_STANDARD_HOURS", "8"))
SHIFT_BREAK_MINUTES = int(os.getenv("SHIFT_BREAK_MINUTES", "0"))
ENFORCE_WORKING_WINDOW = bool(int(os.getenv("ENFORCE_WORKING_WINDOW", "0")))

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
