import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_compliance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

FACE_MATCH_THRESHOLD = 0.8
FACE_VERIFICATION_ENABLED = True
FACE_RECOGNIZER = ""

SHIFT_START_TIME = "08:00"
SHIFT_END_TIME = "17:00"
SHIFT_GRACE_MINUTES = 15
SHIFT_STANDARD_HOURS = 8.0
SHIFT_BREAK_MINUTES = 0
ENFORCE_WORKING_WINDOW = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
