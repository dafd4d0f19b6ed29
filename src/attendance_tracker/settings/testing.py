import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
}

ANALYSIS_CONFIG = {
    "api_key": "",
    "model": "gemini-2.0-flash",
    "base_url": "https://generativelanguage.googleapis.com/v1beta",
    "timeout": 5,
}

DEBUG = False
TESTING = True

SESSION_DAYS = 1

AUTO_INIT_DB = False
AUTO_SEED_DB = False
