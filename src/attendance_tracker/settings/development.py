import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

ANALYSIS_CONFIG = {
    "api_key": os.getenv("GEMINI_API_KEY", ""),
    "model": os.getenv("ANALYSIS_MODEL", "gemini-2.0-flash"),
    "base_url": os.getenv("ANALYSIS_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
    "timeout": float(os.getenv("ANALYSIS_TIMEOUT", "30")),
}

DEBUG = True

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo teachers/students on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
