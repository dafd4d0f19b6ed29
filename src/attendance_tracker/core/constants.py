"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30
MIN_PASSWORD_LENGTH = 6

TEACHER_REQUIRED_PERCENTAGE = 90.0
STUDENT_REQUIRED_PERCENTAGE = 85.0

DEFAULT_ANALYSIS_MODEL = "gemini-2.0-flash"
DEFAULT_ANALYSIS_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_ANALYSIS_TIMEOUT = 30
