import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REPORT_WORKERS = int(os.getenv("REPORT_WORKERS", "4"))
TREND_THRESHOLD_PERCENT = float(os.getenv("TREND_THRESHOLD_PERCENT", "5"))
PEAK_DAYS_LIMIT = int(os.getenv("PEAK_DAYS_LIMIT", "5"))
