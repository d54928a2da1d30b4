"""Settings shared by every environment; read from the process environment."""

import os

DEFAULT_LAPSE_THRESHOLDS = "90,182,365,730"


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "congregation_db"),
    }


# Tier thresholds in days, tier 1 first: "90,182,365,730".
LAPSE_THRESHOLDS = os.getenv("LAPSE_THRESHOLDS", DEFAULT_LAPSE_THRESHOLDS)
ABSENT_SERVICE_WINDOW = int(os.getenv("ABSENT_SERVICE_WINDOW", "3"))

TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER", "")
SMS_MAX_CONCURRENCY = int(os.getenv("SMS_MAX_CONCURRENCY", "5"))
SMS_TIMEOUT_SECONDS = float(os.getenv("SMS_TIMEOUT_SECONDS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
