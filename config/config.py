"""Settings shared by every environment, read from the process environment."""

import os


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "madrasah_db"),
    }


def smtp_config_from_env() -> dict:
    return {
        "host": os.getenv("SMTP_HOST", "localhost"),
        "port": int(os.getenv("SMTP_PORT", "587")),
        "username": os.getenv("SMTP_USERNAME", ""),
        "password": os.getenv("SMTP_PASSWORD", ""),
        "from_address": os.getenv("SMTP_FROM", ""),
        "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
    }


# Invoice status thresholds, in hours past the due date.
LATE_AFTER_HOURS = int(os.getenv("LATE_AFTER_HOURS", "48"))
OVERDUE_AFTER_HOURS = int(os.getenv("OVERDUE_AFTER_HOURS", "96"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
