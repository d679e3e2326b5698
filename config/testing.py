import os

from config.config import LATE_AFTER_HOURS, OVERDUE_AFTER_HOURS, db_config_from_env, smtp_config_from_env  # noqa: F401

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="test")

SMTP_CONFIG = smtp_config_from_env()

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
