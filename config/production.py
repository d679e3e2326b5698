import os

from config.config import LATE_AFTER_HOURS, LOG_LEVEL, OVERDUE_AFTER_HOURS, db_config_from_env, smtp_config_from_env  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

SMTP_CONFIG = smtp_config_from_env()

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
