from .base import APP_TIMEZONE, CORS_ORIGINS, db_config_from_env  # noqa: F401

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="postgres")

DEBUG = False
TESTING = True

AUTH_REQUIRED = False
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
