import os

from .base import APP_TIMEZONE, AUTH_REQUIRED, CORS_ORIGINS, LOG_LEVEL, db_config_from_env, env_flag  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()
if DB_CONFIG["dsn"] and not DB_CONFIG["sslmode"]:
    DB_CONFIG["sslmode"] = "require"

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
