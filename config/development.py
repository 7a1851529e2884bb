import os

from .base import APP_TIMEZONE, AUTH_REQUIRED, CORS_ORIGINS, LOG_LEVEL, db_config_from_env, env_flag  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="postgres")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo users, art types and settings on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
