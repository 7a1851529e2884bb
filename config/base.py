"""Settings shared by every environment, read from the process environment."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def db_config_from_env(*, default_password: str = "") -> dict:
    # DATABASE_URL (Neon, Vercel Postgres, ...) wins over the split variables
    return {
        "dsn": os.getenv("DATABASE_URL") or None,
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "5432")),
        "user": os.getenv("DB_USER", "postgres"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "designflow"),
        "sslmode": os.getenv("DB_SSLMODE") or None,
    }


APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

AUTH_REQUIRED = env_flag("AUTH_REQUIRED")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
