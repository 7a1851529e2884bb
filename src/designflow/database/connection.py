from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import psycopg2
from psycopg2.extras import RealDictCursor


@dataclass
class DBConfig:
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    database: str = "designflow"
    dsn: Optional[str] = None
    sslmode: Optional[str] = None

    @classmethod
    def from_mapping(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 5432)),
            user=str(db_config.get("user", "postgres")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "designflow")),
            dsn=db_config.get("dsn") or None,
            sslmode=db_config.get("sslmode") or None,
        )

    def describe(self) -> str:
        if self.dsn:
            return self.dsn.rsplit("@", 1)[-1]
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        extra = {"sslmode": self._config.sslmode} if self._config.sslmode else {}
        if self._config.dsn:
            return psycopg2.connect(self._config.dsn, cursor_factory=RealDictCursor, **extra)
        return psycopg2.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            dbname=self._config.database,
            cursor_factory=RealDictCursor,
            **extra,
        )
