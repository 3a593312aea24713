from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "pointage_db")),
            connect_timeout=int(db_config.get("connect_timeout", 5)),
        )

    def describe(self) -> str:
        """``user@host:port/database``, for logs (no password)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Hands out one short-lived MySQL connection per store operation.

    A kiosk punch or a form submission is a single round-trip, so there is no
    pool; an unreachable server fails after ``connect_timeout`` seconds.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        cfg = self._config
        kwargs = dict(
            host=cfg.host,
            port=cfg.port,
            user=cfg.user,
            password=cfg.password,
            connection_timeout=cfg.connect_timeout,
            charset="utf8mb4",
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = cfg.database
        return mysql.connector.connect(**kwargs)
