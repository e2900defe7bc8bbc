"""Pydantic models for intake configuration.

The YAML config and environment overrides are parsed into these models at
startup.  Invalid configs fail fast with clear error messages before any
database connection is attempted.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, model_validator
from sqlalchemy.engine import URL

DATABASE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,64}$")


def is_sqlite(driver: str) -> bool:
    return driver.split("+", 1)[0] == "sqlite"


class DatabaseConfig(BaseModel):
    """Where the ``users`` table lives.

    For SQLite drivers ``database`` is a file path and host/port/credentials
    are ignored.
    """

    driver: str = "mysql+pymysql"
    host: str = "localhost"
    port: int | None = 3306
    user: str = "root"
    password: str = ""
    database: str = "userdb"

    @model_validator(mode="after")
    def _check_database_name(self):
        if not is_sqlite(self.driver) and not DATABASE_NAME_PATTERN.match(self.database):
            raise ValueError(
                f"Invalid database name {self.database!r}: use 1-64 letters, "
                "digits or underscores"
            )
        return self

    @property
    def backend(self) -> str:
        """Dialect name without the DBAPI suffix, e.g. ``"mysql"``."""
        return self.driver.split("+", 1)[0]

    def url(self, with_database: bool = True) -> URL:
        if is_sqlite(self.driver):
            return URL.create(self.driver, database=self.database)
        if with_database:
            database: str | None = self.database
        elif self.backend == "postgresql":
            # PostgreSQL always needs *some* database to connect to.
            database = "postgres"
        else:
            database = None
        return URL.create(
            self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=database,
        )


class SourceConfig(BaseModel):
    kind: str = "console"
    inline_config: dict[str, Any] = {}


class IntakeSettings(BaseModel):
    log_level: str = "INFO"


class IntakeConfig(BaseModel):
    """Root model — represents the entire intake YAML file."""

    database: DatabaseConfig = DatabaseConfig()
    source: SourceConfig = SourceConfig()
    settings: IntakeSettings = IntakeSettings()
