"""Database settings read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Config:
    """Connection settings for the PostgreSQL database."""

    db_host: str = ""
    db_port: str = ""
    db_user: str = ""
    db_password: str = field(default="", repr=False)
    db_name: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from DB_* variables; missing ones become empty strings."""
        env = os.environ if environ is None else environ
        return cls(
            db_host=env.get("DB_HOST", ""),
            db_port=env.get("DB_PORT", ""),
            db_user=env.get("DB_USER", ""),
            db_password=env.get("DB_PASSWORD", ""),
            db_name=env.get("DB_NAME", ""),
        )

    def dsn(self) -> str:
        """Return the PostgreSQL connection URL for these settings."""
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )