"""Opening and closing the database connection pool."""

from __future__ import annotations

import logging
import math

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from courierhub.config import Config

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when the database cannot be reached or configured."""


def _connect_args(url, timeout: float) -> dict:
    driver = url.get_driver_name()
    seconds = max(1, math.ceil(timeout))
    if driver in ("psycopg2", "psycopg"):
        return {"connect_timeout": seconds}
    if driver == "pg8000":
        return {"timeout": seconds}
    return {}


def connect_postgres(config: Config | str, timeout: float = 5.0) -> Engine:
    """Create a connection pool and check that the database answers.

    ``config`` is either a :class:`Config` or a database URL.
    """
    dsn = config if isinstance(config, str) else config.dsn()
    try:
        url = make_url(dsn)
    except ArgumentError as exc:
        raise DatabaseError(f"unable to parse DSN: {exc}") from exc

    engine: Engine | None = None
    try:
        engine = create_engine(url, connect_args=_connect_args(url, timeout))
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, ImportError) as exc:
        if engine is not None:
            engine.dispose()
        raise DatabaseError(f"unable to connect to database: {exc}") from exc
    return engine


def close_postgres(engine: Engine | None) -> None:
    """Dispose of the connection pool, if there is one."""
    if engine is not None:
        engine.dispose()
        logger.info("PostgreSQL connection pool closed")