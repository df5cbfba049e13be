"""Database configuration and engine construction for the dashboard seeder.

Exports:
- Base: declarative base for models
- DATABASE_URL: connection string resolved from the environment
- build_engine(url): create an engine capped at a single pooled connection
- engine: the process-wide engine built from DATABASE_URL
- get_engine: FastAPI dependency returning the engine

Behavior:
- Reads POSTGRES_URL (or DATABASE_URL) from env, falls back to a local SQLite
  file `dashboard.db` in the project root.
- PostgreSQL connections require TLS (DB_SSLMODE) and use a bounded connect
  timeout (DB_CONNECT_TIMEOUT).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

load_dotenv()

logger = logging.getLogger(__name__)

# Project root (two levels up from this file)
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DB_SSLMODE = os.getenv("DB_SSLMODE", "require")
DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))


def _default_sqlite_url() -> str:
    db_path = PROJECT_ROOT / "dashboard.db"
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def normalize_url(url: str) -> str:
    # Hosted Postgres providers still hand out the legacy `postgres://` scheme
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def resolve_database_url() -> str:
    url = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL")
    if not url:
        return _default_sqlite_url()
    return normalize_url(url)


DATABASE_URL: str = resolve_database_url()


def build_engine(url: str, sslmode: Optional[str] = None, connect_timeout: Optional[int] = None) -> Engine:
    """Create an engine whose pool holds exactly one connection.

    Every statement issued by the seeder shares that connection, so rows that
    are inserted concurrently queue on the pool and reach the database one at
    a time. Idle connections are never recycled.
    """
    url = normalize_url(url)
    engine_kwargs = {
        "future": True,
        "pool_size": 1,
        "max_overflow": 0,
        "pool_recycle": -1,
        # Bound values (password hashes) stay out of error messages and logs
        "hide_parameters": True,
    }

    if url.startswith("sqlite"):
        # SQLite requires `check_same_thread=False` since inserts run on worker threads
        connect_args = {"check_same_thread": False, "timeout": connect_timeout or DB_CONNECT_TIMEOUT}
    else:
        connect_args = {
            "sslmode": sslmode or DB_SSLMODE,
            "connect_timeout": connect_timeout or DB_CONNECT_TIMEOUT,
        }

    logger.debug("Creating engine for dialect=%s", url.split(":", 1)[0])
    return create_engine(url, connect_args=connect_args, **engine_kwargs)


engine = build_engine(DATABASE_URL)

# Declarative base for models
Base = declarative_base()


def get_engine() -> Engine:
    """Return the process-wide engine for FastAPI dependencies.

    Usage:
        def endpoint(engine: Engine = Depends(get_engine)):
            ...
    """
    return engine


__all__ = ["Base", "DATABASE_URL", "build_engine", "engine", "get_engine", "normalize_url", "resolve_database_url"]
