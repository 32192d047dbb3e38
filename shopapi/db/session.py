"""
Engine and session access for the product/user stores.

The engine is built lazily from ``DATABASE_URL`` and cached; call
``reset_caches()`` after changing the URL (tests do, per temp file).
On SQLite connections ``lower()`` is replaced by Python's ``str.lower``
so case-insensitive name search folds non-ASCII letters the same way
Postgres does.
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from shopapi.core.config import get_settings

Base = declarative_base()


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if isinstance(value, str) else value


def _install_sqlite_functions(dbapi_connection, _connection_record) -> None:
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


@lru_cache
def get_engine() -> Engine:
    url = (get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to reach the product/user stores.")
    engine = create_engine(url, future=True, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _install_sqlite_functions)
    return engine


@lru_cache
def _session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a short-lived session; uncommitted work is rolled back on close."""
    session = _session_factory()()
    try:
        yield session
    finally:
        session.close()


def reset_caches() -> None:
    """Forget the cached engine and session factory (after DATABASE_URL changes)."""
    _session_factory.cache_clear()
    get_engine.cache_clear()
