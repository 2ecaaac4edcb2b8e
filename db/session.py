"""
db/session.py

SQLAlchemy engine, session factory, and the scoped store handle used by a
seed run.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url
from db.repositories.entity_repository import EntityRepository
from db.repositories.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

_SUPPORTED_URL_PREFIXES = ("postgresql", "sqlite")


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Create the engine for the seed target.

    PostgreSQL is the production target; SQLite URLs are accepted for local
    dry runs against a scratch file.
    """

    url = database_url or resolve_database_url()
    if not url.startswith(_SUPPORTED_URL_PREFIXES):
        raise RuntimeError("Only PostgreSQL and SQLite URLs are supported.")

    if url.startswith("sqlite"):
        return create_engine(url, echo=_get_bool_env("SQL_ECHO", default=False))

    return create_engine(
        url,
        echo=_get_bool_env("SQL_ECHO", default=False),
        pool_pre_ping=True,
        pool_recycle=_get_int_env("DB_POOL_RECYCLE", 1800),
        pool_size=_get_int_env("DB_POOL_SIZE", 5),
        max_overflow=_get_int_env("DB_MAX_OVERFLOW", 10),
        # Prisma stores DateTime as timestamp without time zone, in UTC.
        connect_args={"options": "-c timezone=UTC"},
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@contextmanager
def store_scope(
    engine: Engine | None = None,
    *,
    dispose_engine: bool | None = None,
) -> Iterator[EntityRepository]:
    """
    Acquire the single store handle for a seed run and guarantee its release.

    The database is pinged before the handle is yielded so an unreachable
    store fails the run before any entity type starts. The session is closed
    on every exit path; an engine created here is also disposed.
    """

    owns_engine = engine is None
    bound_engine = engine if engine is not None else create_db_engine()
    should_dispose = owns_engine if dispose_engine is None else dispose_engine

    session = create_session_factory(bound_engine)()
    try:
        try:
            session.execute(text("SELECT 1"))
            session.rollback()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("Database unavailable.") from exc

        logger.info("Store session opened dialect=%s", bound_engine.dialect.name)
        yield EntityRepository(session)
    finally:
        session.close()
        if should_dispose:
            bound_engine.dispose()
        logger.info("Store session released")
