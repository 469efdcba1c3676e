# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Engine, connection pool and schema bootstrap."""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from userservice.shared.config import DatabaseConfig
from userservice.shared.logging import logger


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def create_db_engine(config: DatabaseConfig, *, statement_timeout: float | None = None) -> Engine:
    """Build the process-wide pool once; callers pass it on explicitly."""

    url = make_url(config.url)
    backend = url.get_backend_name()
    kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    connect_args: dict[str, object] = {}

    if backend == "sqlite":
        connect_args["check_same_thread"] = False
        if _is_memory_sqlite(config.url):
            kwargs["poolclass"] = StaticPool
        else:
            connect_args["timeout"] = int(config.pool_timeout)
            kwargs.update(
                pool_size=config.pool_size or 1,
                max_overflow=config.max_overflow,
                pool_timeout=config.pool_timeout,
                pool_recycle=config.conn_max_lifetime,
            )
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.conn_max_lifetime,
        )
        if backend == "postgresql" and statement_timeout:
            connect_args["options"] = f"-c statement_timeout={int(statement_timeout * 1000)}"

    engine = create_engine(config.url, connect_args=connect_args, **kwargs)

    if backend == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragmas)

    logger.info(
        f"db.engine: created backend={backend} max_open={config.max_open_conns} "
        f"max_idle={config.max_idle_conns} lifetime={config.conn_max_lifetime}s"
    )
    return engine


def _set_sqlite_pragmas(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA busy_timeout=30000;")
    except Exception:
        logger.exception("Failed to apply SQLite PRAGMAs")
    finally:
        cur.close()


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create missing tables; safe to run against an initialized database."""

    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


__all__ = ["Base", "create_db_engine", "create_session_factory", "init_db"]
