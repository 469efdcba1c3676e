# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-call transactional scope over a pooled connection."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from userservice.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error.

    The underlying connection goes back to the pool when the scope exits.
    """

    session = factory()
    logger.debug("uow: session opened")
    try:
        yield session
        session.commit()
        logger.debug("uow: committed")
    except Exception as exc:
        logger.warning(f"uow: rollback due to {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()
        logger.debug("uow: session closed")


__all__ = ["unit_of_work_scope"]
