# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from userservice.domain.users.cursor import as_utc
from userservice.domain.users.entities import User as DomainUser
from userservice.domain.users.entities import UserFilter, UserPage
from userservice.domain.users.repositories import UserRepository
from userservice.infrastructure.db.models import User
from userservice.infrastructure.unit_of_work import unit_of_work_scope
from userservice.shared.errors.base import PersistenceError
from userservice.shared.logging import logger

from .pagination import (
    build_count_query,
    build_page_query,
    next_page_cursor,
    plan_page,
    previous_page_cursor,
)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        nickname=row.nickname,
        password=row.password,
        email=row.email,
        country=row.country,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _persistence_error(operation: str, exc: SQLAlchemyError) -> PersistenceError:
    detail = str(getattr(exc, "orig", None) or exc)
    logger.opt(exception=exc).error(f"users.store: {operation} failed: {detail}")
    return PersistenceError(operation, detail)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def save(self, user: DomainUser) -> None:
        now = datetime.now(UTC)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.add(
                    User(
                        id=user.id,
                        first_name=user.first_name,
                        last_name=user.last_name,
                        nickname=user.nickname,
                        password=user.password,
                        email=user.email,
                        country=user.country,
                        created_at=user.created_at or now,
                        updated_at=user.updated_at or user.created_at or now,
                    )
                )
        except SQLAlchemyError as exc:
            raise _persistence_error("save", exc) from exc

    def update(self, user: DomainUser) -> None:
        """Apply ``user`` only if the stored row is older than ``user.updated_at``.

        A stale version or a missing row leaves the table untouched.
        """

        version = user.updated_at or datetime.now(UTC)
        stmt = (
            update(User)
            .where(User.id == user.id, User.updated_at < version)
            .values(
                first_name=user.first_name,
                last_name=user.last_name,
                nickname=user.nickname,
                password=user.password,
                email=user.email,
                country=user.country,
                updated_at=version,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            with unit_of_work_scope(self._session_factory) as session:
                result = session.execute(stmt)
        except SQLAlchemyError as exc:
            raise _persistence_error("update", exc) from exc
        if result.rowcount == 0:
            logger.debug(f"users.store: update skipped user_id={user.id} (stale or missing)")

    def delete(self, user_id: UUID) -> None:
        stmt = delete(User).where(User.id == user_id).execution_options(synchronize_session=False)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.execute(stmt)
        except SQLAlchemyError as exc:
            raise _persistence_error("delete", exc) from exc

    def list(self, user_filter: UserFilter) -> UserPage:
        plan = plan_page(user_filter)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                rows = session.execute(build_page_query(user_filter, plan)).scalars().all()
                users = [_to_domain(row) for row in rows]
                total = int(session.execute(build_count_query(user_filter)).scalar_one())
        except SQLAlchemyError as exc:
            raise _persistence_error("list", exc) from exc

        if plan.ascending:
            users.reverse()

        return UserPage(
            users=users,
            # Anchored on the first row so stepping back never overlaps this page.
            previous_page=previous_page_cursor(users, plan.offset, plan.limit),
            next_page=next_page_cursor(users, plan.offset, total, plan.limit),
            total=total,
        )


__all__ = ["SqlAlchemyUserRepository"]
