# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Keyset pagination over the ``(created_at, id)`` ordering.

Pages are emitted newest first. A ``next_page`` cursor continues with rows
strictly older than its anchor; a ``previous_page`` cursor fetches the rows
strictly newer than its anchor in ascending order and flips them back. When
stepping back lands on offset zero the boundary is dropped and the plain
first page is served again, so rows inserted in the meantime show up.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import DateTime, Select, Uuid, and_, asc, desc, func, literal, select, tuple_
from sqlalchemy.sql.elements import ColumnElement

from userservice.domain.users.cursor import Cursor, decode_cursor, encode_cursor
from userservice.domain.users.entities import User, UserFilter
from userservice.infrastructure.db.models import User as UserRow


@dataclass(slots=True, frozen=True)
class PagePlan:

    offset: int
    limit: int
    boundary: Cursor | None = None
    ascending: bool = False


def plan_page(user_filter: UserFilter) -> PagePlan:
    limit = user_filter.effective_limit

    if user_filter.next_page:
        cursor = decode_cursor(user_filter.next_page)
        return PagePlan(offset=cursor.offset + limit, limit=limit, boundary=cursor)

    if user_filter.previous_page:
        cursor = decode_cursor(user_filter.previous_page)
        if cursor.offset == limit:
            return PagePlan(offset=0, limit=limit)
        return PagePlan(
            offset=cursor.offset - limit,
            limit=limit,
            boundary=cursor,
            ascending=True,
        )

    return PagePlan(offset=0, limit=limit)


def equality_predicates(user_filter: UserFilter) -> list[ColumnElement[bool]]:
    predicates: list[ColumnElement[bool]] = []
    if user_filter.country:
        predicates.append(UserRow.country == user_filter.country)
    if user_filter.first_name:
        predicates.append(UserRow.first_name == user_filter.first_name)
    if user_filter.last_name:
        predicates.append(UserRow.last_name == user_filter.last_name)
    if user_filter.nickname:
        predicates.append(UserRow.nickname == user_filter.nickname)
    return predicates


def build_page_query(user_filter: UserFilter, plan: PagePlan) -> Select[tuple[UserRow]]:
    predicates = equality_predicates(user_filter)

    if plan.boundary is not None:
        key = tuple_(UserRow.created_at, UserRow.id)
        anchor = tuple_(
            literal(plan.boundary.created_at, DateTime(timezone=True)),
            literal(plan.boundary.user_id, Uuid()),
        )
        predicates.append(key > anchor if plan.ascending else key < anchor)

    stmt = select(UserRow)
    if predicates:
        stmt = stmt.where(and_(*predicates))

    direction = asc if plan.ascending else desc
    return stmt.order_by(direction(UserRow.created_at), direction(UserRow.id)).limit(plan.limit)


def build_count_query(user_filter: UserFilter) -> Select[tuple[int]]:
    stmt = select(func.count()).select_from(UserRow)
    predicates = equality_predicates(user_filter)
    if predicates:
        stmt = stmt.where(and_(*predicates))
    return stmt


def previous_page_cursor(users: Sequence[User], offset: int, limit: int) -> str | None:
    # Nothing precedes the first page.
    if offset - limit < 0 or not users:
        return None
    first = users[0]
    assert first.created_at is not None and first.id is not None
    return encode_cursor(first.created_at, first.id, offset)


def next_page_cursor(users: Sequence[User], offset: int, total: int, limit: int) -> str | None:
    remaining = total - offset
    # A short page, or exactly ``limit`` rows left, means this is the last page.
    if remaining <= 0 or len(users) < limit or remaining == limit:
        return None
    last = users[-1]
    assert last.created_at is not None and last.id is not None
    return encode_cursor(last.created_at, last.id, offset)


__all__ = [
    "PagePlan",
    "build_count_query",
    "build_page_query",
    "equality_predicates",
    "next_page_cursor",
    "plan_page",
    "previous_page_cursor",
]
