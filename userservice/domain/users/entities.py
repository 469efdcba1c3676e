# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 2**31 - 1


@dataclass(slots=True, frozen=True)
class User:

    first_name: str
    last_name: str
    nickname: str
    password: str
    email: str
    country: str
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def describe(self) -> str:
        return (
            f"id={self.id} nickname={self.nickname} first_name={self.first_name} "
            f"last_name={self.last_name} country={self.country}"
        )


@dataclass(slots=True, frozen=True)
class UserFilter:
    """Equality predicates and pagination for a listing call.

    Empty strings count as absent predicates. A ``limit`` of zero means
    :data:`DEFAULT_PAGE_LIMIT`.
    """

    country: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    previous_page: str | None = None
    next_page: str | None = None
    limit: int = 0

    @property
    def effective_limit(self) -> int:
        return self.limit or DEFAULT_PAGE_LIMIT

    def has_both_cursors(self) -> bool:
        return bool(self.previous_page) and bool(self.next_page)


@dataclass(slots=True, frozen=True)
class UserPage:

    users: list[User] = field(default_factory=list)
    previous_page: str | None = None
    next_page: str | None = None
    total: int = 0
