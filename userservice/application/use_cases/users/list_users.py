# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userservice.domain.users.entities import UserFilter, UserPage
from userservice.domain.users.exceptions import ConflictingCursorsError
from userservice.domain.users.repositories import UserRepository


class ListUsersUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_filter: UserFilter) -> UserPage:
        if user_filter.has_both_cursors():
            raise ConflictingCursorsError()
        return self._users.list(user_filter)


__all__ = ["ListUsersUseCase"]
