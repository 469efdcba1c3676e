# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from uuid import UUID

from userservice.domain.users.repositories import Notifier, UserRepository
from userservice.shared.logging import logger

from .notifications import notify_best_effort


class DeleteUserUseCase:
    def __init__(self, *, users: UserRepository, notifier: Notifier | None = None) -> None:
        self._users = users
        self._notifier = notifier

    def execute(self, user_id: UUID) -> None:
        self._users.delete(user_id)
        logger.info(f"users.delete: ok user_id={user_id}")
        notify_best_effort(
            self._notifier,
            f"User has been deleted: {user_id}",
            event="delete",
        )
