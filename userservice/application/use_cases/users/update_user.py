# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime

from userservice.domain.users.entities import User
from userservice.domain.users.repositories import Notifier, UserRepository
from userservice.domain.users.validation import validate_email
from userservice.shared.logging import logger

from .notifications import notify_best_effort


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UpdateUserUseCase:
    """Overwrite the mutable fields of a user.

    ``user.updated_at`` is the version the write is guarded by: the row only
    changes when its stored ``updated_at`` is older. Callers that do not carry
    a version get the current time.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._notifier = notifier
        self._clock = clock

    def execute(self, user: User) -> None:
        validate_email(user.email)
        if user.updated_at is None:
            user = replace(user, updated_at=self._clock())
        self._users.update(user)
        logger.info(f"users.update: ok user_id={user.id}")
        notify_best_effort(
            self._notifier,
            f"User has been updated: {user.describe()}",
            event="update",
        )
