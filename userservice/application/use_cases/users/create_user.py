# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
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


class CreateUserUseCase:
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

    def execute(self, user: User) -> User:
        validate_email(user.email)
        now = self._clock()
        created = replace(user, id=uuid.uuid4(), created_at=now, updated_at=now)
        self._users.save(created)
        logger.info(f"users.create: ok user_id={created.id}")
        notify_best_effort(
            self._notifier,
            f"User has been created: {created.describe()}",
            event="create",
        )
        return created
