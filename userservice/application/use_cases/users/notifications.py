# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userservice.domain.users.repositories import Notifier
from userservice.shared.errors.base import NotificationError
from userservice.shared.logging import logger


def notify_best_effort(notifier: Notifier | None, message: str, *, event: str) -> None:
    """Publish ``message`` once; failures are logged and swallowed."""

    if notifier is None:
        return
    try:
        notifier.notify(message)
    except NotificationError as exc:
        logger.error(f"users.{event}: error while notifying subscribers: {exc}")
        return
    logger.debug(f"users.{event}: subscribers notified")


__all__ = ["notify_best_effort"]
