# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from .entities import User, UserFilter, UserPage


class UserRepository(Protocol):
    def save(self, user: User) -> None: ...
    def update(self, user: User) -> None: ...
    def delete(self, user_id: UUID) -> None: ...
    def list(self, user_filter: UserFilter) -> UserPage: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...
