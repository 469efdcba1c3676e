# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from userservice.domain.users.repositories import Notifier, UserRepository

from .use_cases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "ListUsersUseCase",
    "Notifier",
    "UpdateUserUseCase",
    "UserRepository",
]
