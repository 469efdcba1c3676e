# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .create_user import CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .list_users import ListUsersUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
]
