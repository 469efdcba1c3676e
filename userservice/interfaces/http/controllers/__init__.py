# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .misc_controller import MiscController
from .users_controller import UsersController

__all__ = ["MiscController", "UsersController"]
