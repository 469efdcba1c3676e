# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .cursor import Cursor, decode_cursor, encode_cursor
from .entities import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, User, UserFilter, UserPage
from .exceptions import ConflictingCursorsError, InvalidEmailError
from .repositories import Notifier, UserRepository
from .validation import is_email_valid, validate_email

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "MAX_PAGE_LIMIT",
    "ConflictingCursorsError",
    "Cursor",
    "InvalidEmailError",
    "Notifier",
    "User",
    "UserFilter",
    "UserPage",
    "UserRepository",
    "decode_cursor",
    "encode_cursor",
    "is_email_valid",
    "validate_email",
]
