# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userservice.shared.errors.base import ValidationError


class InvalidEmailError(ValidationError):
    def __init__(self) -> None:
        super().__init__("invalid_email", context={"field": "email"})


class ConflictingCursorsError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "conflicting_cursors",
            context={"fields": ["previous_page", "next_page"]},
        )
