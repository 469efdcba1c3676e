# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from .exceptions import InvalidEmailError

# Lowercase only; uppercase addresses are rejected.
EMAIL_PATTERN = re.compile(r"[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,4}")


def is_email_valid(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_email(email: str) -> None:
    if not is_email_valid(email):
        raise InvalidEmailError()


__all__ = ["EMAIL_PATTERN", "is_email_valid", "validate_email"]
