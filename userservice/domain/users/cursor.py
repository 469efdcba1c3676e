# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque keyset cursors.

A cursor is ``base64("<created_at>,<id>,<offset>")`` where ``created_at`` is
the UTC creation time written as ``Y-M-D H:M:S`` without zero padding, with a
``.ffffff`` suffix only when the timestamp carries microseconds. It marks a
position in the ``(created_at, id)`` ordering rather than a row, so it stays
valid after the anchoring row is deleted.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from userservice.shared.errors.base import InvalidCursorError

_SEPARATOR = ","
_FIELDS = 3


@dataclass(slots=True, frozen=True)
class Cursor:

    created_at: datetime
    user_id: UUID
    offset: int


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _format_timestamp(value: datetime) -> str:
    value = as_utc(value)
    text = (
        f"{value.year}-{value.month}-{value.day} "
        f"{value.hour}:{value.minute}:{value.second}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}"
    return text


def _parse_timestamp(text: str) -> datetime:
    fmt = "%Y-%m-%d %H:%M:%S.%f" if "." in text else "%Y-%m-%d %H:%M:%S"
    try:
        parsed = datetime.strptime(text, fmt)
    except ValueError as exc:
        raise InvalidCursorError("malformed timestamp") from exc
    return parsed.replace(tzinfo=UTC)


def encode_cursor(created_at: datetime, user_id: UUID | str, offset: int) -> str:
    key = _SEPARATOR.join((_format_timestamp(created_at), str(user_id), str(offset)))
    return base64.b64encode(key.encode("utf-8")).decode("ascii")


def decode_cursor(token: str) -> Cursor:
    try:
        raw = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidCursorError("not base64") from exc

    parts = raw.split(_SEPARATOR)
    if len(parts) != _FIELDS:
        raise InvalidCursorError("wrong field count")

    created_at_text, user_id_text, offset_text = parts
    created_at = _parse_timestamp(created_at_text)
    try:
        user_id = UUID(user_id_text)
    except ValueError as exc:
        raise InvalidCursorError("malformed id") from exc
    try:
        offset = int(offset_text)
    except ValueError as exc:
        raise InvalidCursorError("malformed offset") from exc

    return Cursor(created_at=created_at, user_id=user_id, offset=offset)


__all__ = ["Cursor", "as_utc", "decode_cursor", "encode_cursor"]
