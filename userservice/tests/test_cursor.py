from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta, timezone
from uuid import UUID

import pytest

from userservice.domain.users.cursor import decode_cursor, encode_cursor
from userservice.shared.errors.base import InvalidCursorError

USER_ID = UUID("0b4f2c9e-7d1a-4c55-9a4e-3f1b2c3d4e5f")


def _raw(token: str) -> str:
    return base64.b64decode(token).decode("utf-8")


def _token(raw: str) -> str:
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def test_encode_uses_unpadded_timestamp() -> None:
    token = encode_cursor(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), USER_ID, 7)

    assert _raw(token) == f"2024-1-2 3:4:5,{USER_ID},7"


def test_encode_keeps_microseconds() -> None:
    token = encode_cursor(datetime(2024, 11, 12, 13, 14, 15, 123, tzinfo=UTC), USER_ID, 0)

    assert _raw(token) == f"2024-11-12 13:14:15.000123,{USER_ID},0"


def test_encode_normalizes_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    aware = encode_cursor(datetime(2024, 1, 2, 5, 0, 0, tzinfo=plus_two), USER_ID, 1)
    naive = encode_cursor(datetime(2024, 1, 2, 3, 0, 0), USER_ID, 1)

    assert _raw(aware) == _raw(naive) == f"2024-1-2 3:0:0,{USER_ID},1"


def test_decode_returns_position() -> None:
    created_at = datetime(2024, 5, 6, 7, 8, 9, 654321, tzinfo=UTC)

    cursor = decode_cursor(encode_cursor(created_at, USER_ID, 42))

    assert cursor.created_at == created_at
    assert cursor.user_id == USER_ID
    assert cursor.offset == 42


@pytest.mark.parametrize(
    "raw",
    [
        f"2024-1-2 3:4:5,{USER_ID}",
        f"2024-1-2 3:4:5,{USER_ID},1,extra",
        "",
    ],
)
def test_decode_rejects_wrong_field_count(raw: str) -> None:
    with pytest.raises(InvalidCursorError) as exc_info:
        decode_cursor(_token(raw))

    assert exc_info.value.context == {"reason": "wrong field count"}


def test_decode_rejects_non_integer_offset() -> None:
    with pytest.raises(InvalidCursorError):
        decode_cursor(_token(f"2024-1-2 3:4:5,{USER_ID},abc"))


def test_decode_rejects_malformed_timestamp() -> None:
    with pytest.raises(InvalidCursorError):
        decode_cursor(_token(f"yesterday,{USER_ID},1"))


def test_decode_rejects_malformed_id() -> None:
    with pytest.raises(InvalidCursorError):
        decode_cursor(_token("2024-1-2 3:4:5,not-a-uuid,1"))


def test_decode_rejects_garbage() -> None:
    with pytest.raises(InvalidCursorError) as exc_info:
        decode_cursor("%%% not base64 %%%")

    assert exc_info.value.code == "invalid_cursor"
