from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from flask import Flask

from userservice.application.use_cases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from userservice.domain.users.entities import User, UserFilter, UserPage
from userservice.domain.users.exceptions import InvalidEmailError
from userservice.interfaces.http.controllers.users_controller import UsersController
from userservice.shared.errors.base import InvalidCursorError, PersistenceError
from userservice.shared.middleware.error_handler import configure_error_handling

PAYLOAD = {
    "first_name": "Alan",
    "last_name": "Turing",
    "nickname": "alan",
    "password": "enigma",
    "email": "alan@example.com",
    "country": "UK",
}
CREATED_AT = datetime(2024, 6, 1, 9, 30, tzinfo=UTC)


def _stored(user: User) -> User:
    return User(
        id=user.id or uuid4(),
        first_name=user.first_name,
        last_name=user.last_name,
        nickname=user.nickname,
        password=user.password,
        email=user.email,
        country=user.country,
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _register(
    app: Flask,
    *,
    create_user: object | None = None,
    update_user: object | None = None,
    delete_user: object | None = None,
    list_users: object | None = None,
    request_timeout: float = 5.0,
) -> None:
    controller = UsersController(
        create_user=cast(CreateUserUseCase, create_user or MagicMock()),
        update_user=cast(UpdateUserUseCase, update_user or MagicMock()),
        delete_user=cast(DeleteUserUseCase, delete_user or MagicMock()),
        list_users=cast(ListUsersUseCase, list_users or MagicMock()),
        request_timeout=request_timeout,
    )
    app.register_blueprint(controller.as_blueprint())


def test_create_returns_201_with_user(flask_app: Flask) -> None:
    received: list[User] = []

    class StubCreate:
        def execute(self, user: User) -> User:
            received.append(user)
            return _stored(user)

    _register(flask_app, create_user=StubCreate())

    with flask_app.test_client() as client:
        response = client.post("/users", json=PAYLOAD)

    assert response.status_code == 201
    body = response.get_json()
    assert UUID(body["id"])
    assert body["nickname"] == "alan"
    assert body["password"] == "enigma"
    assert body["created_at"].startswith("2024-06-01T09:30:00")
    assert received[0].id is None


def test_create_with_missing_fields_returns_400(flask_app: Flask) -> None:
    create = MagicMock()
    _register(flask_app, create_user=create)

    with flask_app.test_client() as client:
        response = client.post("/users", json={"first_name": "Alan"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "email" in payload["context"]["fields"]
    create.execute.assert_not_called()


def test_create_with_bad_email_returns_400(flask_app: Flask) -> None:
    create = MagicMock()
    create.execute.side_effect = InvalidEmailError()
    _register(flask_app, create_user=create)

    with flask_app.test_client() as client:
        response = client.post("/users", json={**PAYLOAD, "email": "invalid-mail-format"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_email"


def test_store_failure_returns_500_without_driver_detail(flask_app: Flask) -> None:
    create = MagicMock()
    create.execute.side_effect = PersistenceError("save", "password authentication failed")
    _register(flask_app, create_user=create)

    with flask_app.test_client() as client:
        response = client.post("/users", json=PAYLOAD)

    assert response.status_code == 500
    assert response.get_json()["error"] == "persistence_error"
    assert b"password authentication failed" not in response.data


def test_list_passes_filter_and_omits_empty_cursors(flask_app: Flask) -> None:
    seen: list[UserFilter] = []
    user = _stored(User(**PAYLOAD))

    class StubList:
        def execute(self, user_filter: UserFilter) -> UserPage:
            seen.append(user_filter)
            return UserPage(users=[user], next_page="bmV4dA==", total=3)

    _register(flask_app, list_users=StubList())

    with flask_app.test_client() as client:
        response = client.get("/users?country=UK&limit=1&nickname=&previous_page=")

    assert response.status_code == 200
    body = response.get_json()
    assert body["total"] == 3
    assert body["next_page"] == "bmV4dA=="
    assert "previous_page" not in body
    assert body["users"][0]["id"] == str(user.id)
    assert body["users"][0]["password"] == "enigma"
    assert seen == [UserFilter(country="UK", limit=1)]


@pytest.mark.parametrize(
    "query",
    ["limit=abc", "limit=-1", "limit=2147483648", "limit=100000000000000000000"],
)
def test_list_with_bad_limit_returns_400(flask_app: Flask, query: str) -> None:
    _register(flask_app)

    with flask_app.test_client() as client:
        response = client.get(f"/users?{query}")

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_list_with_bad_cursor_returns_400(flask_app: Flask) -> None:
    list_users = MagicMock()
    list_users.execute.side_effect = InvalidCursorError("not base64")
    _register(flask_app, list_users=list_users)

    with flask_app.test_client() as client:
        response = client.get("/users?next_page=%25%25")

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "invalid_cursor",
        "context": {"reason": "not base64"},
    }


def test_update_with_malformed_id_returns_400(flask_app: Flask) -> None:
    update = MagicMock()
    _register(flask_app, update_user=update)

    with flask_app.test_client() as client:
        response = client.put("/users/not-a-uuid", json=PAYLOAD)

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_user_id"
    update.execute.assert_not_called()


def test_update_returns_ok(flask_app: Flask) -> None:
    update = MagicMock()
    user_id = uuid4()
    _register(flask_app, update_user=update)

    with flask_app.test_client() as client:
        response = client.put(f"/users/{user_id}", json=PAYLOAD)

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    [call] = update.execute.call_args_list
    sent: User = call.args[0]
    assert sent.id == user_id
    assert sent.updated_at is None


def test_delete_returns_ok(flask_app: Flask) -> None:
    delete = MagicMock()
    user_id = uuid4()
    _register(flask_app, delete_user=delete)

    with flask_app.test_client() as client:
        response = client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    delete.execute.assert_called_once_with(user_id)


def test_slow_call_returns_504(flask_app: Flask) -> None:
    class SlowDelete:
        def execute(self, user_id: UUID) -> None:
            time.sleep(0.5)

    _register(flask_app, delete_user=SlowDelete(), request_timeout=0.05)

    with flask_app.test_client() as client:
        response = client.delete(f"/users/{uuid4()}")

    assert response.status_code == 504
    assert response.get_json()["error"] == "deadline_exceeded"
