from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from userservice.app import create_app
from userservice.container import Container
from userservice.shared.config import AppConfig, DatabaseConfig, PubSubConfig, ServerConfig


def _payload(nickname: str, **overrides: str) -> dict[str, str]:
    payload = {
        "first_name": "Linus",
        "last_name": "Torvalds",
        "nickname": nickname,
        "password": "penguin",
        "email": f"{nickname}@example.com",
        "country": "FI",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def app() -> Iterator[Flask]:
    config = AppConfig(
        database=DatabaseConfig(url="sqlite://"),
        pubsub=PubSubConfig(enabled=False),
        server=ServerConfig(api_prefix="", request_timeout=5.0),
    )
    container = Container(config)
    yield create_app(config, container=container)
    container.close()


def test_create_list_update_delete_flow(app: Flask) -> None:
    with app.test_client() as client:
        created = []
        for nickname in ("alpha", "beta", "gamma"):
            response = client.post("/users", json=_payload(nickname))
            assert response.status_code == 201
            assert response.headers["X-Request-ID"]
            created.append(response.get_json())

        first = client.get("/users?limit=2").get_json()
        assert first["total"] == 3
        assert len(first["users"]) == 2
        assert "previous_page" not in first

        second = client.get(
            "/users", query_string={"limit": 2, "next_page": first["next_page"]}
        ).get_json()
        assert len(second["users"]) == 1
        assert "next_page" not in second
        seen = {user["nickname"] for user in first["users"] + second["users"]}
        assert seen == {"alpha", "beta", "gamma"}

        back = client.get(
            "/users", query_string={"limit": 2, "previous_page": second["previous_page"]}
        ).get_json()
        assert [u["id"] for u in back["users"]] == [u["id"] for u in first["users"]]

        target = created[0]["id"]
        update = client.put(f"/users/{target}", json=_payload("alpha", country="SE"))
        assert update.status_code == 200
        sweden = client.get("/users?country=SE").get_json()
        assert [u["id"] for u in sweden["users"]] == [target]

        assert client.delete(f"/users/{target}").status_code == 200
        assert client.delete(f"/users/{target}").status_code == 200
        assert client.get("/users").get_json()["total"] == 2


def test_invalid_email_is_not_stored(app: Flask) -> None:
    with app.test_client() as client:
        response = client.post("/users", json=_payload("bad", email="invalid-mail-format"))
        listing = client.get("/users").get_json()

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_email"
    assert listing == {"users": [], "total": 0}


def test_conflicting_cursors_are_rejected(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/users?next_page=YQ==&previous_page=Yg==")

    assert response.status_code == 400
    assert response.get_json()["error"] == "conflicting_cursors"


def test_health_reports_database(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
