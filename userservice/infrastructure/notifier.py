# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Publish text messages to a Pub/Sub topic over its REST API."""

from __future__ import annotations

import base64

import httpx

from userservice.domain.users.repositories import Notifier
from userservice.shared.config import PubSubConfig
from userservice.shared.errors.base import NotificationError
from userservice.shared.logging import logger


def publish_url(endpoint: str, topic: str) -> str:
    """Accept a bare ``projects/<p>/topics/<t>`` path or a full topic URL."""

    topic = topic.strip()
    if topic.startswith(("http://", "https://")):
        base = topic
    else:
        base = f"{endpoint.rstrip('/')}/{topic.lstrip('/')}"
    return base if base.endswith(":publish") else f"{base}:publish"


class PubSubNotifier(Notifier):
    def __init__(
        self,
        *,
        topic: str,
        endpoint: str = "https://pubsub.googleapis.com/v1",
        auth_token: str | None = None,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._url = publish_url(endpoint, topic)
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}
        self._client = httpx.Client(timeout=timeout, headers=headers, transport=transport)

    @classmethod
    def from_config(cls, config: PubSubConfig) -> PubSubNotifier:
        assert config.topic is not None
        return cls(
            topic=config.topic,
            endpoint=config.endpoint,
            auth_token=config.auth_token,
            timeout=config.timeout,
        )

    def notify(self, message: str) -> None:
        payload = {
            "messages": [
                {"data": base64.b64encode(message.encode("utf-8")).decode("ascii")}
            ]
        }
        try:
            response = self._client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"publish failed: {type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise NotificationError(
                f"publish rejected: code={response.status_code} body={response.text[:200]}"
            )
        logger.debug(f"pubsub: published to {self._url} code={response.status_code}")

    def close(self) -> None:
        self._client.close()


__all__ = ["PubSubNotifier", "publish_url"]
