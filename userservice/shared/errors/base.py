# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
        )


class InvalidCursorError(AppError):
    def __init__(self, reason: str) -> None:
        super().__init__(
            code="invalid_cursor",
            status=HTTPStatus.BAD_REQUEST,
            context={"reason": reason},
        )


class InvalidUserIdError(ValidationError):
    def __init__(self, user_id: str) -> None:
        super().__init__("invalid_user_id", context={"user_id": user_id})


class PersistenceError(InfrastructureError):
    """Backend connectivity, query or constraint failure.

    ``detail`` carries the driver message for the logs only; it never reaches
    the response body.
    """

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(
            "persistence_error",
            context={"operation": operation},
        )
        self.operation = operation
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.operation}: {self.detail}"


class NotificationError(InfrastructureError):
    def __init__(self, detail: str) -> None:
        super().__init__("notification_error")
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class DeadlineExceededError(InfrastructureError):
    def __init__(self, timeout: float) -> None:
        super().__init__(
            "deadline_exceeded",
            status=HTTPStatus.GATEWAY_TIMEOUT,
            context={"timeout_seconds": timeout},
        )
