# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time
from typing import Any

from flask import Flask, g, request

from userservice.shared.logging import (clear_correlation_id, get_correlation_id,
                                        logger, set_correlation_id)


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    sensitive_params = {"password", "token", "secret"}

    sanitized = {}
    for key, value in params.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in sensitive_params):
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value

    return sanitized


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.request_start_time = time.perf_counter()

        if debug_mode:
            query_params = _sanitize_query_params(dict(request.args))
            logger.info(
                f"Request started: {request.method} {request.path} "
                f"from {_get_client_ip()}, query={query_params}, "
                f"body_size={len(request.get_data(cache=True))}"
            )
        else:
            logger.debug(f"Request: {request.method} {request.path} from {_get_client_ip()}")

    @app.after_request
    def _after_request(response):
        start_time = getattr(g, "request_start_time", time.perf_counter())
        duration = (time.perf_counter() - start_time) * 1000.0
        logger.info(
            f"{request.method} {request.path} -> {response.status_code} in {duration:.1f} ms"
        )
        response.headers.setdefault("X-Request-ID", get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path}"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
