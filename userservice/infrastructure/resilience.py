# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request deadlines."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextvars import copy_context
from typing import Any, TypeVar

from userservice.shared.errors.base import DeadlineExceededError
from userservice.shared.logging import logger

T = TypeVar("T")

_EXECUTOR = ThreadPoolExecutor(max_workers=32, thread_name_prefix="deadline")


def run_with_deadline(  # noqa: UP047
    func: Callable[..., T],
    *args: Any,
    timeout: float,
    **kwargs: Any,
) -> T:
    """Run ``func`` and give up waiting after ``timeout`` seconds.

    The worker is abandoned, not killed; the database side is bounded by the
    statement timeout configured on the engine. No retry is attempted.
    """

    ctx = copy_context()
    future = _EXECUTOR.submit(ctx.run, func, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as exc:
        future.cancel()
        logger.warning(f"deadline: {getattr(func, '__qualname__', func)} exceeded {timeout}s")
        raise DeadlineExceededError(timeout) from exc


__all__ = ["run_with_deadline"]
