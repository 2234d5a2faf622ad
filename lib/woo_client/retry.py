from __future__ import annotations

import logging

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from .config_types import ClientConfig

logger = logging.getLogger("woo_client.transport")

# 501 Not Implemented is a permanent answer; every other 5xx may clear up.
NON_RETRYABLE_5XX = frozenset({501})
RETRY_AFTER_STATUSES = frozenset({429, 503})


def is_retryable_exception(exc: BaseException) -> bool:
    if isinstance(exc, httpx.UnsupportedProtocol):
        return False
    return isinstance(exc, httpx.TransportError)


def is_retryable_response(response: httpx.Response) -> bool:
    status = response.status_code
    if status == 429:
        return True
    return status >= 500 and status not in NON_RETRYABLE_5XX


def retry_after_seconds(response: httpx.Response) -> float | None:
    if response.status_code not in RETRY_AFTER_STATUSES:
        return None
    raw = (response.headers.get("Retry-After") or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return max(0.0, value)


class wait_retry_after(wait_base):
    """Exponential backoff that honors a numeric Retry-After header."""

    def __init__(self, min_s: float, max_s: float):
        self.min_s = min_s
        self.max_s = max_s
        self._backoff = wait_exponential(multiplier=min_s, min=min_s, max=max_s)

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if outcome is not None and not outcome.failed:
            delay = retry_after_seconds(outcome.result())
            if delay is not None:
                return min(delay, self.max_s)
        return self._backoff(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    if outcome is None:
        return
    request = retry_state.args[0] if retry_state.args else None
    target = f"{request.method} {request.url}" if isinstance(request, httpx.Request) else "request"
    if outcome.failed:
        reason = repr(outcome.exception())
    else:
        reason = f"status {outcome.result().status_code}"
    sleep = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        "%s failed (%s), retrying in %.2fs [attempt %d]",
        target,
        reason,
        sleep,
        retry_state.attempt_number,
    )


def build_retrying(cfg: ClientConfig) -> Retrying:
    return Retrying(
        stop=stop_after_attempt(cfg.max_retries + 1),
        wait=wait_retry_after(cfg.retry_wait_min_s, cfg.retry_wait_max_s),
        retry=retry_if_exception(is_retryable_exception) | retry_if_result(is_retryable_response),
        before_sleep=_log_retry,
        reraise=False,
    )
