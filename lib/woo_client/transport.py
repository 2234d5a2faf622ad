from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import RetryError

from .config_types import ClientConfig
from .errors import RequestBuildError, RequestFailedError
from .retry import build_retrying

logger = logging.getLogger(__name__)


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        headers = {
            "User-Agent": cfg.user_agent,
            "Content-Type": "application/json",
        }
        self._client = httpx.Client(
            timeout=cfg.timeout_s,
            headers=headers,
            auth=httpx.BasicAuth(cfg.credential, ""),
            transport=transport,
            follow_redirects=True,
        )
        self._retrying = build_retrying(cfg)

    def close(self) -> None:
        self._client.close()

    def send(
            self,
            method: str,
            url: str,
            *,
            content: bytes | None = None,
            params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one logical request, retrying transient failures.

        Returns the final response with its body already read. Status codes
        that are not retryable are returned as-is, the caller decides what
        counts as an error.
        """
        try:
            request = self._client.build_request(method, url, content=content, params=params)
        except (httpx.InvalidURL, ValueError) as e:
            raise RequestBuildError(f"cannot build {method} {url}: {e}") from e

        retrying = self._retrying.copy()
        try:
            response = retrying(self._client.send, request)
        except RetryError as e:
            last = e.last_attempt
            raise self._giving_up(request, e) from (last.exception() if last.failed else e)
        except httpx.HTTPError as e:
            raise RequestFailedError(f"API request failed: {method} {request.url}: {e}") from e

        logger.debug("%s %s -> %s", method, request.url, response.status_code)
        return response

    @staticmethod
    def _giving_up(request: httpx.Request, exc: RetryError) -> RequestFailedError:
        last = exc.last_attempt
        attempts = last.attempt_number
        prefix = f"API request failed: {request.method} {request.url} giving up after {attempts} attempt(s)"
        if last.failed:
            cause = last.exception()
            return RequestFailedError(f"{prefix}: {cause}", attempts=attempts)
        response = last.result()
        return RequestFailedError(
            f"{prefix} with status code {response.status_code}: {response.text}",
            attempts=attempts,
            status_code=response.status_code,
            body=response.text,
        )
