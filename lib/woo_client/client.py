from __future__ import annotations

import json
from typing import Any

import httpx

from . import pagination
from .config_types import API_PREFIX, ClientConfig
from .errors import ApiError, AuthError, SerializationError
from .transport import Transport


class WooClient:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> "WooClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def url_for(self, endpoint: str) -> str:
        return f"{self._cfg.base_url}/{API_PREFIX}/{endpoint.lstrip('/')}"

    def request(
            self,
            method: str,
            endpoint: str,
            data: Any | None = None,
            params: dict[str, Any] | None = None,
    ) -> bytes:
        """Issue one API call and return the raw response body.

        Raises ApiError (AuthError for 401/403) when the final status is
        >= 400, RequestFailedError when the transport gives up and
        SerializationError when ``data`` cannot be encoded.
        """
        url = self.url_for(endpoint)
        content = None
        if data is not None:
            try:
                content = json.dumps(data).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise SerializationError(f"cannot encode {method} {endpoint} payload: {e}") from e

        query = {str(k): str(v) for k, v in params.items()} if params else None
        r = self._t.send(method, url, content=content, params=query)

        if r.status_code >= 400:
            if r.status_code in (401, 403):
                raise AuthError(r.status_code, r.text)
            raise ApiError(r.status_code, r.text)
        return r.content

    # --- verbs ---
    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> bytes:
        return self.request("GET", endpoint, None, params)

    def post(self, endpoint: str, data: Any) -> bytes:
        return self.request("POST", endpoint, data, None)

    def put(self, endpoint: str, data: Any) -> bytes:
        return self.request("PUT", endpoint, data, None)

    def delete(self, endpoint: str) -> bytes:
        return self.request("DELETE", endpoint, None, None)

    # --- collections ---
    def get_all_products(self, per_page: int = 100, *, max_pages: int | None = None) -> list[dict[str, Any]]:
        return pagination.get_all_products(self, per_page, max_pages=max_pages)
