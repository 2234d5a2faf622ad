from __future__ import annotations

import json
import logging
from typing import Any, Iterator

from .errors import DecodeError, PaginationLimitError

logger = logging.getLogger(__name__)


def decode_page(body: bytes, *, endpoint: str, page: int) -> list[dict[str, Any]]:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"{endpoint} page {page}: invalid JSON: {e}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"{endpoint} page {page}: expected a JSON array, got {type(data).__name__}")
    for item in data:
        if not isinstance(item, dict):
            raise DecodeError(f"{endpoint} page {page}: expected objects, got {type(item).__name__}")
    return data


def iter_pages(
        client,
        endpoint: str,
        *,
        per_page: int,
        params: dict[str, Any] | None = None,
        max_pages: int | None = None,
) -> Iterator[list[dict[str, Any]]]:
    """Yield non-empty pages of ``endpoint`` until the server returns an empty one.

    Without ``max_pages`` there is no bound: a server that never returns an
    empty page is paged forever. With it, PaginationLimitError is raised once
    ``max_pages`` pages have been read and another one is still non-empty.
    """
    page = 1
    while True:
        query = {**(params or {}), "per_page": str(per_page), "page": str(page)}
        items = decode_page(client.get(endpoint, query), endpoint=endpoint, page=page)
        if not items:
            logger.debug("%s: exhausted after %d page(s)", endpoint, page - 1)
            return
        if max_pages is not None and page > max_pages:
            raise PaginationLimitError(endpoint, max_pages)
        yield items
        page += 1


def get_all(
        client,
        endpoint: str,
        *,
        per_page: int,
        params: dict[str, Any] | None = None,
        max_pages: int | None = None,
) -> list[dict[str, Any]]:
    records: list[dict[str, Any]] = []
    for items in iter_pages(client, endpoint, per_page=per_page, params=params, max_pages=max_pages):
        records.extend(items)
    return records


def get_all_products(client, per_page: int, *, max_pages: int | None = None) -> list[dict[str, Any]]:
    return get_all(client, "products", per_page=per_page, max_pages=max_pages)
