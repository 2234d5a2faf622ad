from __future__ import annotations

import base64
import json

import httpx
import pytest

from woo_client import ApiError, AuthError, ClientConfig, RequestBuildError, SerializationError, WooClient
from woo_client.config_types import DEFAULT_USER_AGENT


def _make_client(handler, *, base_url: str = "https://shop.example.com", max_retries: int = 0) -> WooClient:
    cfg = ClientConfig(
        base_url=base_url,
        consumer_key="ck_test",
        consumer_secret="cs_test",
        max_retries=max_retries,
        retry_wait_min_s=0,
        retry_wait_max_s=0,
    )
    return WooClient(cfg, transport=httpx.MockTransport(handler))


def _recorder(status: int = 200, body: bytes = b"[]"):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, content=body)

    return seen, handler


def _path_of(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def test_get_builds_prefixed_url_with_query_params() -> None:
    seen, handler = _recorder()
    client = _make_client(handler)

    client.get("products", {"per_page": "10", "page": "2", "status": "publish"})

    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert _path_of(seen[0]) == "https://shop.example.com/wp-json/wc/v3/products"
    assert dict(seen[0].url.params) == {"per_page": "10", "page": "2", "status": "publish"}


def test_get_without_params_sends_no_query() -> None:
    seen, handler = _recorder()
    client = _make_client(handler)

    client.get("orders/42")

    assert str(seen[0].url) == "https://shop.example.com/wp-json/wc/v3/orders/42"


def test_trailing_slash_in_base_url_is_ignored() -> None:
    seen, handler = _recorder()
    client = _make_client(handler, base_url="https://shop.example.com/")

    client.get("products")

    assert _path_of(seen[0]) == "https://shop.example.com/wp-json/wc/v3/products"


def test_basic_auth_carries_combined_credential_with_empty_password() -> None:
    seen, handler = _recorder()
    client = _make_client(handler)

    client.get("products")

    scheme, _, encoded = seen[0].headers["Authorization"].partition(" ")
    assert scheme == "Basic"
    decoded = base64.b64decode(encoded).decode("utf-8")
    username, _, password = decoded.rpartition(":")
    assert username == "ck_test:cs_test"
    assert password == ""


def test_fixed_headers_are_sent() -> None:
    seen, handler = _recorder()
    client = _make_client(handler)

    client.post("products", {"name": "Mug"})

    assert seen[0].headers["Content-Type"] == "application/json"
    assert seen[0].headers["User-Agent"] == DEFAULT_USER_AGENT


@pytest.mark.parametrize(
    ("call", "method", "sent_body"),
    [
        (lambda c: c.get("products", {"page": "1"}), "GET", b""),
        (lambda c: c.post("products", {"name": "Mug"}), "POST", json.dumps({"name": "Mug"}).encode()),
        (lambda c: c.put("products/7", {"regular_price": "9.99"}), "PUT", json.dumps({"regular_price": "9.99"}).encode()),
        (lambda c: c.delete("products/7"), "DELETE", b""),
    ],
)
def test_verbs_return_body_verbatim(call, method, sent_body) -> None:
    body = b'{"id": 7, "name": "Mug"}'
    seen, handler = _recorder(200, body)
    client = _make_client(handler)

    assert call(client) == body
    assert seen[0].method == method
    assert seen[0].content == sent_body


def test_not_found_error_carries_status_and_raw_body() -> None:
    _, handler = _recorder(404, b'{"error":"not_found"}')
    client = _make_client(handler)

    with pytest.raises(ApiError) as exc_info:
        client.get("products/999")

    message = str(exc_info.value)
    assert "404" in message
    assert '{"error":"not_found"}' in message
    assert exc_info.value.status_code == 404
    assert exc_info.value.body == '{"error":"not_found"}'


def test_unauthorized_raises_auth_error() -> None:
    _, handler = _recorder(401, b'{"code":"woocommerce_rest_cannot_view"}')
    client = _make_client(handler)

    with pytest.raises(AuthError) as exc_info:
        client.get("orders")

    assert exc_info.value.status_code == 401


def test_client_errors_are_not_retried() -> None:
    seen, handler = _recorder(400, b'{"code":"rest_invalid_param"}')
    client = _make_client(handler, max_retries=3)

    with pytest.raises(ApiError):
        client.post("products", {"name": ""})

    assert len(seen) == 1


def test_unserializable_payload_fails_before_sending() -> None:
    seen, handler = _recorder()
    client = _make_client(handler, max_retries=3)

    with pytest.raises(SerializationError):
        client.post("products", {"created": object()})

    assert seen == []


def test_malformed_base_url_fails_before_sending() -> None:
    seen, handler = _recorder()
    client = _make_client(handler, base_url="https://shop.example.com:port", max_retries=3)

    with pytest.raises(RequestBuildError):
        client.get("products", {"page": "1"})

    assert seen == []


def test_client_is_a_context_manager() -> None:
    _, handler = _recorder()
    with _make_client(handler) as client:
        assert client.get("products") == b"[]"


def test_negative_max_retries_is_rejected() -> None:
    with pytest.raises(ValueError):
        ClientConfig(base_url="https://shop.example.com", consumer_key="k", consumer_secret="s", max_retries=-1)


def test_config_is_immutable() -> None:
    cfg = ClientConfig(base_url="https://shop.example.com", consumer_key="k", consumer_secret="s")
    with pytest.raises(AttributeError):
        cfg.base_url = "https://other.example.com"
    assert cfg.credential == "k:s"
