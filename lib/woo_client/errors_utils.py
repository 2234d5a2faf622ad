from __future__ import annotations

import json


def parse_api_error_body(body: str | None) -> dict | None:
    """Decode a WooCommerce error document ({"code", "message", "data"})."""
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict) or "message" not in data:
        return None
    return data


def api_error_message(body: str | None) -> str | None:
    data = parse_api_error_body(body)
    if data is None:
        return None
    code = data.get("code")
    message = str(data.get("message") or "").strip()
    if code:
        return f"{message} ({code})"
    return message or None
