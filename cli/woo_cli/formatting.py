from __future__ import annotations

from typing import Any


def format_price(value: Any, currency: str | None = None) -> str:
    text = str(value or "").strip()
    if not text:
        return "-"
    try:
        text = f"{float(text):.2f}"
    except ValueError:
        pass
    if currency:
        return f"{text} {currency}"
    return text


def format_stock(record: dict[str, Any]) -> str:
    status = str(record.get("stock_status") or "").strip()
    qty = record.get("stock_quantity")
    if qty is None:
        return status or "-"
    if status:
        return f"{status} ({qty})"
    return str(qty)


def product_row(record: dict[str, Any]) -> tuple[str, ...]:
    return (
        str(record.get("id", "-")),
        str(record.get("name") or "-"),
        str(record.get("sku") or "-"),
        format_price(record.get("price")),
        format_stock(record),
        str(record.get("status") or "-"),
    )
