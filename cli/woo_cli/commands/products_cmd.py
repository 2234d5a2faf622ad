from __future__ import annotations

import json

import typer
from rich.table import Table
from woo_client import WooClientError

from .. import console
from ..config import load_config
from ..errors import fail
from ..formatting import product_row
from ..http import make_client

app = typer.Typer(help="Products in the store catalogue.")


@app.command("list", help="Fetch every product, page by page.")
def list_products(
        per_page: int | None = typer.Option(None, "--per-page", help="Page size (default from config, 100)."),
        max_pages: int | None = typer.Option(
            None,
            "--max-pages",
            help="Fail if the store still returns products after this many pages.",
        ),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print each record as JSON."),
):
    if per_page is not None and per_page < 1:
        console.err("--per-page must be >= 1.")
        raise typer.Exit(code=2)
    if max_pages is not None and max_pages < 1:
        console.err("--max-pages must be >= 1.")
        raise typer.Exit(code=2)

    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        products = client.get_all_products(per_page or cfg.per_page, max_pages=max_pages)
    except WooClientError as e:
        fail("Failed to get products", e)
    finally:
        client.close()

    if json_out:
        for product in products:
            console.print_json(product)
        return

    table = Table(title="Products")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("sku")
    table.add_column("price")
    table.add_column("stock")
    table.add_column("status")
    for product in products:
        table.add_row(*product_row(product))
    console.console.print(table)
    console.info(f"total={len(products)}")


@app.command("get", help="Fetch a product by id.")
def get_product(
        product_id: int = typer.Argument(...),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        body = client.get(f"products/{product_id}")
    except WooClientError as e:
        fail(f"Failed to get product {product_id}", e)
    finally:
        client.close()

    try:
        data = json.loads(body)
    except ValueError as exc:
        console.err(f"Invalid JSON in response: {exc}")
        raise typer.Exit(code=1)

    if json_out or not isinstance(data, dict):
        console.print_json(data)
        return

    for key in sorted(data.keys()):
        console.info(f"{key}: {data.get(key)}")
