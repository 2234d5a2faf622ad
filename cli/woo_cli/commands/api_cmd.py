from __future__ import annotations

import json
from typing import Any

import typer
from woo_client import WooClientError

from .. import console
from ..config import load_config
from ..errors import fail
from ..http import make_client

app = typer.Typer(help="Raw REST calls against /wp-json/wc/v3/<endpoint>.")


def _parse_params(raw: list[str] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in raw or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            console.err(f"Invalid --param '{item}', expected key=value.")
            raise typer.Exit(code=2)
        params[key.strip()] = value
    return params


def _parse_data(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        console.err(f"--data is not valid JSON: {exc}")
        raise typer.Exit(code=2)


def _show(body: bytes, raw: bool) -> None:
    text = body.decode("utf-8", errors="replace")
    if not raw:
        try:
            console.print_json(json.loads(text))
            return
        except ValueError:
            pass
    console.console.print(text, markup=False, highlight=False, soft_wrap=True)


def _call(method: str, endpoint: str, *, data: Any = None, params: dict[str, str] | None = None,
          profile: str | None, base_url: str | None, raw: bool) -> None:
    cfg = load_config()
    client = make_client(cfg, profile=profile, base_url_override=base_url)
    try:
        if method == "GET":
            body = client.get(endpoint, params or None)
        elif method == "POST":
            body = client.post(endpoint, data)
        elif method == "PUT":
            body = client.put(endpoint, data)
        else:
            body = client.delete(endpoint)
    except WooClientError as e:
        fail(f"{method} {endpoint} failed", e)
    finally:
        client.close()
    _show(body, raw)


@app.command("get")
def api_get(
        endpoint: str = typer.Argument(..., help="Endpoint like products or orders/42."),
        param: list[str] | None = typer.Option(None, "--param", "-p", help="Query parameter key=value. Repeatable."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        raw: bool = typer.Option(False, "--raw", help="Print the body as received."),
):
    _call("GET", endpoint, params=_parse_params(param), profile=profile, base_url=base_url, raw=raw)


@app.command("post")
def api_post(
        endpoint: str = typer.Argument(...),
        data: str = typer.Option(..., "--data", "-d", help="JSON request body."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        raw: bool = typer.Option(False, "--raw", help="Print the body as received."),
):
    _call("POST", endpoint, data=_parse_data(data), profile=profile, base_url=base_url, raw=raw)


@app.command("put")
def api_put(
        endpoint: str = typer.Argument(...),
        data: str = typer.Option(..., "--data", "-d", help="JSON request body."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        raw: bool = typer.Option(False, "--raw", help="Print the body as received."),
):
    _call("PUT", endpoint, data=_parse_data(data), profile=profile, base_url=base_url, raw=raw)


@app.command("delete")
def api_delete(
        endpoint: str = typer.Argument(...),
        yes: bool = typer.Option(False, "--yes", help="Skip confirmation prompt."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        raw: bool = typer.Option(False, "--raw", help="Print the body as received."),
):
    if not yes:
        confirmed = typer.confirm(f"DELETE {endpoint}?", default=False)
        if not confirmed:
            console.info("Aborted.")
            raise typer.Exit(code=0)
    _call("DELETE", endpoint, profile=profile, base_url=base_url, raw=raw)
