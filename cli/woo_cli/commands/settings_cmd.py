from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/woo/config.toml).")

_KEYS = ("base_url", "consumer_key", "timeout_s", "max_retries", "per_page")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        base_url: str = typer.Option(
            ...,
            "--base-url",
            prompt="Store base URL",
            help="Store base URL like https://shop.example.com",
        ),
        consumer_key: str = typer.Option(..., "--consumer-key", prompt="Consumer key", help="REST API consumer key."),
        consumer_secret: str = typer.Option(
            ...,
            "--consumer-secret",
            prompt="Consumer secret",
            hide_input=True,
            help="REST API consumer secret.",
        ),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.base_url = normalize_base_url(base_url, warn=True)
    if not cfg.base_url:
        console.err("Base URL cannot be empty.")
        raise typer.Exit(code=2)
    cfg.auth.consumer_key = consumer_key.strip()
    cfg.auth.consumer_secret = consumer_secret.strip()
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    secret_state = "(set)" if (cfg.auth.consumer_secret or "").strip() else "(empty)"
    console.console.print(
        f"base_url={cfg.base_url} consumer_key={cfg.auth.consumer_key or '(empty)'} "
        f"consumer_secret={secret_state} timeout_s={cfg.timeout_s} "
        f"max_retries={cfg.max_retries} per_page={cfg.per_page}",
        markup=False,
    )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help=f"Setting key ({', '.join(_KEYS)})."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "consumer_key":
        console.console.print(cfg.auth.consumer_key, markup=False)
        return
    if k in _KEYS:
        console.console.print(str(getattr(cfg, k)), markup=False)
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set store base URL."),
        consumer_key: str | None = typer.Option(None, "--consumer-key", help="Set consumer key."),
        consumer_secret: str | None = typer.Option(None, "--consumer-secret", help="Set consumer secret."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Per-attempt timeout in seconds."),
        max_retries: int | None = typer.Option(None, "--max-retries", help="Retries after the first attempt."),
        per_page: int | None = typer.Option(None, "--per-page", help="Default page size."),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if consumer_key is not None:
        cfg.auth.consumer_key = consumer_key.strip()
    if consumer_secret is not None:
        cfg.auth.consumer_secret = consumer_secret.strip()
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("--timeout must be > 0.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s
    if max_retries is not None:
        if max_retries < 0:
            console.err("--max-retries must be >= 0.")
            raise typer.Exit(code=2)
        cfg.max_retries = max_retries
    if per_page is not None:
        if per_page < 1:
            console.err("--per-page must be >= 1.")
            raise typer.Exit(code=2)
        cfg.per_page = per_page
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
