from __future__ import annotations

import os
import sys
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from . import console

APP_NAME = "woo"
CONFIG_FILENAME = "config.toml"
DEFAULT_BASE_URL = "https://example.com"
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_PER_PAGE = 100

ENV_BASE_URL = "WOO_BASE_URL"
ENV_CONSUMER_KEY = "WOO_CONSUMER_KEY"
ENV_CONSUMER_SECRET = "WOO_CONSUMER_SECRET"

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AuthConfig:
    consumer_key: str = ""
    consumer_secret: str = ""


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig = field(default_factory=AuthConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_retries: int = DEFAULT_MAX_RETRIES
    per_page: int = DEFAULT_PER_PAGE


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url=DEFAULT_BASE_URL,
        auth=AuthConfig(),
        timeout_s=DEFAULT_TIMEOUT_S,
        max_retries=DEFAULT_MAX_RETRIES,
        per_page=DEFAULT_PER_PAGE,
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def _is_interactive() -> bool:
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "timeout_s": float(cfg.timeout_s),
        "max_retries": int(cfg.max_retries),
        "per_page": int(cfg.per_page),
        "auth": {
            "consumer_key": cfg.auth.consumer_key,
            "consumer_secret": cfg.auth.consumer_secret,
        },
    }


def _merge_section(cfg: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Return a copy of ``cfg`` with the keys present in ``data`` applied."""
    auth_raw = data.get("auth") if isinstance(data.get("auth"), dict) else {}
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    consumer_key = str(data.get("consumer_key") or auth_raw.get("consumer_key") or cfg.auth.consumer_key)
    consumer_secret = str(
        data.get("consumer_secret") or auth_raw.get("consumer_secret") or cfg.auth.consumer_secret
    )
    return AppConfig(
        base_url=base_url or cfg.base_url,
        auth=AuthConfig(consumer_key=consumer_key, consumer_secret=consumer_secret),
        timeout_s=_as_float(data.get("timeout_s", cfg.timeout_s), cfg.timeout_s),
        max_retries=max(0, _as_int(data.get("max_retries", cfg.max_retries), cfg.max_retries)),
        per_page=max(1, _as_int(data.get("per_page", cfg.per_page), cfg.per_page)),
    )


def from_toml(data: dict[str, Any]) -> AppConfig:
    return _merge_section(default_config(), data)


def _read_toml() -> dict[str, Any] | None:
    try:
        with open(config_path(), "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None


def load_config() -> AppConfig:
    data = _read_toml()
    if data is None:
        return default_config()
    return from_toml(data)


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    data = _read_toml()
    if data is None:
        return cfg
    profiles_raw = data.get("profiles") or {}
    if not isinstance(profiles_raw, dict):
        return cfg
    prof = profiles_raw.get(profile)
    if not isinstance(prof, dict):
        console.warn(f"Profile '{profile}' not found in {config_path()}, using defaults.")
        return cfg
    return _merge_section(cfg, prof)


def apply_env(cfg: AppConfig) -> AppConfig:
    base_url = normalize_base_url(os.getenv(ENV_BASE_URL, ""))
    consumer_key = os.getenv(ENV_CONSUMER_KEY, "").strip()
    consumer_secret = os.getenv(ENV_CONSUMER_SECRET, "").strip()
    return AppConfig(
        base_url=base_url or cfg.base_url,
        auth=AuthConfig(
            consumer_key=consumer_key or cfg.auth.consumer_key,
            consumer_secret=consumer_secret or cfg.auth.consumer_secret,
        ),
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
        per_page=cfg.per_page,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    data = to_toml(cfg)
    # profiles are kept as found on disk
    existing = _read_toml() or {}
    if isinstance(existing.get("profiles"), dict):
        data["profiles"] = existing["profiles"]
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(data).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
