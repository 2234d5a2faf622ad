from __future__ import annotations

from woo_client import WooClient
from woo_client.config_types import ClientConfig

from .config import AppConfig, apply_env, apply_profile, normalize_base_url


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None = None,
    base_url_override: str | None = None,
) -> WooClient:
    effective_cfg = apply_env(apply_profile(cfg, profile))
    base_url = normalize_base_url(base_url_override or effective_cfg.base_url, warn=True)
    return WooClient(
        ClientConfig(
            base_url=base_url,
            consumer_key=effective_cfg.auth.consumer_key,
            consumer_secret=effective_cfg.auth.consumer_secret,
            timeout_s=effective_cfg.timeout_s,
            max_retries=effective_cfg.max_retries,
        )
    )
