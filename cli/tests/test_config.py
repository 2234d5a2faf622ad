from __future__ import annotations

import os

from woo_cli import config


def test_load_config_defaults_when_file_missing() -> None:
    cfg = config.load_config()
    assert cfg.base_url == config.DEFAULT_BASE_URL
    assert cfg.max_retries == 3
    assert cfg.per_page == 100


def test_save_and_load_round_trip_keeps_credentials(tmp_path) -> None:
    cfg = config.default_config()
    cfg.base_url = "https://shop.example.com"
    cfg.auth = config.AuthConfig(consumer_key="ck_1", consumer_secret="cs_1")
    cfg.max_retries = 5

    path = config.save_config(cfg)
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert oct(os.stat(path).st_mode & 0o777) == oct(0o600)
    assert loaded.base_url == "https://shop.example.com"
    assert loaded.auth.consumer_key == "ck_1"
    assert loaded.auth.consumer_secret == "cs_1"
    assert loaded.max_retries == 5


def test_from_toml_ignores_bad_numbers() -> None:
    cfg = config.from_toml({"base_url": "https://shop.example.com", "timeout_s": "fast", "max_retries": -4})
    assert cfg.timeout_s == config.DEFAULT_TIMEOUT_S
    assert cfg.max_retries == 0


def test_apply_profile_overrides_top_level(tmp_path) -> None:
    tmp_path.joinpath("config.toml").write_text(
        "\n".join(
            [
                'base_url = "https://shop.example.com"',
                "",
                "[auth]",
                'consumer_key = "ck_default"',
                'consumer_secret = "cs_default"',
                "",
                "[profiles.staging]",
                'base_url = "https://staging.example.com"',
                'consumer_key = "ck_staging"',
                "max_retries = 1",
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = config.apply_profile(config.load_config(), "staging")

    assert cfg.base_url == "https://staging.example.com"
    assert cfg.auth.consumer_key == "ck_staging"
    assert cfg.auth.consumer_secret == "cs_default"
    assert cfg.max_retries == 1


def test_apply_env_overrides_file(monkeypatch) -> None:
    monkeypatch.setenv(config.ENV_BASE_URL, "env-shop.example.com/")
    monkeypatch.setenv(config.ENV_CONSUMER_KEY, "ck_env")
    cfg = config.apply_env(config.default_config())
    assert cfg.base_url == "https://env-shop.example.com"
    assert cfg.auth.consumer_key == "ck_env"
    assert cfg.auth.consumer_secret == ""


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("example.com") == "https://example.com"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_url("localhost:8080") == "http://localhost:8080"


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert config.normalize_base_url("https://example.com/") == "https://example.com"
