from __future__ import annotations
from dataclasses import dataclass

API_PREFIX = "wp-json/wc/v3"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    consumer_key: str
    consumer_secret: str
    timeout_s: float = 10.0
    max_retries: int = 3
    retry_wait_min_s: float = 1.0
    retry_wait_max_s: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @property
    def credential(self) -> str:
        return f"{self.consumer_key}:{self.consumer_secret}"
