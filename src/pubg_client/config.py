"""PUBG client configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ValidationError

DEFAULT_BASE_URL = "https://api.pubg.com"


@dataclass
class PubgClientConfig:
    """Configuration for the PUBG client."""

    api_key: str
    platform: str = "steam"
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    max_retries: int = 3
    backoff_base: float = 2.0
    cache_ttl_seconds: float = 300.0
    rate_limit: int = 10
    rate_window_seconds: float = 1.0
    batch_size: int = 10

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key:
            raise ValidationError("api_key", "api_key is required")
        if self.max_retries < 1:
            raise ValidationError("max_retries", "must be >= 1")
        if self.batch_size < 1:
            raise ValidationError("batch_size", "must be >= 1")

    @property
    def shard_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/shards/{self.platform}"
