"""設定ファイル読み込み"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_BASE_URL, PubgClientConfig
from .exceptions import ConfigError, ConfigErrorCodes

ENV_API_KEY = "PUBG_API_KEY"
ENV_PLATFORM = "PUBG_PLATFORM"


class PubgSection(BaseModel):
    """API connection settings."""

    api_key: str = Field(min_length=1)
    platform: str = "steam"
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=1)
    backoff_base: float = Field(default=2.0, ge=1.0)
    cache_ttl_seconds: float = Field(default=300.0, ge=0)
    rate_limit: int = Field(default=10, ge=1)
    rate_window_seconds: float = Field(default=1.0, gt=0)
    batch_size: int = Field(default=10, ge=1, le=10)


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ClientSettings(BaseModel):
    """Top-level settings file."""

    pubg: PubgSection
    log: LogSection = Field(default_factory=LogSection)

    def to_config(self) -> PubgClientConfig:
        return PubgClientConfig(**self.pubg.model_dump())


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``. Lists are replaced, not merged."""
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def _env_overrides() -> dict[str, Any]:
    pubg: dict[str, Any] = {}
    if os.environ.get(ENV_API_KEY):
        pubg["api_key"] = os.environ[ENV_API_KEY]
    if os.environ.get(ENV_PLATFORM):
        pubg["platform"] = os.environ[ENV_PLATFORM]
    return {"pubg": pubg} if pubg else {}


def load(base_path: Path, env_path: Path | None = None) -> ClientSettings:
    """Load settings from YAML and the environment.

    Precedence, lowest first: ``base_path``, ``env_path`` (when it exists),
    then the ``PUBG_API_KEY`` / ``PUBG_PLATFORM`` environment variables.
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    data = deep_merge(data, _env_overrides())
    try:
        return ClientSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
