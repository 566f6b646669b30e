"""PUBG API client library."""

from .cache import ResponseCache
from .client import HttpPubgClient, PubgClient, cache_key, chunked, merge_envelopes
from .clock import Clock, ManualClock, SystemClock
from .config import PubgClientConfig
from .exceptions import (
    ApiError,
    ConfigError,
    ConfigErrorCodes,
    ErrorCodes,
    ParseError,
    PubgClientError,
    RequestError,
    ValidationError,
)
from .executor import AttemptKind, AttemptResult, RequestExecutor, decode_envelope
from .logger import new_logger
from .models import Envelope, MatchReference, Platform, Player, players_from_envelope
from .rate_limiter import SlidingWindowRateLimiter
from .settings import ClientSettings, load

__all__ = [
    "HttpPubgClient",
    "PubgClient",
    "PubgClientConfig",
    "ClientSettings",
    "load",
    "RequestExecutor",
    "AttemptKind",
    "AttemptResult",
    "decode_envelope",
    "SlidingWindowRateLimiter",
    "ResponseCache",
    "Clock",
    "SystemClock",
    "ManualClock",
    "Envelope",
    "Platform",
    "Player",
    "MatchReference",
    "players_from_envelope",
    "cache_key",
    "chunked",
    "merge_envelopes",
    "new_logger",
    "PubgClientError",
    "ErrorCodes",
    "ConfigErrorCodes",
    "ValidationError",
    "RequestError",
    "ParseError",
    "ApiError",
    "ConfigError",
]
