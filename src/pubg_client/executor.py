"""レート制限・リトライ付きリクエスト実行"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

from .clock import Clock, SystemClock
from .config import PubgClientConfig
from .exceptions import ApiError, ParseError, PubgClientError, RequestError
from .models import Envelope
from .rate_limiter import SlidingWindowRateLimiter

logger = structlog.stdlib.get_logger(__name__)

ACCEPT_HEADER = "application/vnd.api+json"


class AttemptKind(Enum):
    """Outcome of a single attempt."""

    SUCCESS = "success"
    TRANSIENT = "transient"
    FATAL = "fatal"


@dataclass
class AttemptResult:
    kind: AttemptKind
    envelope: Envelope | None = None
    status_code: int | None = None
    error: Exception | None = None


class RequestExecutor:
    """Performs one logical request: admission, HTTP call, retries, decoding."""

    def __init__(
        self,
        config: PubgClientConfig,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or SystemClock()
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            max_requests=config.rate_limit,
            window=config.rate_window_seconds,
            clock=self._clock,
        )
        self._headers = {
            "Authorization": f"Bearer {config.api_key}",
            "Accept": ACCEPT_HEADER,
        }

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        return self._rate_limiter

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def backoff(self, attempt: int) -> float:
        """Delay after a failed attempt (1-based): 2s, 4s, 8s, ..."""
        return self._config.backoff_base**attempt

    async def execute(
        self,
        endpoint: str,
        method: str = "GET",
        params: dict[str, str] | None = None,
    ) -> Envelope:
        """Issue ``method`` against ``endpoint`` and return the decoded envelope.

        Raises:
            RequestError: every attempt failed with a transport error or a
                non-success status.
            ParseError: a success response body could not be decoded.
            ApiError: the response carried an ``errors`` array.
        """
        url = f"{self._config.shard_url}/{endpoint.lstrip('/')}"
        max_retries = self._config.max_retries
        last_status: int | None = None
        last_error: Exception | None = None

        async with self._make_client() as client:
            for attempt in range(1, max_retries + 1):
                # The slot taken by admit() stays consumed whatever the outcome.
                await self._rate_limiter.admit()
                result = await self._attempt(client, method, url, params)

                if result.kind is AttemptKind.SUCCESS and result.envelope is not None:
                    return result.envelope
                if result.kind is AttemptKind.FATAL and result.error is not None:
                    logger.warning(
                        "request.rejected",
                        endpoint=endpoint,
                        attempt=attempt,
                        error=str(result.error),
                    )
                    raise result.error

                last_status = result.status_code
                last_error = result.error

                if attempt < max_retries:
                    delay = self.backoff(attempt)
                    logger.info(
                        "request.retry",
                        endpoint=endpoint,
                        attempt=attempt,
                        status_code=last_status,
                        delay_seconds=delay,
                    )
                    await self._clock.sleep(delay)

        logger.error(
            "request.failed",
            endpoint=endpoint,
            attempts=max_retries,
            status_code=last_status,
        )
        if last_status is not None:
            message = f"API request failed with status: {last_status}"
        else:
            message = f"API request failed: {last_error}"
        raise RequestError(
            message,
            status_code=last_status,
            attempts=max_retries,
            cause=last_error,
        )

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: dict[str, str] | None,
    ) -> AttemptResult:
        try:
            resp = await client.request(method, url, params=params)
        except httpx.HTTPError as e:
            return AttemptResult(AttemptKind.TRANSIENT, error=e)

        if resp.status_code == 429:
            return AttemptResult(AttemptKind.TRANSIENT, status_code=429)
        if not resp.is_success:
            return AttemptResult(
                AttemptKind.TRANSIENT,
                status_code=resp.status_code,
                error=RequestError(
                    f"API request failed with status: {resp.status_code}",
                    status_code=resp.status_code,
                ),
            )

        try:
            envelope = decode_envelope(resp)
        except PubgClientError as e:
            return AttemptResult(AttemptKind.FATAL, status_code=resp.status_code, error=e)
        return AttemptResult(AttemptKind.SUCCESS, envelope=envelope, status_code=resp.status_code)


def decode_envelope(resp: httpx.Response) -> Envelope:
    """Decode a response body into an envelope.

    Raises ``ParseError`` for undecodable bodies and ``ApiError`` when the
    envelope carries a non-empty ``errors`` array.
    """
    try:
        data: Any = resp.json()
    except ValueError as e:
        raise ParseError(f"Failed to parse response: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise ParseError(
            f"Failed to parse response: expected an object, got {type(data).__name__}"
        )

    errors = data.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        detail = first.get("detail") if isinstance(first, dict) else None
        raise ApiError(
            str(detail) if detail is not None else str(first), status_code=resp.status_code
        )
    if "data" in data and not isinstance(data["data"], list):
        raise ParseError(
            "Failed to parse response: expected `data` to be a list, "
            f"got {type(data['data']).__name__}"
        )
    return data
