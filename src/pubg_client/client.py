"""PUBG client implementations."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

import structlog

from .cache import ResponseCache
from .clock import Clock, SystemClock
from .config import PubgClientConfig
from .exceptions import ValidationError
from .executor import RequestExecutor
from .models import Envelope, Player, players_from_envelope

logger = structlog.stdlib.get_logger(__name__)

PLAYERS_ENDPOINT = "/players"
PLAYER_NAMES_FILTER = "filter[playerNames]"


class PubgClient(ABC):
    """Abstract PUBG client."""

    @abstractmethod
    async def get_player_info(self, player_names: Sequence[str] | str) -> Envelope: ...

    async def get_players(self, player_names: Sequence[str] | str) -> list[Player]:
        """Look up players and map the result to ``Player`` models."""
        return players_from_envelope(await self.get_player_info(player_names))


def validate_player_names(player_names: Sequence[str] | str | None) -> list[str]:
    """Normalise the caller's input to a non-empty list of names."""
    if isinstance(player_names, str):
        player_names = [player_names]
    if player_names is None or not isinstance(player_names, Sequence) or not player_names:
        raise ValidationError("player_names", "must be a non-empty sequence of strings")
    names = list(player_names)
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValidationError("player_names", f"invalid player name: {name!r}")
    return names


def cache_key(player_names: Sequence[str]) -> str:
    """Order-sensitive cache key for a list of names."""
    return "players_" + ",".join(player_names)


def chunked(items: Sequence[str], size: int) -> Iterator[list[str]]:
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def merge_envelopes(envelopes: Sequence[Envelope]) -> Envelope:
    """The first envelope is kept whole; later ``data`` sequences are appended."""
    merged = copy.deepcopy(envelopes[0])
    data = merged.setdefault("data", [])
    for envelope in envelopes[1:]:
        data.extend(envelope.get("data") or [])
    return merged


class HttpPubgClient(PubgClient):
    """httpx を使った PUBG API クライアント。"""

    def __init__(
        self,
        config: PubgClientConfig,
        clock: Clock | None = None,
        executor: RequestExecutor | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or SystemClock()
        self._executor = executor or RequestExecutor(config, clock=self._clock)
        self._cache = cache or ResponseCache(ttl=config.cache_ttl_seconds, clock=self._clock)

    @property
    def config(self) -> PubgClientConfig:
        return self._config

    async def get_player_info(self, player_names: Sequence[str] | str) -> Envelope:
        """Fetch player resources for ``player_names``.

        Names are requested in chunks of ``batch_size``, strictly in order,
        and the merged envelope is cached. A failure in any chunk aborts the
        whole call and nothing is cached.
        """
        names = validate_player_names(player_names)
        key = cache_key(names)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("player_info.cache_hit", players=len(names))
            return cached
        logger.debug("player_info.cache_miss", players=len(names))

        envelopes: list[Envelope] = []
        for chunk in chunked(names, self._config.batch_size):
            envelopes.append(
                await self._executor.execute(
                    PLAYERS_ENDPOINT,
                    params={PLAYER_NAMES_FILTER: ",".join(chunk)},
                )
            )

        merged = merge_envelopes(envelopes)
        resources = len(merged["data"])
        await self._cache.set(key, merged)
        logger.info(
            "player_info.fetched",
            players=len(names),
            chunks=len(envelopes),
            resources=resources,
        )
        return merged
