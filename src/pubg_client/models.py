"""PUBG データモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

Envelope = dict[str, Any]


class Platform(StrEnum):
    """Platform shards served by the API."""

    STEAM = "steam"
    XBOX = "xbox"
    PSN = "psn"
    STADIA = "stadia"


@dataclass(frozen=True)
class MatchReference:
    """A match referenced from a player's relationships."""

    match_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchReference:
        return cls(match_id=data["id"])


@dataclass
class Player:
    """A player resource."""

    player_id: str
    name: str
    shard_id: str = ""
    title_id: str = ""
    patch_version: str = ""
    created_at: str = ""
    matches: list[MatchReference] = field(default_factory=list)

    @property
    def match_ids(self) -> list[str]:
        return [m.match_id for m in self.matches]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        attributes = data.get("attributes") or {}
        relationships = data.get("relationships") or {}
        match_data = (relationships.get("matches") or {}).get("data") or []
        return cls(
            player_id=data["id"],
            name=attributes.get("name", ""),
            shard_id=attributes.get("shardId", ""),
            title_id=attributes.get("titleId", ""),
            patch_version=attributes.get("patchVersion", ""),
            created_at=attributes.get("createdAt", ""),
            matches=[MatchReference.from_dict(m) for m in match_data],
        )


def players_from_envelope(envelope: Envelope) -> list[Player]:
    """Map the ``player`` resources of an envelope, in order."""
    return [
        Player.from_dict(resource)
        for resource in envelope.get("data") or []
        if resource.get("type", "player") == "player"
    ]
