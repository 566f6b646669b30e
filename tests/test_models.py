"""PUBG データモデルのユニットテスト"""

from pubg_client import MatchReference, Platform, Player, players_from_envelope

PLAYER_RESOURCE = {
    "type": "player",
    "id": "account.c0e530e9b7244b358def282782f893af",
    "attributes": {
        "name": "shroud",
        "shardId": "steam",
        "titleId": "bluehole-pubg",
        "patchVersion": "",
        "createdAt": "2024-01-01T00:00:00Z",
    },
    "relationships": {
        "matches": {
            "data": [
                {"type": "match", "id": "m-1"},
                {"type": "match", "id": "m-2"},
            ]
        }
    },
}


def test_player_from_dict() -> None:
    player = Player.from_dict(PLAYER_RESOURCE)
    assert player.player_id == "account.c0e530e9b7244b358def282782f893af"
    assert player.name == "shroud"
    assert player.shard_id == "steam"
    assert player.title_id == "bluehole-pubg"
    assert player.created_at == "2024-01-01T00:00:00Z"
    assert player.matches == [MatchReference("m-1"), MatchReference("m-2")]
    assert player.match_ids == ["m-1", "m-2"]


def test_player_from_dict_without_relationships() -> None:
    """relationships が無い場合は空のマッチリストになること。"""
    player = Player.from_dict({"type": "player", "id": "account.1"})
    assert player.name == ""
    assert player.matches == []


def test_players_from_envelope_skips_other_types() -> None:
    envelope = {
        "data": [PLAYER_RESOURCE, {"type": "match", "id": "m-1"}],
    }
    players = players_from_envelope(envelope)
    assert [p.name for p in players] == ["shroud"]


def test_players_from_empty_envelope() -> None:
    assert players_from_envelope({}) == []


def test_platform_values() -> None:
    assert Platform.STEAM == "steam"
    assert [p.value for p in Platform] == ["steam", "xbox", "psn", "stadia"]
