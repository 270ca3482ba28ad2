"""Pytest configuration and shared fixtures for rift-coach tests.

Builders return raw camelCase payloads shaped like Riot Match-V5 responses so
tests exercise the same parsing path as the Riot API adapter.
"""

from collections.abc import Callable
from typing import Any

import pytest

from rift_coach.contracts.analysis import (
    AverageMetrics,
    ChampionStats,
    ConsistencyMetrics,
    Insight,
    MatchAnalysis,
    MatchMetrics,
    PlayerAnalysis,
    RoleStats,
)

PLAYER_PUUID = "player-puuid"
POSITIONS = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]
# Player is blue MIDDLE (participant 3), lane opponent is red MIDDLE (participant 8)
PLAYER_INDEX = 2


def _puuid(index: int) -> str:
    return PLAYER_PUUID if index == PLAYER_INDEX else f"puuid-{index + 1}"


def _participant(index: int, win: bool, **overrides: Any) -> dict[str, Any]:
    team_id = 100 if index < 5 else 200
    data: dict[str, Any] = {
        "puuid": _puuid(index),
        "participantId": index + 1,
        "riotIdGameName": f"Player{index + 1}",
        "riotIdTagline": "EUW",
        "teamId": team_id,
        "championId": 100 + index,
        "championName": f"Champ{index + 1}",
        "teamPosition": POSITIONS[index % 5],
        "kills": 2,
        "deaths": 3,
        "assists": 4,
        "totalDamageDealtToChampions": 10000,
        "totalDamageTaken": 10000,
        "damageDealtToBuildings": 1000,
        "timeCCingOthers": 10,
        "totalTimeSpentDead": 60,
        "goldEarned": 9000,
        "totalMinionsKilled": 150,
        "neutralMinionsKilled": 0,
        "visionScore": 20,
        "wardsPlaced": 8,
        "detectorWardsPlaced": 1,
        "win": win if team_id == 100 else not win,
    }
    data.update(overrides)
    return data


def build_match_payload(
    match_id: str = "EUW1_1000",
    duration: int = 1800,
    win: bool = True,
    player: dict[str, Any] | None = None,
    objectives: tuple[int, int, int] = (2, 1, 1),
    participants: Callable[[list[dict[str, Any]]], None] | None = None,
) -> dict[str, Any]:
    """Raw Match-V5 payload with ten participants.

    Args:
        player: camelCase overrides for the tracked player
        objectives: blue team (dragon, baron, riftHerald) kills
        participants: hook that may mutate the participant list in place
    """
    player_defaults = {
        "championName": "Ahri",
        "kills": 5,
        "deaths": 2,
        "assists": 7,
        "totalDamageDealtToChampions": 24000,
        "totalDamageTaken": 14000,
        "damageDealtToBuildings": 3000,
        "timeCCingOthers": 45,
        "totalTimeSpentDead": 40,
        "goldEarned": 12000,
        "totalMinionsKilled": 200,
        "neutralMinionsKilled": 10,
        "visionScore": 30,
        "wardsPlaced": 12,
        "detectorWardsPlaced": 3,
    }
    player_defaults.update(player or {})

    lineup = [
        _participant(i, win, **(player_defaults if i == PLAYER_INDEX else {}))
        for i in range(10)
    ]
    if participants is not None:
        participants(lineup)

    dragon, baron, herald = objectives
    return {
        "metadata": {
            "dataVersion": "2",
            "matchId": match_id,
            "participants": [p["puuid"] for p in lineup],
        },
        "info": {
            "gameCreation": 1_700_000_000_000,
            "gameDuration": duration,
            "gameId": 1000,
            "gameMode": "CLASSIC",
            "gameVersion": "14.10.1",
            "platformId": "EUW1",
            "queueId": 420,
            "participants": lineup,
            "teams": [
                {
                    "teamId": 100,
                    "win": win,
                    "objectives": {
                        "dragon": {"first": True, "kills": dragon},
                        "baron": {"first": False, "kills": baron},
                        "riftHerald": {"first": True, "kills": herald},
                        "tower": {"first": True, "kills": 7},
                    },
                },
                {
                    "teamId": 200,
                    "win": not win,
                    "objectives": {
                        "dragon": {"first": False, "kills": 1},
                        "baron": {"first": False, "kills": 0},
                        "riftHerald": {"first": False, "kills": 0},
                    },
                },
            ],
        },
    }


def build_frame(
    timestamp: int,
    stats: dict[int, tuple[int, int, int, int]] | None = None,
    events: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Raw timeline frame.

    Args:
        stats: participant id -> (total_gold, minions, jungle_minions, xp)
    """
    participant_frames = {
        str(pid): {
            "participantId": pid,
            "totalGold": gold,
            "currentGold": 0,
            "minionsKilled": minions,
            "jungleMinionsKilled": jungle,
            "level": 1,
            "xp": xp,
            "position": {"x": 0, "y": 0},
        }
        for pid, (gold, minions, jungle, xp) in (stats or {}).items()
    }
    return {"timestamp": timestamp, "participantFrames": participant_frames, "events": events or []}


def kill_event(timestamp: int, killer_id: int, victim_id: int) -> dict[str, Any]:
    return {
        "type": "CHAMPION_KILL",
        "timestamp": timestamp,
        "killerId": killer_id,
        "victimId": victim_id,
        "assistingParticipantIds": [],
        "position": {"x": 7000, "y": 7000},
    }


def build_timeline_payload(
    match_id: str = "EUW1_1000",
    frames: list[dict[str, Any]] | None = None,
    participants: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    if participants is None:
        participants = [{"participantId": i + 1, "puuid": _puuid(i)} for i in range(10)]
    return {
        "metadata": {"dataVersion": "2", "matchId": match_id, "participants": []},
        "info": {"frameInterval": 60000, "gameId": 1000, "frames": frames or [], "participants": participants},
    }


def build_player_analysis(
    puuid: str = PLAYER_PUUID,
    averages: dict[str, float] | None = None,
    **overrides: Any,
) -> PlayerAnalysis:
    """Derived PlayerAnalysis with realistic defaults for prompt and service tests."""
    avg = {
        "kda": 2.5,
        "kill_participation": 0.55,
        "damage_per_minute": 650.0,
        "damage_share": 0.24,
        "cs_per_minute": 6.8,
        "vision_score_per_minute": 0.9,
        "deaths_per_minute": 0.2,
        "gold_per_minute": 410.0,
        "objective_participation": 0.45,
    }
    avg.update(averages or {})
    fields: dict[str, Any] = {
        "puuid": puuid,
        "game_name": "Faker",
        "tag_line": "KR1",
        "tier": "GOLD",
        "rank": "II",
        "league_points": 57,
        "win_rate": 0.6,
        "total_matches": 5,
        "averages": AverageMetrics(**avg),
        "consistency": ConsistencyMetrics(kda_std_dev=1.23, cs_per_min_std_dev=0.84, dpm_std_dev=120.4),
        "role_breakdown": [RoleStats(role="MIDDLE", games_played=5, win_rate=0.6)],
        "champion_pool": [
            ChampionStats(champion_name="Ahri", games_played=3, win_rate=2 / 3, avg_kda=3.1),
            ChampionStats(champion_name="Orianna", games_played=2, win_rate=0.5, avg_kda=1.6),
        ],
        "strengths": [],
        "weaknesses": [
            Insight(
                category="champion_pool",
                description="Narrow champion pool with only 2 champion(s)",
                value=2.0,
            )
        ],
        "matches": [
            MatchAnalysis(
                metrics=MatchMetrics(
                    match_id="EUW1_1005",
                    champion_name="Ahri",
                    role="MIDDLE",
                    kda=4.0,
                    cs_per_minute=7.2,
                    damage_per_minute=710.0,
                    win=True,
                )
            )
        ],
    }
    fields.update(overrides)
    return PlayerAnalysis(**fields)


@pytest.fixture
def player_puuid() -> str:
    return PLAYER_PUUID


@pytest.fixture
def match_payload() -> Callable[..., dict[str, Any]]:
    return build_match_payload


@pytest.fixture
def timeline_payload() -> Callable[..., dict[str, Any]]:
    return build_timeline_payload


@pytest.fixture
def frame_payload() -> Callable[..., dict[str, Any]]:
    return build_frame


@pytest.fixture
def kill_event_payload() -> Callable[..., dict[str, Any]]:
    return kill_event


@pytest.fixture
def player_analysis() -> Callable[..., PlayerAnalysis]:
    return build_player_analysis
