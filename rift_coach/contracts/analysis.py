"""
Derived analysis contracts.

These records are produced by rift_coach.core.analysis and serialized as the
durable snapshot of a coaching session. They are frozen once built.
"""

from pydantic import Field

from .common import BaseContract
from .match import Match
from .summoner import LeagueEntry
from .timeline import MatchTimeline

UNKNOWN_ROLE = "UNKNOWN"


class MatchMetrics(BaseContract):
    """Computed metrics for a single player in a single match."""

    match_id: str
    champion_name: str = ""
    role: str = ""

    kda: float = 0.0
    kill_participation: float = 0.0
    damage_per_minute: float = 0.0
    damage_share: float = 0.0
    cs_per_minute: float = 0.0
    vision_score_per_minute: float = 0.0
    wards_per_minute: float = 0.0
    cc_per_minute: float = 0.0
    deaths_per_minute: float = 0.0
    gold_per_minute: float = 0.0
    objective_participation: float = 0.0
    turret_damage_share: float = 0.0
    damage_taken_share: float = 0.0
    heal_shield_effective: float = 0.0
    max_cs_advantage_on_lane_opponent: float = 0.0

    game_duration: int = Field(0, description="Seconds")
    solo_kills: int = 0
    control_wards_placed: int = 0
    lane_minions_first_10_min: int = 0
    early_laning_gold_exp_advantage: int = 0
    laning_gold_exp_advantage: int = 0
    time_spent_dead: int = Field(0, description="Seconds")

    win: bool = False


class LanePhaseMetrics(BaseContract):
    """Timeline-derived early game data. All zero when nothing can be measured."""

    gold_diff_at_10: int = 0
    gold_diff_at_15: int = 0
    cs_diff_at_10: int = 0
    gold_at_10: int = 0
    gold_at_15: int = 0
    cs_at_10: int = 0
    cs_at_15: int = 0
    xp_at_10: int = 0
    deaths_before_10: int = 0


class MatchAnalysis(BaseContract):
    """Match metrics with optional lane phase data."""

    metrics: MatchMetrics
    lane_phase: LanePhaseMetrics | None = None


class AverageMetrics(BaseContract):
    """Mean values across all analyzed matches."""

    kda: float = 0.0
    kill_participation: float = 0.0
    damage_per_minute: float = 0.0
    damage_share: float = 0.0
    cs_per_minute: float = 0.0
    vision_score_per_minute: float = 0.0
    deaths_per_minute: float = 0.0
    gold_per_minute: float = 0.0
    objective_participation: float = 0.0


class ConsistencyMetrics(BaseContract):
    """Population standard deviation of key metrics."""

    kda_std_dev: float = 0.0
    cs_per_min_std_dev: float = 0.0
    dpm_std_dev: float = 0.0


class ChampionStats(BaseContract):
    """Per-champion aggregated performance."""

    champion_name: str
    avg_kda: float = 0.0
    win_rate: float = 0.0
    games_played: int = 0


class RoleStats(BaseContract):
    """Per-role aggregated performance."""

    role: str
    win_rate: float = 0.0
    games_played: int = 0


class Insight(BaseContract):
    """A single identified strength or weakness."""

    category: str
    description: str
    value: float = Field(..., description="Triggering value, unscaled")
    is_strength: bool = False


class PlayerAnalysis(BaseContract):
    """Aggregate root handed to the coaching layer."""

    puuid: str
    game_name: str = ""
    tag_line: str = ""
    tier: str = ""
    rank: str = ""
    league_points: int = 0

    win_rate: float = 0.0
    total_matches: int = 0

    averages: AverageMetrics = Field(default_factory=AverageMetrics)
    consistency: ConsistencyMetrics = Field(default_factory=ConsistencyMetrics)
    role_breakdown: list[RoleStats] = Field(default_factory=list)
    champion_pool: list[ChampionStats] = Field(default_factory=list)
    strengths: list[Insight] = Field(default_factory=list)
    weaknesses: list[Insight] = Field(default_factory=list)
    matches: list[MatchAnalysis] = Field(default_factory=list)


class PlayerAnalysisParams(BaseContract):
    """All inputs for a player analysis run."""

    puuid: str
    game_name: str = ""
    tag_line: str = ""
    matches: list[Match] = Field(default_factory=list)
    timelines: dict[str, MatchTimeline] = Field(
        default_factory=dict, description="Timelines keyed by match ID"
    )
    league: LeagueEntry | None = None
