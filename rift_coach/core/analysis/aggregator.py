"""Player-level aggregation across analyzed matches.

CRITICAL: This module MUST NOT perform any I/O. Inputs arrive fully fetched
in ``PlayerAnalysisParams``; per-match failures are skipped, never raised.
"""

import logging
from collections.abc import Sequence

import numpy as np

from rift_coach.contracts.analysis import (
    UNKNOWN_ROLE,
    AverageMetrics,
    ChampionStats,
    ConsistencyMetrics,
    MatchAnalysis,
    PlayerAnalysis,
    PlayerAnalysisParams,
    RoleStats,
)
from rift_coach.core import metrics
from rift_coach.core.analysis.insights import identify_insights
from rift_coach.core.analysis.lane_phase import analyze_lane_phase
from rift_coach.core.analysis.match_metrics import analyze_match
from rift_coach.core.errors import (
    AnalysisError,
    MatchTooShortError,
    NoMatchesError,
    NoValidMatchesError,
    ParticipantNotFoundError,
)
from rift_coach.core.observability import trace_performance

logger = logging.getLogger(__name__)

AVERAGED_FIELDS = (
    "kda",
    "kill_participation",
    "damage_per_minute",
    "damage_share",
    "cs_per_minute",
    "vision_score_per_minute",
    "deaths_per_minute",
    "gold_per_minute",
    "objective_participation",
)


@trace_performance
def analyze_player(params: PlayerAnalysisParams) -> PlayerAnalysis:
    """Build the player analysis from raw matches and optional timelines.

    Raises:
        NoMatchesError: ``params.matches`` is empty.
        NoValidMatchesError: every match was skipped (e.g. all remakes).
    """
    if not params.matches:
        raise NoMatchesError("at least one match is required")

    analyses: list[MatchAnalysis] = []
    for match in params.matches:
        match_id = match.metadata.match_id
        try:
            result = analyze_match(match, params.puuid)
        except AnalysisError as e:
            reason = _skip_reason(e)
            logger.debug(
                "Skipping match",
                extra={"match_id": match_id, "reason": reason, "error": str(e)},
            )
            metrics.mark_match_skipped(reason)
            continue

        timeline = params.timelines.get(match_id)
        if timeline is not None:
            try:
                lane_phase = analyze_lane_phase(timeline, match, params.puuid)
            except AnalysisError as e:
                logger.debug(
                    "Lane phase unavailable",
                    extra={"match_id": match_id, "error": str(e)},
                )
            else:
                result = result.model_copy(update={"lane_phase": lane_phase})

        metrics.mark_match_analyzed()
        analyses.append(result)

    if not analyses:
        raise NoValidMatchesError("no valid matches to analyze (all may be remakes)")

    averages = compute_averages(analyses)
    consistency = compute_consistency(analyses)
    champion_pool = compute_champion_pool(analyses)
    strengths, weaknesses = identify_insights(averages, champion_pool, consistency)

    league = params.league
    return PlayerAnalysis(
        puuid=params.puuid,
        game_name=params.game_name,
        tag_line=params.tag_line,
        tier=league.tier if league else "",
        rank=league.rank if league else "",
        league_points=league.league_points if league else 0,
        win_rate=compute_win_rate(analyses),
        total_matches=len(analyses),
        averages=averages,
        consistency=consistency,
        role_breakdown=compute_role_breakdown(analyses),
        champion_pool=champion_pool,
        strengths=strengths,
        weaknesses=weaknesses,
        matches=analyses,
    )


def compute_win_rate(analyses: Sequence[MatchAnalysis]) -> float:
    wins = sum(1 for a in analyses if a.metrics.win)
    return wins / len(analyses)


def compute_averages(analyses: Sequence[MatchAnalysis]) -> AverageMetrics:
    """Arithmetic mean of each averaged field."""
    values = np.array(
        [[getattr(a.metrics, name) for name in AVERAGED_FIELDS] for a in analyses],
        dtype=float,
    )
    means = values.mean(axis=0)
    return AverageMetrics(**{name: float(means[i]) for i, name in enumerate(AVERAGED_FIELDS)})


def compute_consistency(analyses: Sequence[MatchAnalysis]) -> ConsistencyMetrics:
    return ConsistencyMetrics(
        kda_std_dev=population_std_dev([a.metrics.kda for a in analyses]),
        cs_per_min_std_dev=population_std_dev([a.metrics.cs_per_minute for a in analyses]),
        dpm_std_dev=population_std_dev([a.metrics.damage_per_minute for a in analyses]),
    )


def population_std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divide by N).

    Returns 0.0 for fewer than two samples, and exactly 0.0 when all samples
    are identical.
    """
    if len(values) < 2:
        return 0.0
    samples = np.asarray(values, dtype=float)
    if np.ptp(samples) == 0:
        return 0.0
    return float(np.std(samples, ddof=0))


def compute_role_breakdown(analyses: Sequence[MatchAnalysis]) -> list[RoleStats]:
    """Games and win rate per role, most played first; ties keep first-seen order."""
    games: dict[str, int] = {}
    wins: dict[str, int] = {}
    for a in analyses:
        role = a.metrics.role or UNKNOWN_ROLE
        games[role] = games.get(role, 0) + 1
        wins[role] = wins.get(role, 0) + int(a.metrics.win)

    roles = [
        RoleStats(role=role, games_played=count, win_rate=wins[role] / count)
        for role, count in games.items()
    ]
    return sorted(roles, key=lambda r: r.games_played, reverse=True)


def compute_champion_pool(analyses: Sequence[MatchAnalysis]) -> list[ChampionStats]:
    """Games, win rate and mean KDA per champion, most played first."""
    games: dict[str, int] = {}
    wins: dict[str, int] = {}
    kda_sum: dict[str, float] = {}
    for a in analyses:
        name = a.metrics.champion_name
        games[name] = games.get(name, 0) + 1
        wins[name] = wins.get(name, 0) + int(a.metrics.win)
        kda_sum[name] = kda_sum.get(name, 0.0) + a.metrics.kda

    pool = [
        ChampionStats(
            champion_name=name,
            games_played=count,
            win_rate=wins[name] / count,
            avg_kda=kda_sum[name] / count,
        )
        for name, count in games.items()
    ]
    return sorted(pool, key=lambda c: c.games_played, reverse=True)


def _skip_reason(error: AnalysisError) -> str:
    if isinstance(error, MatchTooShortError):
        return "too_short"
    if isinstance(error, ParticipantNotFoundError):
        return "participant_not_found"
    return "invalid"
