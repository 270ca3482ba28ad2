"""Per-match metric extraction - pure domain functions with zero I/O.

Riot attaches a pre-computed ``challenges`` bundle to most participants. When
it is present the headline rates are copied from it; otherwise they are
derived from raw end-of-game totals. The strategy is chosen once per match.
"""

from collections.abc import Callable
from typing import Any

from rift_coach.contracts.analysis import MatchAnalysis
from rift_coach.contracts.match import Challenges, Match, Participant
from rift_coach.core.errors import MatchTooShortError, ParticipantNotFoundError

MIN_MATCH_DURATION_SECONDS = 60


def analyze_match(match: Match, puuid: str) -> MatchAnalysis:
    """Compute the player's metrics for one match.

    Raises:
        MatchTooShortError: game lasted less than 60 seconds (remake).
        ParticipantNotFoundError: the puuid did not play in this match.
    """
    match_id = match.metadata.match_id
    if match.info.game_duration < MIN_MATCH_DURATION_SECONDS:
        raise MatchTooShortError(match_id, match.info.game_duration)

    participant = match.info.get_participant_by_puuid(puuid)
    if participant is None:
        raise ParticipantNotFoundError(match_id, puuid)

    minutes = match.info.game_duration / 60.0

    fields: dict[str, Any] = {
        "match_id": match_id,
        "champion_name": participant.champion_name,
        "role": participant.team_position,
        "game_duration": match.info.game_duration,
        "win": participant.win,
        "time_spent_dead": participant.total_time_spent_dead,
    }
    fields.update(_select_strategy(participant)(match, participant, minutes))
    fields.update(_computed_stats(match, participant, minutes))

    return MatchAnalysis.model_validate({"metrics": fields})


def _select_strategy(participant: Participant) -> Callable[[Match, Participant, float], dict[str, Any]]:
    if participant.challenges is not None:
        return derive_from_challenges
    return derive_from_raw_stats


def derive_from_challenges(match: Match, participant: Participant, minutes: float) -> dict[str, Any]:
    """Copy rates from the Riot challenges bundle."""
    challenges: Challenges = participant.challenges  # type: ignore[assignment]
    team = match.info.get_team(participant.team_id)

    team_objectives = team.objectives.epic_monster_kills if team is not None else 0
    objective_participation = 0.0
    if team_objectives > 0:
        objective_participation = challenges.epic_monster_takedowns / team_objectives

    return {
        "kda": challenges.kda,
        "kill_participation": challenges.kill_participation,
        "damage_per_minute": challenges.damage_per_minute,
        "damage_share": challenges.team_damage_percentage,
        "gold_per_minute": challenges.gold_per_minute,
        "vision_score_per_minute": challenges.vision_score_per_minute,
        "damage_taken_share": challenges.damage_taken_on_team_percentage,
        "heal_shield_effective": challenges.effective_heal_and_shielding,
        "solo_kills": challenges.solo_kills,
        "control_wards_placed": challenges.control_wards_placed,
        "lane_minions_first_10_min": challenges.lane_minions_first_10_minutes,
        "early_laning_gold_exp_advantage": challenges.early_laning_phase_gold_exp_advantage,
        "laning_gold_exp_advantage": challenges.laning_phase_gold_exp_advantage,
        "max_cs_advantage_on_lane_opponent": challenges.max_cs_advantage_on_lane_opponent,
        "objective_participation": objective_participation,
    }


def derive_from_raw_stats(match: Match, participant: Participant, minutes: float) -> dict[str, Any]:
    """Derive rates from raw end-of-game totals.

    Kill participation is not clamped to 1.0.
    """
    teammates = match.info.get_team_participants(participant.team_id)
    takedowns = participant.kills + participant.assists

    return {
        "kda": takedowns / max(participant.deaths, 1),
        "kill_participation": _share(takedowns, _team_sum(teammates, lambda p: p.kills)),
        "damage_per_minute": participant.total_damage_dealt_to_champions / minutes,
        "gold_per_minute": participant.gold_earned / minutes,
        "vision_score_per_minute": participant.vision_score / minutes,
        "control_wards_placed": participant.detector_wards_placed,
        "damage_share": _share(
            participant.total_damage_dealt_to_champions,
            _team_sum(teammates, lambda p: p.total_damage_dealt_to_champions),
        ),
        "damage_taken_share": _share(
            participant.total_damage_taken,
            _team_sum(teammates, lambda p: p.total_damage_taken),
        ),
    }


def _computed_stats(match: Match, participant: Participant, minutes: float) -> dict[str, Any]:
    teammates = match.info.get_team_participants(participant.team_id)
    return {
        "cs_per_minute": participant.total_cs / minutes,
        "wards_per_minute": participant.wards_placed / minutes,
        "cc_per_minute": participant.time_ccing_others / minutes,
        "deaths_per_minute": participant.deaths / minutes,
        "turret_damage_share": _share(
            participant.damage_dealt_to_buildings,
            _team_sum(teammates, lambda p: p.damage_dealt_to_buildings),
        ),
    }


def _team_sum(teammates: list[Participant], value: Callable[[Participant], int]) -> int:
    return sum(value(p) for p in teammates)


def _share(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return part / total


__all__ = [
    "MIN_MATCH_DURATION_SECONDS",
    "analyze_match",
    "derive_from_challenges",
    "derive_from_raw_stats",
]
