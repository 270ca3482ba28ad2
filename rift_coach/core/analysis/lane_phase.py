"""Lane phase analysis from Match-V5 timelines.

Compares the player with their lane opponent at the 10 and 15 minute frames
and counts early deaths. Pure functions, no I/O.
"""

from collections.abc import Sequence

from rift_coach.contracts.analysis import LanePhaseMetrics
from rift_coach.contracts.match import Match
from rift_coach.contracts.timeline import CHAMPION_KILL, Frame, MatchTimeline, ParticipantFrame
from rift_coach.core.errors import ParticipantNotFoundError

TEN_MINUTES_MS = 600_000
FIFTEEN_MINUTES_MS = 900_000


def analyze_lane_phase(timeline: MatchTimeline, match: Match, puuid: str) -> LanePhaseMetrics:
    """Compute early-game metrics for the player.

    Raises:
        ParticipantNotFoundError: the puuid is missing from the timeline mapping.
    """
    participant_id = timeline.get_participant_by_puuid(puuid)
    if participant_id is None:
        raise ParticipantNotFoundError(timeline.metadata.match_id, puuid)

    opponent_id = find_lane_opponent(match, puuid)
    values: dict[str, int] = {}

    frame10 = find_frame_at_time(timeline.info.frames, TEN_MINUTES_MS)
    player10 = _participant_frame(frame10, participant_id)
    if player10 is not None:
        values["gold_at_10"] = player10.total_gold
        values["cs_at_10"] = player10.total_cs
        values["xp_at_10"] = player10.xp

        opponent10 = _participant_frame(frame10, opponent_id)
        if opponent10 is not None:
            values["gold_diff_at_10"] = player10.total_gold - opponent10.total_gold
            values["cs_diff_at_10"] = player10.total_cs - opponent10.total_cs

    frame15 = find_frame_at_time(timeline.info.frames, FIFTEEN_MINUTES_MS)
    player15 = _participant_frame(frame15, participant_id)
    if player15 is not None:
        values["gold_at_15"] = player15.total_gold
        values["cs_at_15"] = player15.total_cs

        opponent15 = _participant_frame(frame15, opponent_id)
        if opponent15 is not None:
            values["gold_diff_at_15"] = player15.total_gold - opponent15.total_gold

    values["deaths_before_10"] = count_deaths_before(timeline, participant_id, TEN_MINUTES_MS)

    return LanePhaseMetrics(**values)


def find_lane_opponent(match: Match, puuid: str) -> int | None:
    """Return the participant id of the player's lane opponent.

    The opponent is the first participant on the other team with the same
    non-empty position. Payloads without ``participantId`` fall back to the
    1-based list index.
    """
    player = match.info.get_participant_by_puuid(puuid)
    if player is None or not player.team_position:
        return None

    for index, candidate in enumerate(match.info.participants):
        if candidate.team_id != player.team_id and candidate.team_position == player.team_position:
            return candidate.participant_id or index + 1
    return None


def find_frame_at_time(frames: Sequence[Frame], target_ms: int) -> Frame | None:
    """Return the frame nearest to ``target_ms``; ties keep the earliest frame."""
    closest: Frame | None = None
    closest_distance: int | None = None

    for frame in frames:
        distance = abs(frame.timestamp - target_ms)
        if closest_distance is None or distance < closest_distance:
            closest = frame
            closest_distance = distance
    return closest


def count_deaths_before(timeline: MatchTimeline, participant_id: int, before_ms: int) -> int:
    """Count champion kills where the participant died before ``before_ms``."""
    return sum(
        1
        for event in timeline.get_events_by_type(CHAMPION_KILL)
        if event.victim_id == participant_id and event.timestamp < before_ms
    )


def _participant_frame(frame: Frame | None, participant_id: int | None) -> ParticipantFrame | None:
    if frame is None or participant_id is None:
        return None
    return frame.participant_frames.get(str(participant_id))
