"""Unit tests for timeline lane phase analysis."""

import pytest

from rift_coach.contracts.match import Match
from rift_coach.contracts.timeline import MatchTimeline
from rift_coach.core.analysis.lane_phase import (
    analyze_lane_phase,
    count_deaths_before,
    find_frame_at_time,
    find_lane_opponent,
)
from rift_coach.core.errors import ParticipantNotFoundError


@pytest.fixture
def lane_timeline(timeline_payload, frame_payload, kill_event_payload):
    frames = [
        frame_payload(0),
        frame_payload(
            540_000,
            {3: (3000, 70, 0, 4000), 8: (2800, 66, 0, 3900)},
            [kill_event_payload(300_000, 8, 3)],
        ),
        frame_payload(
            600_000,
            {3: (3500, 80, 2, 4600), 8: (3000, 70, 0, 4400)},
            [kill_event_payload(599_999, 8, 3), kill_event_payload(600_000, 8, 3)],
        ),
        frame_payload(900_000, {3: (6000, 120, 4, 7000), 8: (5200, 110, 0, 6800)}),
    ]
    return MatchTimeline.model_validate(timeline_payload(frames=frames))


class TestAnalyzeLanePhase:
    def test_diffs_against_lane_opponent(self, lane_timeline, match_payload, player_puuid):
        match = Match.model_validate(match_payload())

        lane = analyze_lane_phase(lane_timeline, match, player_puuid)

        assert lane.gold_at_10 == 3500
        assert lane.cs_at_10 == 82
        assert lane.xp_at_10 == 4600
        assert lane.gold_diff_at_10 == 500
        assert lane.cs_diff_at_10 == 12
        assert lane.gold_at_15 == 6000
        assert lane.cs_at_15 == 124
        assert lane.gold_diff_at_15 == 800

    def test_deaths_strictly_before_ten_minutes(self, lane_timeline, match_payload, player_puuid):
        match = Match.model_validate(match_payload())

        lane = analyze_lane_phase(lane_timeline, match, player_puuid)

        assert lane.deaths_before_10 == 2

    def test_no_opponent_leaves_diffs_zero(self, lane_timeline, match_payload, player_puuid):
        def no_red_mid(lineup):
            lineup[7]["teamPosition"] = ""

        match = Match.model_validate(match_payload(participants=no_red_mid))

        lane = analyze_lane_phase(lane_timeline, match, player_puuid)

        assert lane.gold_at_10 == 3500
        assert lane.gold_diff_at_10 == 0
        assert lane.cs_diff_at_10 == 0
        assert lane.gold_diff_at_15 == 0

    def test_no_frames_yields_zero_metrics(self, timeline_payload, match_payload, player_puuid):
        timeline = MatchTimeline.model_validate(timeline_payload(frames=[]))
        match = Match.model_validate(match_payload())

        lane = analyze_lane_phase(timeline, match, player_puuid)

        assert lane.gold_at_10 == 0
        assert lane.gold_at_15 == 0
        assert lane.deaths_before_10 == 0

    def test_player_missing_from_timeline(self, timeline_payload, match_payload, player_puuid):
        timeline = MatchTimeline.model_validate(
            timeline_payload(participants=[{"participantId": 1, "puuid": "other"}])
        )
        match = Match.model_validate(match_payload())

        with pytest.raises(ParticipantNotFoundError):
            analyze_lane_phase(timeline, match, player_puuid)


class TestFindLaneOpponent:
    def test_same_position_other_team(self, match_payload, player_puuid):
        match = Match.model_validate(match_payload())

        assert find_lane_opponent(match, player_puuid) == 8

    def test_empty_position_has_no_opponent(self, match_payload, player_puuid):
        match = Match.model_validate(match_payload(player={"teamPosition": ""}))

        assert find_lane_opponent(match, player_puuid) is None

    def test_unknown_player(self, match_payload):
        match = Match.model_validate(match_payload())

        assert find_lane_opponent(match, "nobody") is None


class TestFindFrameAtTime:
    def test_nearest_frame(self, timeline_payload, frame_payload):
        frames = MatchTimeline.model_validate(
            timeline_payload(frames=[frame_payload(t) for t in (0, 540_000, 660_000, 900_000)])
        ).info.frames

        assert find_frame_at_time(frames, 600_000).timestamp == 540_000
        assert find_frame_at_time(frames, 880_000).timestamp == 900_000

    def test_tie_keeps_earliest_frame(self, timeline_payload, frame_payload):
        frames = MatchTimeline.model_validate(
            timeline_payload(frames=[frame_payload(t) for t in (570_000, 630_000)])
        ).info.frames

        assert find_frame_at_time(frames, 600_000).timestamp == 570_000

    def test_empty(self):
        assert find_frame_at_time([], 600_000) is None


def test_count_deaths_before_only_counts_victim(timeline_payload, frame_payload, kill_event_payload):
    timeline = MatchTimeline.model_validate(
        timeline_payload(
            frames=[
                frame_payload(
                    60_000,
                    events=[
                        kill_event_payload(50_000, 3, 8),
                        kill_event_payload(55_000, 8, 3),
                        {"type": "WARD_PLACED", "timestamp": 56_000, "creatorId": 3},
                    ],
                )
            ]
        )
    )

    assert count_deaths_before(timeline, 3, 600_000) == 1
    assert count_deaths_before(timeline, 8, 600_000) == 1
    assert count_deaths_before(timeline, 3, 55_000) == 0
