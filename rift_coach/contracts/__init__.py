"""Contract models for data validation."""

from .analysis import (
    AverageMetrics,
    ChampionStats,
    ConsistencyMetrics,
    Insight,
    LanePhaseMetrics,
    MatchAnalysis,
    MatchMetrics,
    PlayerAnalysis,
    PlayerAnalysisParams,
    RoleStats,
)
from .coaching import (
    CoachingOutcome,
    CoachingOutcomeStatus,
    CoachingResponse,
    CoachingSession,
    DeltaDirection,
    MetricDelta,
    PlayerProgress,
    TrendPoint,
)
from .match import Challenges, Match, MatchInfo, Participant, Team
from .summoner import Account, LeagueEntry
from .timeline import Frame, MatchTimeline, ParticipantFrame, TimelineEvent

__all__ = [
    "Account",
    "AverageMetrics",
    "Challenges",
    "ChampionStats",
    "CoachingOutcome",
    "CoachingOutcomeStatus",
    "CoachingResponse",
    "CoachingSession",
    "ConsistencyMetrics",
    "DeltaDirection",
    "Frame",
    "Insight",
    "LanePhaseMetrics",
    "LeagueEntry",
    "Match",
    "MatchAnalysis",
    "MatchInfo",
    "MatchMetrics",
    "MatchTimeline",
    "MetricDelta",
    "Participant",
    "ParticipantFrame",
    "PlayerAnalysis",
    "PlayerAnalysisParams",
    "PlayerProgress",
    "RoleStats",
    "Team",
    "TimelineEvent",
    "TrendPoint",
]
