"""
Coaching session, response and progress contracts.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from .analysis import AverageMetrics, PlayerAnalysis
from .common import BaseContract


class DeltaDirection(str, Enum):
    """Classification of a metric change between two sessions."""

    IMPROVED = "improved"
    REGRESSED = "regressed"
    UNCHANGED = "unchanged"


class CoachingOutcomeStatus(str, Enum):
    """Result of a coaching workflow run."""

    COACHED = "coached"
    NO_NEW_MATCHES = "no_new_matches"


class CoachingSession(BaseContract):
    """Persisted coaching session record. Append-only."""

    id: int | None = Field(None, description="Assigned by the store on save")
    puuid: str
    latest_match_id: str = Field("", description="Most recent analyzed match (watermark)")
    match_ids: str = Field("[]", description="JSON-encoded list of analyzed match IDs")
    analysis: str = Field(..., description="JSON-encoded PlayerAnalysis snapshot")
    advice: str = ""
    created_at: datetime | None = None


class MetricDelta(BaseContract):
    """Change of one average metric between the previous and current session."""

    name: str
    previous: float
    current: float
    delta: float = Field(..., description="Signed so that positive always means better")
    direction: DeltaDirection
    lower_is_better: bool = False


class CoachingResponse(BaseContract):
    """Result of a coaching session."""

    advice: str
    is_follow_up: bool
    new_matches: int
    analysis: PlayerAnalysis


class CoachingOutcome(BaseContract):
    """Workflow result distinguishing fresh advice from 'nothing new to analyze'."""

    status: CoachingOutcomeStatus
    response: CoachingResponse | None = None
    skipped_match_ids: list[str] = Field(default_factory=list)


class TrendPoint(BaseContract):
    """A single coaching session as a data point for progress tracking."""

    session_date: datetime | None = None
    match_count: int = 0
    win_rate: float = 0.0
    tier: str = ""
    rank: str = ""
    averages: AverageMetrics = Field(default_factory=AverageMetrics)


class PlayerProgress(BaseContract):
    """Trend data across all coaching sessions."""

    puuid: str
    game_name: str = ""
    tag_line: str = ""
    sessions: int = 0
    trend: list[TrendPoint] = Field(default_factory=list)
