"""Pure analysis layer: per-match metrics, lane phase, aggregation, insights."""

from .aggregator import analyze_player, population_std_dev
from .insights import INSIGHT_RULES, InsightRule, identify_insights
from .lane_phase import analyze_lane_phase, find_frame_at_time, find_lane_opponent
from .match_metrics import analyze_match, derive_from_challenges, derive_from_raw_stats

__all__ = [
    "INSIGHT_RULES",
    "InsightRule",
    "analyze_lane_phase",
    "analyze_match",
    "analyze_player",
    "derive_from_challenges",
    "derive_from_raw_stats",
    "find_frame_at_time",
    "find_lane_opponent",
    "identify_insights",
    "population_std_dev",
]
