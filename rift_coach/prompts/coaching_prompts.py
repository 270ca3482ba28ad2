"""Prompt construction for coaching sessions.

The system prompt carries all player data as markdown sections; the user
prompt is a fixed request that differs only between initial and follow-up
sessions. Percent metrics are rendered x100.
"""

from dataclasses import dataclass

from rift_coach.contracts.analysis import (
    AverageMetrics,
    ChampionStats,
    ConsistencyMetrics,
    Insight,
    MatchAnalysis,
    PlayerAnalysis,
    RoleStats,
)
from rift_coach.contracts.coaching import DeltaDirection, MetricDelta

INITIAL_COACH_INTRO = (
    "You are an expert League of Legends coach. Your role is to analyze player statistics "
    "and provide actionable, specific advice to help them improve and climb the ranked ladder."
)

FOLLOW_UP_COACH_INTRO = (
    "You are an expert League of Legends coach conducting a follow-up session. You previously "
    "coached this player and now have new match data to assess their progress."
)

INITIAL_RESPONSE_FORMAT = """## Response Format
1. Summary (2-3 sentences assessing the player overall)
2. Top 3 action items ranked by impact on climbing
3. Specific advice for each identified weakness
4. Champion and role recommendations based on their pool and performance
"""

FOLLOW_UP_RESPONSE_FORMAT = """## Response Format
1. Progress assessment: what improved and what didn't since last session
2. Acknowledge specific improvements
3. Persistent weaknesses that need continued focus
4. Updated top 3 action items based on new data
5. Adjusted champion and role recommendations
"""

INITIAL_USER_PROMPT = (
    "Analyze my recent matches and provide coaching advice to help me climb ranked. "
    "Be specific and actionable."
)

FOLLOW_UP_USER_PROMPT = (
    "This is a follow-up coaching session. Compare my progress since the last session and "
    "provide updated advice. What did I improve on? What still needs work? "
    "What should I focus on next?"
)

DELTA_THRESHOLD = 0.01


@dataclass(frozen=True)
class _AverageLine:
    label: str
    field: str
    fmt: str
    scale: float = 1.0
    lower_is_better: bool = False


# Rendering order of the averages block and the progress table.
AVERAGE_LINES: tuple[_AverageLine, ...] = (
    _AverageLine("KDA", "kda", "%.2f"),
    _AverageLine("Kill Participation", "kill_participation", "%.0f%%", scale=100.0),
    _AverageLine("CS/min", "cs_per_minute", "%.1f"),
    _AverageLine("Damage/min", "damage_per_minute", "%.0f"),
    _AverageLine("Damage Share", "damage_share", "%.0f%%", scale=100.0),
    _AverageLine("Vision Score/min", "vision_score_per_minute", "%.2f"),
    _AverageLine("Deaths/min", "deaths_per_minute", "%.2f", lower_is_better=True),
    _AverageLine("Gold/min", "gold_per_minute", "%.0f"),
    _AverageLine("Objective Participation", "objective_participation", "%.0f%%", scale=100.0),
)


def build_initial_system_prompt(analysis: PlayerAnalysis) -> str:
    """System prompt for a player's first coaching session."""
    parts = [
        INITIAL_COACH_INTRO + "\n\n",
        _player_context(analysis),
        _averages(analysis.averages),
        _consistency(analysis.consistency),
        _insights("Strengths", analysis.strengths),
        _insights("Weaknesses", analysis.weaknesses),
        _champion_pool(analysis.champion_pool),
        _role_breakdown(analysis.role_breakdown),
        _match_history(analysis.matches),
        INITIAL_RESPONSE_FORMAT,
    ]
    return "".join(parts)


def build_follow_up_system_prompt(
    current: PlayerAnalysis, previous: PlayerAnalysis, previous_advice: str
) -> str:
    """System prompt comparing the current analysis with the previous session."""
    parts = [
        FOLLOW_UP_COACH_INTRO + "\n\n",
        _player_context(current),
        _averages(current.averages),
        _consistency(current.consistency),
        _insights("Current Strengths", current.strengths),
        _insights("Current Weaknesses", current.weaknesses),
        _champion_pool(current.champion_pool),
        _match_history(current.matches),
        "## Previous Session\n\n",
        "### Previous Averages\n",
        _averages(previous.averages),
        "### Progress Since Last Session\n",
        _deltas(compute_deltas(previous.averages, current.averages)),
        "### Previous Coaching Advice\n",
        previous_advice + "\n\n",
        FOLLOW_UP_RESPONSE_FORMAT,
    ]
    return "".join(parts)


def build_user_prompt(is_follow_up: bool) -> str:
    return FOLLOW_UP_USER_PROMPT if is_follow_up else INITIAL_USER_PROMPT


def compute_deltas(previous: AverageMetrics, current: AverageMetrics) -> list[MetricDelta]:
    """Per-metric change between two sessions in display units.

    ``delta`` is positive when the player got better, so the sign is flipped
    for metrics where lower is better.
    """
    deltas = []
    for line in AVERAGE_LINES:
        prev = getattr(previous, line.field) * line.scale
        curr = getattr(current, line.field) * line.scale
        diff = curr - prev
        if line.lower_is_better:
            diff = -diff

        if diff > DELTA_THRESHOLD:
            direction = DeltaDirection.IMPROVED
        elif diff < -DELTA_THRESHOLD:
            direction = DeltaDirection.REGRESSED
        else:
            direction = DeltaDirection.UNCHANGED

        deltas.append(
            MetricDelta(
                name=line.label,
                previous=prev,
                current=curr,
                delta=diff,
                direction=direction,
                lower_is_better=line.lower_is_better,
            )
        )
    return deltas


def _player_context(analysis: PlayerAnalysis) -> str:
    lines = ["## Player Profile", f"- Riot ID: {analysis.game_name}#{analysis.tag_line}"]
    if analysis.tier:
        lines.append(f"- Rank: {analysis.tier} {analysis.rank} ({analysis.league_points} LP)")
    lines.append(
        "- Win Rate: %.0f%% across %d matches" % (analysis.win_rate * 100, analysis.total_matches)
    )
    return _section(lines)


def _averages(averages: AverageMetrics) -> str:
    lines = ["### Key Averages"]
    for line in AVERAGE_LINES:
        value = getattr(averages, line.field) * line.scale
        lines.append(f"- {line.label}: " + line.fmt % value)
    return _section(lines)


def _consistency(consistency: ConsistencyMetrics) -> str:
    return _section(
        [
            "### Consistency",
            "- KDA StdDev: %.2f" % consistency.kda_std_dev,
            "- CS/min StdDev: %.2f" % consistency.cs_per_min_std_dev,
            "- DPM StdDev: %.0f" % consistency.dpm_std_dev,
        ]
    )


def _insights(label: str, insights: list[Insight]) -> str:
    if not insights:
        return ""
    lines = [f"### {label}"]
    lines.extend(f"- [{i.category}] {i.description}" for i in insights)
    return _section(lines)


def _champion_pool(pool: list[ChampionStats]) -> str:
    if not pool:
        return ""
    lines = ["### Champion Pool"]
    for c in pool:
        lines.append(
            "- %s: %d games, %.0f%% WR, %.2f avg KDA"
            % (c.champion_name, c.games_played, c.win_rate * 100, c.avg_kda)
        )
    return _section(lines)


def _role_breakdown(roles: list[RoleStats]) -> str:
    if not roles:
        return ""
    lines = ["### Role Breakdown"]
    for r in roles:
        lines.append("- %s: %d games, %.0f%% WR" % (r.role, r.games_played, r.win_rate * 100))
    return _section(lines)


def _match_history(matches: list[MatchAnalysis]) -> str:
    if not matches:
        return ""
    lines = ["### Recent Matches"]
    for m in matches:
        metrics = m.metrics
        result = "Win" if metrics.win else "Loss"
        lines.append(
            "- %s %s (%s): %.1f KDA, %.1f CS/min, %.0f DPM [%s]"
            % (
                metrics.champion_name,
                metrics.role,
                result,
                metrics.kda,
                metrics.cs_per_minute,
                metrics.damage_per_minute,
                metrics.match_id,
            )
        )
    return _section(lines)


def _deltas(deltas: list[MetricDelta]) -> str:
    formats = {line.label: line.fmt for line in AVERAGE_LINES}
    lines = []
    for d in deltas:
        fmt = formats[d.name]
        lines.append(f"- {d.name}: {fmt % d.previous} -> {fmt % d.current} ({d.direction})")
    return _section(lines)


def _section(lines: list[str]) -> str:
    return "\n".join(lines) + "\n\n"
