"""Strength and weakness detection.

Each rule maps one average metric to at most one insight. Rules are evaluated
in table order, followed by the champion pool and KDA consistency checks.
"""

from collections.abc import Callable
from dataclasses import dataclass

from rift_coach.contracts.analysis import AverageMetrics, ChampionStats, ConsistencyMetrics, Insight

DEEP_CHAMPION_POOL = 8
NARROW_CHAMPION_POOL = 2
CONSISTENT_KDA_STD_DEV = 1.0
INCONSISTENT_KDA_STD_DEV = 3.0


@dataclass(frozen=True)
class InsightRule:
    """Threshold rule for a single average metric.

    ``display_scale`` only affects the rendered description; ``Insight.value``
    always holds the raw metric. When ``higher_is_worse`` is set the rule can
    only produce a weakness, triggered at ``weakness_max`` or above.
    """

    category: str
    accessor: Callable[[AverageMetrics], float]
    weakness_max: float
    weakness_template: str
    strength_min: float | None = None
    strength_template: str = ""
    display_scale: float = 1.0
    higher_is_worse: bool = False

    def evaluate(self, averages: AverageMetrics) -> Insight | None:
        value = self.accessor(averages)
        display = value * self.display_scale

        if self.higher_is_worse:
            if value >= self.weakness_max:
                return Insight(
                    category=self.category,
                    description=self.weakness_template % display,
                    value=value,
                )
            return None

        if self.strength_min is not None and value >= self.strength_min:
            return Insight(
                category=self.category,
                description=self.strength_template % display,
                value=value,
                is_strength=True,
            )
        if value <= self.weakness_max:
            return Insight(
                category=self.category,
                description=self.weakness_template % display,
                value=value,
            )
        return None


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        category="combat",
        accessor=lambda a: a.kda,
        strength_min=3.0,
        weakness_max=1.5,
        strength_template="Strong KDA averaging %.1f -- effective at getting kills and staying alive",
        weakness_template="Low KDA averaging %.1f -- dying too frequently relative to kill contribution",
    ),
    InsightRule(
        category="combat",
        accessor=lambda a: a.kill_participation,
        strength_min=0.65,
        weakness_max=0.40,
        strength_template="High kill participation at %.0f%% -- consistently involved in team fights",
        weakness_template="Low kill participation at %.0f%% -- missing team fights or playing too passively",
        display_scale=100.0,
    ),
    InsightRule(
        category="farming",
        accessor=lambda a: a.cs_per_minute,
        strength_min=7.5,
        weakness_max=5.5,
        strength_template="Strong farming at %.1f CS/min -- efficient gold generation",
        weakness_template="Low CS at %.1f per minute -- missing too much farm",
    ),
    InsightRule(
        category="vision",
        accessor=lambda a: a.vision_score_per_minute,
        strength_min=1.2,
        weakness_max=0.6,
        strength_template="Excellent vision control at %.2f score/min",
        weakness_template="Low vision score at %.2f per minute -- not warding enough",
    ),
    InsightRule(
        category="combat",
        accessor=lambda a: a.damage_share,
        strength_min=0.28,
        weakness_max=0.15,
        strength_template="High team damage share at %.0f%% -- carrying damage output",
        weakness_template="Low damage share at %.0f%% -- not contributing enough damage",
        display_scale=100.0,
    ),
    InsightRule(
        category="objectives",
        accessor=lambda a: a.objective_participation,
        strength_min=0.60,
        weakness_max=0.30,
        strength_template="Strong objective participation at %.0f%%",
        weakness_template="Low objective participation at %.0f%% -- missing dragon and baron fights",
        display_scale=100.0,
    ),
    InsightRule(
        category="deaths",
        accessor=lambda a: a.deaths_per_minute,
        weakness_max=0.25,
        weakness_template="High death rate at %.2f per minute -- positioning or decision-making needs work",
        higher_is_worse=True,
    ),
)


def identify_insights(
    averages: AverageMetrics,
    champion_pool: list[ChampionStats],
    consistency: ConsistencyMetrics,
) -> tuple[list[Insight], list[Insight]]:
    """Return ``(strengths, weaknesses)`` for the given aggregates."""
    insights: list[Insight] = []

    for rule in INSIGHT_RULES:
        insight = rule.evaluate(averages)
        if insight is not None:
            insights.append(insight)

    unique_champions = len(champion_pool)
    if unique_champions >= DEEP_CHAMPION_POOL:
        insights.append(
            Insight(
                category="champion_pool",
                description=f"Deep champion pool with {unique_champions} unique champions",
                value=float(unique_champions),
                is_strength=True,
            )
        )
    elif unique_champions <= NARROW_CHAMPION_POOL:
        insights.append(
            Insight(
                category="champion_pool",
                description=f"Narrow champion pool with only {unique_champions} champion(s)",
                value=float(unique_champions),
            )
        )

    kda_std_dev = consistency.kda_std_dev
    if kda_std_dev < CONSISTENT_KDA_STD_DEV:
        insights.append(
            Insight(
                category="consistency",
                description=f"Very consistent KDA performance (stddev {kda_std_dev:.2f})",
                value=kda_std_dev,
                is_strength=True,
            )
        )
    elif kda_std_dev > INCONSISTENT_KDA_STD_DEV:
        insights.append(
            Insight(
                category="consistency",
                description=f"Inconsistent performance with large KDA swings (stddev {kda_std_dev:.2f})",
                value=kda_std_dev,
            )
        )

    strengths = [i for i in insights if i.is_strength]
    weaknesses = [i for i in insights if not i.is_strength]
    return strengths, weaknesses
