"""
Account and ranked-standing data contracts.
"""

from pydantic import Field

from .common import RiotContract, Tier

RANKED_SOLO_QUEUE = "RANKED_SOLO_5x5"


class Account(RiotContract):
    """Riot account information (Account-V1)."""

    puuid: str = Field(..., description="Player's PUUID")
    game_name: str = Field("", description="Game name")
    tag_line: str = Field("", description="Tag line")

    @property
    def riot_id(self) -> str:
        """Get full Riot ID (e.g., 'Faker#KR1')."""
        return f"{self.game_name}#{self.tag_line}"


class LeagueEntry(RiotContract):
    """League/Ranked information for a player (League-V4)."""

    league_id: str | None = Field(None, description="League ID")
    queue_type: str = Field(..., description="Queue type (e.g., RANKED_SOLO_5x5)")
    tier: str = Field("", description="Tier (IRON to CHALLENGER)")
    rank: str = Field("", description="Division within tier")
    league_points: int = Field(0, description="League points")
    wins: int = Field(0, description="Number of wins")
    losses: int = Field(0, description="Number of losses")
    hot_streak: bool = Field(False)
    veteran: bool = Field(False)
    fresh_blood: bool = Field(False)
    inactive: bool = Field(False)

    @property
    def full_rank(self) -> str:
        """Get full rank string (e.g., 'GOLD II')."""
        if not self.tier:
            return "Unranked"
        if self.tier in (Tier.MASTER.value, Tier.GRANDMASTER.value, Tier.CHALLENGER.value):
            return self.tier
        return f"{self.tier} {self.rank}" if self.rank else self.tier
