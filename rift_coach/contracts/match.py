"""
Match information data contracts for Riot API Match-V5.
"""

from pydantic import Field

from .common import RiotContract


class ObjectiveStats(RiotContract):
    """Kill count and first-take flag for one objective type."""

    kills: int = Field(0, ge=0)
    first: bool = Field(False)


class TeamObjectives(RiotContract):
    """Objective control for a team."""

    baron: ObjectiveStats = Field(default_factory=ObjectiveStats)
    champion: ObjectiveStats = Field(default_factory=ObjectiveStats)
    dragon: ObjectiveStats = Field(default_factory=ObjectiveStats)
    horde: ObjectiveStats = Field(default_factory=ObjectiveStats, description="Voidgrubs")
    inhibitor: ObjectiveStats = Field(default_factory=ObjectiveStats)
    rift_herald: ObjectiveStats = Field(default_factory=ObjectiveStats)
    tower: ObjectiveStats = Field(default_factory=ObjectiveStats)

    @property
    def epic_monster_kills(self) -> int:
        """Dragon + Baron + Rift Herald kills."""
        return self.dragon.kills + self.baron.kills + self.rift_herald.kills


class Team(RiotContract):
    """Team information in a match."""

    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    win: bool = Field(False)
    objectives: TeamObjectives = Field(default_factory=TeamObjectives)


class Challenges(RiotContract):
    """Pre-computed analytical metrics Riot attaches to some participants."""

    kda: float = Field(0.0, ge=0)
    kill_participation: float = Field(0.0, ge=0)
    damage_per_minute: float = Field(0.0, ge=0)
    team_damage_percentage: float = Field(0.0, ge=0)
    damage_taken_on_team_percentage: float = Field(0.0, ge=0)
    gold_per_minute: float = Field(0.0, ge=0)
    vision_score_per_minute: float = Field(0.0, ge=0)
    effective_heal_and_shielding: float = Field(0.0, ge=0)
    max_cs_advantage_on_lane_opponent: float = Field(0.0)
    solo_kills: int = Field(0, ge=0)
    control_wards_placed: int = Field(0, ge=0)
    lane_minions_first_10_minutes: int = Field(0, ge=0, alias="laneMinionsFirst10Minutes")
    early_laning_phase_gold_exp_advantage: int = Field(0)
    laning_phase_gold_exp_advantage: int = Field(0)
    dragon_takedowns: int = Field(0, ge=0)
    baron_takedowns: int = Field(0, ge=0)
    rift_herald_takedowns: int = Field(0, ge=0)

    @property
    def epic_monster_takedowns(self) -> int:
        """Dragon + Baron + Rift Herald takedowns."""
        return self.dragon_takedowns + self.baron_takedowns + self.rift_herald_takedowns


class Participant(RiotContract):
    """Participant (player) information in a match."""

    # Identity
    puuid: str = Field(..., description="Player's PUUID")
    participant_id: int = Field(0, ge=0, le=16)
    riot_id_game_name: str = Field("", description="Riot ID game name")
    riot_id_tagline: str = Field("", description="Riot ID tagline")
    summoner_name: str = Field("")
    team_id: int = Field(..., description="100 (blue) or 200 (red)")

    # Champion and role
    champion_id: int = Field(0)
    champion_name: str = Field("")
    team_position: str = Field("", description="Assigned position (TOP, JUNGLE, MIDDLE, BOTTOM, UTILITY)")

    # Combat
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    total_damage_dealt_to_champions: int = Field(0, ge=0)
    total_damage_taken: int = Field(0, ge=0)
    damage_dealt_to_buildings: int = Field(0, ge=0)
    time_ccing_others: int = Field(0, ge=0, alias="timeCCingOthers", description="Seconds")
    total_time_spent_dead: int = Field(0, ge=0, description="Seconds")

    # Economy and farming
    gold_earned: int = Field(0, ge=0)
    total_minions_killed: int = Field(0, ge=0)
    neutral_minions_killed: int = Field(0, ge=0)

    # Vision
    vision_score: int = Field(0, ge=0)
    wards_placed: int = Field(0, ge=0)
    detector_wards_placed: int = Field(0, ge=0)

    win: bool = Field(False)
    challenges: Challenges | None = Field(None)

    @property
    def total_cs(self) -> int:
        """Lane minions plus neutral monsters."""
        return self.total_minions_killed + self.neutral_minions_killed


class MatchInfo(RiotContract):
    """Complete match information."""

    game_creation: int = Field(0, description="Game creation timestamp (epoch milliseconds)")
    game_duration: int = Field(..., description="Game duration in seconds")
    game_end_timestamp: int | None = Field(None, description="Game end timestamp (epoch milliseconds)")
    game_id: int = Field(0)
    game_mode: str = Field("")
    game_version: str = Field("")
    platform_id: str = Field("")
    queue_id: int = Field(0)

    participants: list[Participant] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)

    def get_participant_by_puuid(self, puuid: str) -> Participant | None:
        """Get participant by PUUID."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def get_team(self, team_id: int) -> Team | None:
        """Get team by ID."""
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def get_team_participants(self, team_id: int) -> list[Participant]:
        """Get all participants for a team."""
        return [p for p in self.participants if p.team_id == team_id]


class MatchMetadata(RiotContract):
    """Match metadata."""

    data_version: str = Field("")
    match_id: str = Field(..., description="Match ID")
    participants: list[str] = Field(default_factory=list, description="Participant PUUIDs")


class Match(RiotContract):
    """Complete match data from Riot API."""

    metadata: MatchMetadata
    info: MatchInfo
