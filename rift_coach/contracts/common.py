"""
Common data types and base models for rift-coach.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Region(str, Enum):
    """Riot API regional routing values."""

    AMERICAS = "americas"
    EUROPE = "europe"
    ASIA = "asia"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API Platforms (game servers)."""

    BR1 = "br1"  # Brazil
    EUN1 = "eun1"  # Europe Nordic & East
    EUW1 = "euw1"  # Europe West
    JP1 = "jp1"  # Japan
    KR = "kr"  # Korea
    LA1 = "la1"  # Latin America North
    LA2 = "la2"  # Latin America South
    ME1 = "me1"  # Middle East
    NA1 = "na1"  # North America
    OC1 = "oc1"  # Oceania
    PH2 = "ph2"  # Philippines
    RU = "ru"  # Russia
    SG2 = "sg2"  # Singapore
    TH2 = "th2"  # Thailand
    TR1 = "tr1"  # Turkey
    TW2 = "tw2"  # Taiwan
    VN2 = "vn2"  # Vietnam


# Match-V5 and Account-V1 are served from regional clusters, not platforms.
PLATFORM_TO_REGION: dict[str, Region] = {
    Platform.BR1.value: Region.AMERICAS,
    Platform.LA1.value: Region.AMERICAS,
    Platform.LA2.value: Region.AMERICAS,
    Platform.NA1.value: Region.AMERICAS,
    Platform.EUN1.value: Region.EUROPE,
    Platform.EUW1.value: Region.EUROPE,
    Platform.ME1.value: Region.EUROPE,
    Platform.RU.value: Region.EUROPE,
    Platform.TR1.value: Region.EUROPE,
    Platform.JP1.value: Region.ASIA,
    Platform.KR.value: Region.ASIA,
    Platform.OC1.value: Region.SEA,
    Platform.PH2.value: Region.SEA,
    Platform.SG2.value: Region.SEA,
    Platform.TH2.value: Region.SEA,
    Platform.TW2.value: Region.SEA,
    Platform.VN2.value: Region.SEA,
}


class Queue(int, Enum):
    """Game queue types."""

    RANKED_SOLO_5x5 = 420
    RANKED_FLEX_SR = 440
    NORMAL_DRAFT_PICK = 400
    ARAM = 450


class Tier(str, Enum):
    """Ranked tiers."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"


class Position(BaseModel):
    """2D position on the map."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    x: int = Field(0, description="X coordinate on the map")
    y: int = Field(0, description="Y coordinate on the map")


class BaseContract(BaseModel):
    """Base model for derived contracts produced by rift-coach itself."""

    model_config = ConfigDict(
        # Derived records are never mutated after creation
        frozen=True,
        use_enum_values=True,
        extra="forbid",
    )


class RiotContract(BaseModel):
    """Base model for raw Riot API payloads.

    Riot responses are camelCase and gain new fields every patch, so unknown
    keys are ignored instead of rejected. Fields can be populated either by
    their camelCase alias or by their python name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )
