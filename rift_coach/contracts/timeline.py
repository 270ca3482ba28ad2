"""
Match Timeline data contracts for Riot API Match-V5.
This is the raw input for lane phase analysis.
"""

from pydantic import Field

from .common import Position, RiotContract

CHAMPION_KILL = "CHAMPION_KILL"


class ParticipantFrame(RiotContract):
    """Participant state at a specific frame."""

    participant_id: int = Field(0, ge=0, le=16)
    current_gold: int = Field(0)
    total_gold: int = Field(0)
    jungle_minions_killed: int = Field(0)
    minions_killed: int = Field(0)
    level: int = Field(1, ge=1, le=30)
    xp: int = Field(0)
    position: Position = Field(default_factory=Position)

    @property
    def total_cs(self) -> int:
        """Lane minions plus jungle monsters."""
        return self.minions_killed + self.jungle_minions_killed


class TimelineEvent(RiotContract):
    """A discrete game event. Fields depend on ``type``."""

    type: str = Field(..., description="Event type, e.g. CHAMPION_KILL")
    timestamp: int = Field(0, description="Milliseconds since game start")
    participant_id: int | None = Field(None)
    killer_id: int | None = Field(None)
    victim_id: int | None = Field(None)
    assisting_participant_ids: list[int] = Field(default_factory=list)
    position: Position | None = Field(None)


class Frame(RiotContract):
    """A single frame in the match timeline."""

    timestamp: int = Field(..., description="Frame timestamp in milliseconds")
    participant_frames: dict[str, ParticipantFrame] = Field(
        default_factory=dict, description="Participant states indexed by participant ID string"
    )
    events: list[TimelineEvent] = Field(
        default_factory=list, description="Events that occurred during this frame"
    )


class TimelineParticipant(RiotContract):
    """Participant mapping in timeline."""

    participant_id: int = Field(..., ge=1, le=16)
    puuid: str = Field(..., description="Player's PUUID")


class TimelineInfo(RiotContract):
    """Timeline information containing frames and metadata."""

    frame_interval: int = Field(60000, description="Milliseconds between frames (usually 60000)")
    frames: list[Frame] = Field(default_factory=list, description="List of all frames in the match")
    game_id: int = Field(0)
    participants: list[TimelineParticipant] = Field(
        default_factory=list, description="Participant ID to PUUID mapping"
    )


class TimelineMetadata(RiotContract):
    """Timeline metadata."""

    data_version: str = Field("")
    match_id: str = Field(..., description="Match ID")
    participants: list[str] = Field(default_factory=list)


class MatchTimeline(RiotContract):
    """Complete match timeline from Riot API Match-V5."""

    metadata: TimelineMetadata
    info: TimelineInfo

    def get_participant_by_puuid(self, puuid: str) -> int | None:
        """Get participant ID by PUUID."""
        for participant in self.info.participants:
            if participant.puuid == puuid:
                return participant.participant_id
        return None

    def get_events_by_type(self, event_type: str) -> list[TimelineEvent]:
        """Get all events of a specific type, in timeline order."""
        events = []
        for frame in self.info.frames:
            for event in frame.events:
                if event.type == event_type:
                    events.append(event)
        return events
