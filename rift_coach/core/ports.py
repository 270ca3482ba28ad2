"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
All external dependencies must implement these interfaces.
"""

from abc import ABC, abstractmethod

from rift_coach.contracts.coaching import CoachingSession
from rift_coach.contracts.match import Match
from rift_coach.contracts.summoner import Account, LeagueEntry
from rift_coach.contracts.timeline import MatchTimeline


class RiotAPIPort(ABC):
    """Port for Riot Games API operations."""

    @abstractmethod
    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Account | None:
        """Resolve a Riot ID (name#tag) to an account (Account-V1)."""
        pass

    @abstractmethod
    async def get_league_entries(self, puuid: str) -> list[LeagueEntry]:
        """Get ranked league entries for a player (League-V4)."""
        pass

    @abstractmethod
    async def get_match_ids(self, puuid: str, count: int = 20, queue: int | None = None) -> list[str]:
        """Get recent match IDs for a player, most recent first."""
        pass

    @abstractmethod
    async def get_match(self, match_id: str) -> Match | None:
        """Get match details from Match-V5 API. None when not found."""
        pass

    @abstractmethod
    async def get_match_timeline(self, match_id: str) -> MatchTimeline | None:
        """Get match timeline from Match-V5 API. None when not found."""
        pass


class LLMPort(ABC):
    """Port for Large Language Model operations."""

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Generate a completion for the given system and user prompts."""
        pass


class CoachingSessionStorePort(ABC):
    """Port for append-only coaching session persistence."""

    @abstractmethod
    async def get_latest_session(self, puuid: str) -> CoachingSession | None:
        """Get the most recent session for a player, or None."""
        pass

    @abstractmethod
    async def get_sessions(self, puuid: str) -> list[CoachingSession]:
        """Get all sessions for a player, oldest first."""
        pass

    @abstractmethod
    async def save_session(self, session: CoachingSession) -> CoachingSession:
        """Append a session and return it with its assigned id and timestamp."""
        pass
