"""Domain exceptions for analysis and coaching.

Analysis errors describe bad input data; the aggregator recovers from the
per-match ones. Coaching errors wrap collaborator failures (LLM, session
store) so callers can tell a lost read from a lost write.
"""


class AnalysisError(Exception):
    """Base class for input-data errors raised by the analysis layer."""


class MatchTooShortError(AnalysisError):
    """Match ended before the minimum duration (remake)."""

    def __init__(self, match_id: str, game_duration: int) -> None:
        super().__init__(f"Match {match_id} too short: {game_duration}s")
        self.match_id = match_id
        self.game_duration = game_duration


class ParticipantNotFoundError(AnalysisError):
    """The player does not appear in the match or timeline."""

    def __init__(self, match_id: str, puuid: str) -> None:
        super().__init__(f"Participant {puuid} not found in match {match_id}")
        self.match_id = match_id
        self.puuid = puuid


class NoMatchesError(AnalysisError):
    """No matches were supplied."""


class NoValidMatchesError(AnalysisError):
    """Every supplied match was skipped during extraction."""


class CoachingError(Exception):
    """Base class for coaching session failures."""


class SessionLoadError(CoachingError):
    """The previous session could not be read from the store."""


class SessionSaveError(CoachingError):
    """Advice was generated but the session could not be persisted.

    The advice is kept on the exception so it can still be shown.
    """

    def __init__(self, message: str, advice: str) -> None:
        super().__init__(message)
        self.advice = advice


class CompletionError(CoachingError):
    """The LLM completion failed."""


class SnapshotDecodeError(CoachingError):
    """A stored analysis snapshot could not be decoded."""


class StoreNotConfiguredError(CoachingError):
    """An operation needs a session store but none was configured."""


class AccountNotFoundError(CoachingError):
    """The Riot ID does not resolve to an account."""
