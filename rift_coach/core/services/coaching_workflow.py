"""End-to-end "coach this player" use case.

Filters out matches already covered by the previous session, fetches the
remaining matches and timelines, runs the analysis and hands the result to
``CoachingService``.
"""

from __future__ import annotations

import asyncio
import logging

from rift_coach.config.settings import settings
from rift_coach.contracts.analysis import PlayerAnalysisParams
from rift_coach.contracts.coaching import CoachingOutcome, CoachingOutcomeStatus
from rift_coach.contracts.common import Queue
from rift_coach.contracts.match import Match
from rift_coach.contracts.summoner import RANKED_SOLO_QUEUE, LeagueEntry
from rift_coach.contracts.timeline import MatchTimeline
from rift_coach.core.analysis.aggregator import analyze_player
from rift_coach.core.errors import AccountNotFoundError, NoMatchesError, SessionLoadError
from rift_coach.core.ports import CoachingSessionStorePort, RiotAPIPort
from rift_coach.core.services.coaching_service import CoachingService, decode_match_ids

logger = logging.getLogger(__name__)


def select_ranked_solo_entry(entries: list[LeagueEntry]) -> LeagueEntry | None:
    """Pick the Ranked Solo/Duo entry, if the player has one."""
    for entry in entries:
        if entry.queue_type == RANKED_SOLO_QUEUE:
            return entry
    return None


class CoachingWorkflow:
    """Fetch, analyze and coach in one call."""

    def __init__(
        self,
        riot_api: RiotAPIPort,
        coaching_service: CoachingService,
        store: CoachingSessionStorePort | None = None,
    ) -> None:
        self.riot_api = riot_api
        self.coaching_service = coaching_service
        self.store = store

    async def coach_riot_id(
        self, game_name: str, tag_line: str, match_count: int | None = None
    ) -> CoachingOutcome:
        """Resolve a Riot ID and coach on its recent Ranked Solo matches.

        ``match_count`` defaults to ``COACH_MATCH_COUNT``.
        """
        account = await self.riot_api.get_account_by_riot_id(game_name, tag_line)
        if account is None:
            raise AccountNotFoundError(f"no account for {game_name}#{tag_line}")

        entries = await self.riot_api.get_league_entries(account.puuid)
        league = select_ranked_solo_entry(entries)

        match_ids = await self.riot_api.get_match_ids(
            account.puuid,
            count=match_count or settings.coach_match_count,
            queue=Queue.RANKED_SOLO_5x5.value,
        )
        if not match_ids:
            raise NoMatchesError("no matches found for this summoner")

        logger.info(
            "Coaching player",
            extra={
                "riot_id": account.riot_id,
                "rank": league.full_rank if league else "Unranked",
                "match_count": len(match_ids),
            },
        )
        return await self.run(account.puuid, account.game_name, account.tag_line, match_ids, league)

    async def run(
        self,
        puuid: str,
        game_name: str,
        tag_line: str,
        match_ids: list[str],
        league: LeagueEntry | None = None,
    ) -> CoachingOutcome:
        """Coach on the given matches (most recent first).

        Returns a ``NO_NEW_MATCHES`` outcome when every match was already
        analyzed in the previous session.

        Raises:
            NoMatchesError: none of the new matches could be fetched
        """
        seen = await self._previous_match_ids(puuid)
        new_match_ids = [match_id for match_id in match_ids if match_id not in seen]
        skipped = [match_id for match_id in match_ids if match_id in seen]

        if not new_match_ids:
            logger.info("No new matches since last coaching session", extra={"puuid": puuid})
            return CoachingOutcome(
                status=CoachingOutcomeStatus.NO_NEW_MATCHES,
                skipped_match_ids=skipped,
            )

        fetched = await self._fetch_all(new_match_ids)

        matches: list[Match] = []
        timelines: dict[str, MatchTimeline] = {}
        for match_id, (match, timeline) in zip(new_match_ids, fetched, strict=True):
            if match is None:
                logger.warning("Match not found, skipping", extra={"match_id": match_id})
                continue
            matches.append(match)
            if timeline is not None:
                timelines[match_id] = timeline

        if not matches:
            raise NoMatchesError("failed to fetch any match details")

        analysis = analyze_player(
            PlayerAnalysisParams(
                puuid=puuid,
                game_name=game_name,
                tag_line=tag_line,
                matches=matches,
                timelines=timelines,
                league=league,
            )
        )

        response = await self.coaching_service.coach(analysis, new_match_ids)
        return CoachingOutcome(
            status=CoachingOutcomeStatus.COACHED,
            response=response,
            skipped_match_ids=skipped,
        )

    async def _previous_match_ids(self, puuid: str) -> set[str]:
        if self.store is None:
            return set()
        try:
            previous = await self.store.get_latest_session(puuid)
        except Exception as e:
            raise SessionLoadError(f"get previous session: {e}") from e
        if previous is None:
            return set()
        return set(decode_match_ids(previous))

    async def _fetch_all(
        self, match_ids: list[str]
    ) -> list[tuple[Match | None, MatchTimeline | None]]:
        """Fetch matches concurrently; the first failure cancels the rest and is re-raised."""
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self._fetch(match_id)) for match_id in match_ids]
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None
        return [task.result() for task in tasks]

    async def _fetch(self, match_id: str) -> tuple[Match | None, MatchTimeline | None]:
        match = await self.riot_api.get_match(match_id)
        if match is None:
            return None, None

        try:
            timeline = await self.riot_api.get_match_timeline(match_id)
        except Exception:
            logger.warning("Timeline unavailable", extra={"match_id": match_id}, exc_info=True)
            timeline = None
        return match, timeline
