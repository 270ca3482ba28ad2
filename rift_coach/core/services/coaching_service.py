"""Coaching session orchestration.

Decides between an initial and a follow-up session from the player's most
recent stored session, builds the prompts, calls the LLM once and appends
the new session to the store.
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from rift_coach.contracts.analysis import PlayerAnalysis
from rift_coach.contracts.coaching import (
    CoachingResponse,
    CoachingSession,
    PlayerProgress,
    TrendPoint,
)
from rift_coach.core import metrics
from rift_coach.core.errors import (
    CompletionError,
    SessionLoadError,
    SessionSaveError,
    SnapshotDecodeError,
    StoreNotConfiguredError,
)
from rift_coach.core.observability import llm_debug_wrapper
from rift_coach.core.ports import CoachingSessionStorePort, LLMPort
from rift_coach.prompts.coaching_prompts import (
    build_follow_up_system_prompt,
    build_initial_system_prompt,
    build_user_prompt,
)

logger = logging.getLogger(__name__)

_match_ids_adapter = TypeAdapter(list[str])


class CoachingService:
    """Runs coaching sessions and reports progress across them.

    Without a store every session is an initial one and nothing is persisted.
    """

    def __init__(self, llm: LLMPort, store: CoachingSessionStorePort | None = None) -> None:
        self.llm = llm
        self.store = store

    @llm_debug_wrapper(capture_result=False, capture_args=False, log_level="INFO")
    async def coach(self, analysis: PlayerAnalysis, match_ids: list[str]) -> CoachingResponse:
        """Run one coaching session.

        Args:
            analysis: Current player analysis
            match_ids: Analyzed match IDs, most recent first. The first one
                becomes the stored watermark.

        Raises:
            SessionLoadError: previous session could not be read
            SnapshotDecodeError: previous snapshot is corrupt
            CompletionError: the LLM call failed
            SessionSaveError: advice was generated but not persisted
        """
        previous = await self._load_previous_session(analysis.puuid)
        is_follow_up = previous is not None
        mode = "follow_up" if is_follow_up else "initial"

        if previous is not None:
            previous_analysis = decode_snapshot(previous)
            system_prompt = build_follow_up_system_prompt(analysis, previous_analysis, previous.advice)
        else:
            system_prompt = build_initial_system_prompt(analysis)
        user_prompt = build_user_prompt(is_follow_up)

        try:
            advice = await self.llm.complete(system_prompt, user_prompt)
        except Exception as e:
            metrics.mark_session(mode, "failed")
            raise CompletionError(f"llm complete: {e}") from e

        if self.store is not None:
            session = CoachingSession(
                puuid=analysis.puuid,
                latest_match_id=match_ids[0] if match_ids else "",
                match_ids=_match_ids_adapter.dump_json(match_ids).decode(),
                analysis=analysis.model_dump_json(),
                advice=advice,
            )
            try:
                await self.store.save_session(session)
            except Exception as e:
                metrics.mark_session(mode, "failed")
                raise SessionSaveError(f"save session: {e}", advice=advice) from e

        metrics.mark_session(mode, "success")
        logger.info(
            "Coaching session completed",
            extra={"puuid": analysis.puuid, "mode": mode, "new_matches": len(match_ids)},
        )

        return CoachingResponse(
            advice=advice,
            is_follow_up=is_follow_up,
            new_matches=len(match_ids),
            analysis=analysis,
        )

    async def get_progress(self, puuid: str) -> PlayerProgress:
        """Build trend data from every stored session, oldest first.

        Sessions whose snapshot cannot be decoded are left out of the trend
        but still counted in ``sessions``.
        """
        if self.store is None:
            raise StoreNotConfiguredError("a session store is required for progress tracking")

        try:
            sessions = await self.store.get_sessions(puuid)
        except Exception as e:
            raise SessionLoadError(f"get coaching sessions: {e}") from e

        game_name = ""
        tag_line = ""
        identity_found = False
        trend: list[TrendPoint] = []

        for session in sessions:
            try:
                snapshot = decode_snapshot(session)
            except SnapshotDecodeError:
                logger.warning(
                    "Skipping undecodable session snapshot",
                    extra={"puuid": puuid, "session_id": session.id},
                )
                continue

            if not identity_found:
                game_name = snapshot.game_name
                tag_line = snapshot.tag_line
                identity_found = True

            trend.append(
                TrendPoint(
                    session_date=session.created_at,
                    match_count=len(decode_match_ids(session)),
                    win_rate=snapshot.win_rate,
                    tier=snapshot.tier,
                    rank=snapshot.rank,
                    averages=snapshot.averages,
                )
            )

        return PlayerProgress(
            puuid=puuid,
            game_name=game_name,
            tag_line=tag_line,
            sessions=len(sessions),
            trend=trend,
        )

    async def _load_previous_session(self, puuid: str) -> CoachingSession | None:
        if self.store is None:
            return None
        try:
            return await self.store.get_latest_session(puuid)
        except Exception as e:
            raise SessionLoadError(f"get previous session: {e}") from e


def decode_snapshot(session: CoachingSession) -> PlayerAnalysis:
    """Decode the PlayerAnalysis stored with a session."""
    try:
        return PlayerAnalysis.model_validate_json(session.analysis)
    except ValidationError as e:
        raise SnapshotDecodeError(f"unmarshal previous analysis: {e}") from e


def decode_match_ids(session: CoachingSession) -> list[str]:
    """Decode the stored match ID list; an unreadable list counts as empty."""
    try:
        return _match_ids_adapter.validate_json(session.match_ids)
    except ValidationError:
        return []


__all__ = ["CoachingService", "decode_match_ids", "decode_snapshot"]
