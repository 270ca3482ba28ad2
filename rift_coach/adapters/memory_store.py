"""In-process coaching session store.

Keeps sessions in insertion order per player. Useful for tests and for
running without PostgreSQL; nothing survives a restart.
"""

import asyncio
from datetime import UTC, datetime

from rift_coach.contracts.coaching import CoachingSession
from rift_coach.core.ports import CoachingSessionStorePort


class InMemoryCoachingSessionStore(CoachingSessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, list[CoachingSession]] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get_latest_session(self, puuid: str) -> CoachingSession | None:
        sessions = self._sessions.get(puuid)
        return sessions[-1] if sessions else None

    async def get_sessions(self, puuid: str) -> list[CoachingSession]:
        return list(self._sessions.get(puuid, []))

    async def save_session(self, session: CoachingSession) -> CoachingSession:
        async with self._lock:
            stored = session.model_copy(
                update={
                    "id": self._next_id,
                    "created_at": session.created_at or datetime.now(UTC),
                }
            )
            self._next_id += 1
            self._sessions.setdefault(session.puuid, []).append(stored)
        return stored
