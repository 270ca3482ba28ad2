"""Coaching session repository using asyncpg for PostgreSQL.

Sessions are append-only: the repository inserts and reads, never updates
or deletes. ``match_ids`` and ``analysis`` are stored as JSONB.
"""

import json
import logging
from typing import Any

import asyncpg

from rift_coach.config.settings import settings
from rift_coach.contracts.coaching import CoachingSession
from rift_coach.core.observability import llm_debug_wrapper
from rift_coach.core.ports import CoachingSessionStorePort

logger = logging.getLogger(__name__)


class SessionStoreError(Exception):
    """Raised when the session store cannot complete a read or write."""

    pass


_SESSION_COLUMNS = "id, puuid, latest_match_id, match_ids, analysis, advice, created_at"
_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class CoachingSessionRepository(CoachingSessionStorePort):
    """PostgreSQL-backed coaching session store.

    Features:
    - Async connection pooling
    - JSONB snapshot columns
    - Timezone-aware timestamps
    """

    def __init__(self, dsn: str | None = None) -> None:
        self._dsn = dsn or settings.database_url
        self._pool: Any = None  # asyncpg.Pool (untyped library)
        logger.info("Coaching session repository initialized")

    async def connect(self) -> None:
        """Create database connection pool and ensure the schema exists.

        This should be called once at application startup.
        """
        if self._pool is not None:
            logger.warning("Database pool already exists")
            return

        if not self._dsn:
            raise ValueError("DATABASE_URL is required for the coaching session repository")

        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=settings.database_pool_min_size,
                max_size=settings.database_pool_size,
                max_inactive_connection_lifetime=300,
                command_timeout=settings.database_pool_timeout,
            )
            logger.info("Database connection pool created successfully")

            await self._initialize_schema()

        except Exception as e:
            logger.error(f"Failed to create database pool: {e}")
            raise

    async def disconnect(self) -> None:
        """Close database connection pool.

        This should be called at application shutdown.
        """
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed")

    async def _initialize_schema(self) -> None:
        if not self._pool:
            raise RuntimeError("Database pool not initialized")

        async with self._pool.acquire() as conn:
            await conn.execute(
                """
                CREATE TABLE IF NOT EXISTS coaching_sessions (
                    id BIGSERIAL PRIMARY KEY,
                    puuid VARCHAR(78) NOT NULL,
                    latest_match_id VARCHAR(255) NOT NULL DEFAULT '',
                    match_ids JSONB NOT NULL DEFAULT '[]'::jsonb,
                    analysis JSONB NOT NULL,
                    advice TEXT NOT NULL DEFAULT '',
                    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                );

                CREATE INDEX IF NOT EXISTS idx_coaching_sessions_puuid_created
                ON coaching_sessions(puuid, created_at);
            """
            )

    def _require_pool(self) -> Any:
        if not self._pool:
            raise SessionStoreError("Database pool not initialized")
        return self._pool

    @llm_debug_wrapper(capture_result=False, capture_args=True, add_metadata={"layer": "adapter"})
    async def get_latest_session(self, puuid: str) -> CoachingSession | None:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_SESSION_COLUMNS}
                    FROM coaching_sessions
                    WHERE puuid = $1
                    ORDER BY created_at DESC, id DESC
                    LIMIT 1
                    """,
                    puuid,
                )
        except _STORE_ERRORS as e:
            logger.error(f"Error fetching latest coaching session for {puuid}: {e}")
            raise SessionStoreError(f"get latest coaching session: {e}") from e

        return _row_to_session(row) if row else None

    @llm_debug_wrapper(capture_result=False, capture_args=True, add_metadata={"layer": "adapter"})
    async def get_sessions(self, puuid: str) -> list[CoachingSession]:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_SESSION_COLUMNS}
                    FROM coaching_sessions
                    WHERE puuid = $1
                    ORDER BY created_at ASC, id ASC
                    """,
                    puuid,
                )
        except _STORE_ERRORS as e:
            logger.error(f"Error fetching coaching sessions for {puuid}: {e}")
            raise SessionStoreError(f"get coaching sessions: {e}") from e

        return [_row_to_session(row) for row in rows]

    @llm_debug_wrapper(capture_result=False, capture_args=False, add_metadata={"layer": "adapter"})
    async def save_session(self, session: CoachingSession) -> CoachingSession:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO coaching_sessions (
                        puuid, latest_match_id, match_ids, analysis, advice
                    ) VALUES ($1, $2, $3::jsonb, $4::jsonb, $5)
                    RETURNING id, created_at
                    """,
                    session.puuid,
                    session.latest_match_id,
                    session.match_ids,
                    session.analysis,
                    session.advice,
                )
        except _STORE_ERRORS as e:
            logger.error(f"Failed saving coaching session for {session.puuid}: {e}")
            raise SessionStoreError(f"save coaching session: {e}") from e

        logger.info(f"Saved coaching session {row['id']} for {session.puuid}")
        return session.model_copy(update={"id": row["id"], "created_at": row["created_at"]})


def _row_to_session(row: Any) -> CoachingSession:
    return CoachingSession(
        id=row["id"],
        puuid=row["puuid"],
        latest_match_id=row["latest_match_id"],
        match_ids=_jsonb_text(row["match_ids"]),
        analysis=_jsonb_text(row["analysis"]),
        advice=row["advice"],
        created_at=row["created_at"],
    )


def _jsonb_text(value: Any) -> str:
    # asyncpg returns JSONB as text unless a codec is registered
    if isinstance(value, str):
        return value
    return json.dumps(value)
