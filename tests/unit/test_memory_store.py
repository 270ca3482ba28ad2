"""Unit tests for the in-process session store."""

from datetime import UTC, datetime

import pytest

from rift_coach.adapters.memory_store import InMemoryCoachingSessionStore
from rift_coach.contracts.coaching import CoachingSession


@pytest.mark.asyncio
async def test_save_assigns_id_and_timestamp() -> None:
    store = InMemoryCoachingSessionStore()

    first = await store.save_session(CoachingSession(puuid="p1", analysis="{}"))
    second = await store.save_session(CoachingSession(puuid="p2", analysis="{}"))

    assert (first.id, second.id) == (1, 2)
    assert first.created_at is not None
    assert first.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_existing_timestamp_is_kept() -> None:
    store = InMemoryCoachingSessionStore()
    created = datetime(2024, 1, 1, tzinfo=UTC)

    saved = await store.save_session(CoachingSession(puuid="p1", analysis="{}", created_at=created))

    assert saved.created_at == created


@pytest.mark.asyncio
async def test_latest_and_history_per_player() -> None:
    store = InMemoryCoachingSessionStore()
    await store.save_session(CoachingSession(puuid="p1", analysis="{}", advice="first"))
    await store.save_session(CoachingSession(puuid="p2", analysis="{}", advice="other"))
    await store.save_session(CoachingSession(puuid="p1", analysis="{}", advice="second"))

    latest = await store.get_latest_session("p1")
    history = await store.get_sessions("p1")

    assert latest.advice == "second"
    assert [s.advice for s in history] == ["first", "second"]
    assert await store.get_latest_session("unknown") is None
    assert await store.get_sessions("unknown") == []


@pytest.mark.asyncio
async def test_history_is_a_copy() -> None:
    store = InMemoryCoachingSessionStore()
    await store.save_session(CoachingSession(puuid="p1", analysis="{}"))

    history = await store.get_sessions("p1")
    history.clear()

    assert len(await store.get_sessions("p1")) == 1
