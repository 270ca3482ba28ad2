"""Unit tests for Riot API adapter.

Tests mock the aiohttp session and focus on routing, status handling and
payload parsing.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from rift_coach.adapters.riot_api import RateLimitError, RiotAPIAdapter, RiotAPIError, regional_routing
from rift_coach.contracts import Account, LeagueEntry, Match, MatchTimeline


def _response(status: int, payload=None, headers=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=False)
    return response


class _SlowResponse:
    """Response context that stays open briefly and counts overlapping requests."""

    def __init__(self, tracker: dict, payload) -> None:
        self.tracker = tracker
        self.payload = payload

    async def __aenter__(self):
        self.tracker["in_flight"] += 1
        self.tracker["peak"] = max(self.tracker["peak"], self.tracker["in_flight"])
        await asyncio.sleep(0.01)
        return _response(200, self.payload)

    async def __aexit__(self, *exc_info) -> bool:
        self.tracker["in_flight"] -= 1
        return False


class TestRiotAPIAdapter:
    """Test suite for RiotAPIAdapter."""

    @pytest.fixture
    def adapter(self):
        """Create a RiotAPIAdapter instance for testing."""
        with patch("rift_coach.adapters.riot_api.settings") as mock_settings:
            mock_settings.riot_api_key = "test_api_key"
            mock_settings.riot_platform = "euw1"
            mock_settings.riot_request_timeout = 10
            mock_settings.riot_api_rate_limit_per_second = 20
            mock_settings.riot_api_rate_limit_per_two_minutes = 100
            mock_settings.riot_api_max_concurrency = 20
            adapter = RiotAPIAdapter()
            return adapter

    @pytest.fixture
    def session(self, adapter):
        async def _attach(*responses):
            session = MagicMock()
            session.closed = False
            session.get.side_effect = list(responses)
            adapter._session = session
            adapter._session_loop = asyncio.get_running_loop()
            return session

        return _attach

    def test_requires_api_key(self):
        with patch("rift_coach.adapters.riot_api.settings") as mock_settings:
            mock_settings.riot_api_key = None
            with pytest.raises(ValueError):
                RiotAPIAdapter()

    def test_regional_routing(self, adapter):
        assert adapter.region == "europe"
        assert regional_routing("NA1") == "americas"
        assert regional_routing("kr") == "asia"
        assert regional_routing("unknown") == "americas"

    @pytest.mark.asyncio
    async def test_get_account_by_riot_id(self, adapter, session):
        s = await session(_response(200, {"puuid": "p1", "gameName": "Hide on bush", "tagLine": "KR1"}))

        account = await adapter.get_account_by_riot_id("Hide on bush", "KR1")

        assert isinstance(account, Account)
        assert account.riot_id == "Hide on bush#KR1"
        url = s.get.call_args.args[0]
        assert url == (
            "https://europe.api.riotgames.com/riot/account/v1/accounts/by-riot-id/Hide%20on%20bush/KR1"
        )
        assert s.get.call_args.kwargs["headers"] == {"X-Riot-Token": "test_api_key"}

    @pytest.mark.asyncio
    async def test_get_account_not_found(self, adapter, session):
        await session(_response(404))

        assert await adapter.get_account_by_riot_id("Nobody", "000") is None

    @pytest.mark.asyncio
    async def test_get_league_entries_uses_platform_host(self, adapter, session):
        s = await session(
            _response(
                200,
                [{"queueType": "RANKED_SOLO_5x5", "tier": "GOLD", "rank": "II", "leaguePoints": 57}],
            )
        )

        entries = await adapter.get_league_entries("p1")

        assert entries == [
            LeagueEntry(queue_type="RANKED_SOLO_5x5", tier="GOLD", rank="II", league_points=57)
        ]
        assert s.get.call_args.args[0] == "https://euw1.api.riotgames.com/lol/league/v4/entries/by-puuid/p1"

    @pytest.mark.asyncio
    async def test_get_match_ids_params(self, adapter, session):
        s = await session(_response(200, ["EUW1_3", "EUW1_2"]))

        result = await adapter.get_match_ids("p1", count=2, queue=420)

        assert result == ["EUW1_3", "EUW1_2"]
        assert s.get.call_args.kwargs["params"] == {"start": 0, "count": 2, "queue": 420}

    @pytest.mark.asyncio
    async def test_get_match_ids_without_queue(self, adapter, session):
        s = await session(_response(200, []))

        assert await adapter.get_match_ids("p1") == []
        assert "queue" not in s.get.call_args.kwargs["params"]

    @pytest.mark.asyncio
    async def test_get_match(self, adapter, session, match_payload):
        await session(_response(200, match_payload(match_id="EUW1_77")))

        match = await adapter.get_match("EUW1_77")

        assert isinstance(match, Match)
        assert match.metadata.match_id == "EUW1_77"

    @pytest.mark.asyncio
    async def test_get_match_timeline(self, adapter, session, timeline_payload, frame_payload):
        s = await session(_response(200, timeline_payload(frames=[frame_payload(i * 60000) for i in range(3)])))

        timeline = await adapter.get_match_timeline("EUW1_1000")

        assert isinstance(timeline, MatchTimeline)
        assert len(timeline.info.frames) == 3
        assert s.get.call_args.args[0].endswith("/lol/match/v5/matches/EUW1_1000/timeline")

    @pytest.mark.asyncio
    async def test_rate_limit(self, adapter, session):
        await session(_response(429, headers={"Retry-After": "7"}))

        with pytest.raises(RateLimitError) as exc_info:
            await adapter.get_match("EUW1_1")

        assert exc_info.value.retry_after == 7
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_forbidden(self, adapter, session):
        await session(_response(403))

        with pytest.raises(RiotAPIError) as exc_info:
            await adapter.get_match("EUW1_1")

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_server_error(self, adapter, session):
        await session(_response(503, text="unavailable"))

        with pytest.raises(RiotAPIError) as exc_info:
            await adapter.get_match_ids("p1")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, adapter, session):
        s = await session()
        s.get.side_effect = aiohttp.ClientConnectionError("connection reset")

        with pytest.raises(RiotAPIError):
            await adapter.get_match("EUW1_1")

    @pytest.mark.asyncio
    async def test_close(self, adapter, session):
        s = await session()
        s.close = AsyncMock()

        await adapter.close()

        s.close.assert_awaited_once()
        assert adapter._session is None

    @pytest.mark.asyncio
    async def test_in_flight_requests_are_capped(self, match_payload):
        with patch("rift_coach.adapters.riot_api.settings") as mock_settings:
            mock_settings.riot_request_timeout = 10
            mock_settings.riot_api_rate_limit_per_second = 100
            mock_settings.riot_api_rate_limit_per_two_minutes = 100
            adapter = RiotAPIAdapter(api_key="test_api_key", platform="euw1", max_concurrency=2)

        tracker = {"in_flight": 0, "peak": 0}
        match_ids = [f"EUW1_{i}" for i in range(6)]
        session = MagicMock()
        session.closed = False
        session.get.side_effect = [_SlowResponse(tracker, match_payload(match_id=m)) for m in match_ids]
        adapter._session = session
        adapter._session_loop = asyncio.get_running_loop()

        matches = await asyncio.gather(*(adapter.get_match(m) for m in match_ids))

        assert sorted(m.metadata.match_id for m in matches) == sorted(match_ids)
        assert tracker["peak"] == 2
        assert tracker["in_flight"] == 0

    @pytest.mark.asyncio
    async def test_every_request_passes_the_rate_limiter(self, adapter, session):
        await session(_response(200, ["EUW1_1"]), _response(404))
        adapter._rate_limiter = MagicMock()
        adapter._rate_limiter.acquire = AsyncMock()

        await adapter.get_match_ids("p1")
        await adapter.get_match("EUW1_1")

        assert adapter._rate_limiter.acquire.await_count == 2
