"""Riot API adapter over aiohttp.

Provides:
- Account-V1 by Riot ID (regional routing)
- League-V4 entries by PUUID (platform routing)
- Match-V5 IDs/Match/Timeline (regional routing)

Implements RiotAPIPort with consistent async semantics and session reuse.
404 maps to ``None``; every other non-200 status raises. Requests are held
back by a two-window rate limiter and a cap on in-flight calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from rift_coach.adapters.rate_limiter import SlidingWindowRateLimiter
from rift_coach.config.settings import settings
from rift_coach.contracts.common import PLATFORM_TO_REGION, Region
from rift_coach.contracts.match import Match
from rift_coach.contracts.summoner import Account, LeagueEntry
from rift_coach.contracts.timeline import MatchTimeline
from rift_coach.core import metrics
from rift_coach.core.observability import trace_adapter
from rift_coach.core.ports import RiotAPIPort


class RiotAPIError(Exception):
    def __init__(
        self, message: str, status_code: int | None = None, retry_after: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after


class RateLimitError(RiotAPIError):
    def __init__(self, retry_after: int) -> None:
        super().__init__("Rate limit exceeded", status_code=429, retry_after=retry_after)


logger = logging.getLogger(__name__)


class RiotAPIAdapter(RiotAPIPort):
    def __init__(
        self,
        api_key: str | None = None,
        platform: str | None = None,
        timeout: int | None = None,
        max_concurrency: int | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        self.api_key = api_key or settings.riot_api_key
        if not self.api_key:
            raise ValueError("RIOT_API_KEY is required for the Riot API adapter")
        self.platform = (platform or settings.riot_platform).lower()
        self.region = regional_routing(self.platform)
        self.timeout = timeout or settings.riot_request_timeout
        self._semaphore = asyncio.Semaphore(max_concurrency or settings.riot_api_max_concurrency)
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            [
                (settings.riot_api_rate_limit_per_second, 1.0),
                (settings.riot_api_rate_limit_per_two_minutes, 120.0),
            ]
        )

        self._session: aiohttp.ClientSession | None = None
        self._session_loop: asyncio.AbstractEventLoop | None = None
        logger.info(
            "Riot API adapter initialized",
            extra={"platform": self.platform, "region": self.region},
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        needs_new_session = (
            self._session is None
            or getattr(self._session, "closed", True)
            or self._session_loop is None
            or self._session_loop is not loop
        )
        if needs_new_session:
            if self._session and not getattr(self._session, "closed", True):
                try:
                    await self._session.close()
                except Exception:
                    logger.warning("Failed to close stale Riot API session", exc_info=True)
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._session_loop = loop
        return self._session  # type: ignore[return-value]

    async def close(self) -> None:
        try:
            if self._session and not self._session.closed:
                await self._session.close()
        finally:
            self._session = None
            self._session_loop = None

    @property
    def _regional_base(self) -> str:
        return f"https://{self.region}.api.riotgames.com"

    @property
    def _platform_base(self) -> str:
        return f"https://{self.platform}.api.riotgames.com"

    async def _get_json(self, url: str, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        headers = {"X-Riot-Token": self.api_key}
        session = await self._ensure_session()
        async with self._semaphore:
            await self._rate_limiter.acquire()
            return await self._request(session, url, endpoint, headers, params)

    async def _request(
        self,
        session: aiohttp.ClientSession,
        url: str,
        endpoint: str,
        headers: dict[str, str],
        params: dict[str, Any] | None,
    ) -> Any:
        try:
            async with session.get(url, headers=headers, params=params) as resp:
                if resp.status == 200:
                    return await resp.json()
                if resp.status == 404:
                    return None
                if resp.status == 429:
                    metrics.mark_riot_429()
                    raise RateLimitError(int(resp.headers.get("Retry-After", "60")))
                if resp.status == 403:
                    metrics.mark_external_error("riot", "403")
                    raise RiotAPIError("Forbidden: Check API key permissions", status_code=403)
                body = await resp.text()
                metrics.mark_external_error("riot", str(resp.status))
                logger.error(f"{endpoint} API error {resp.status}: {body}")
                raise RiotAPIError(f"{endpoint} API error {resp.status}", status_code=resp.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            metrics.mark_external_error("riot", type(e).__name__)
            raise RiotAPIError(f"{endpoint} request failed: {e}") from e

    @trace_adapter
    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Account | None:
        url = (
            f"{self._regional_base}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name)}/{quote(tag_line)}"
        )
        data = await self._get_json(url, "Account")
        return Account.model_validate(data) if data else None

    @trace_adapter
    async def get_league_entries(self, puuid: str) -> list[LeagueEntry]:
        url = f"{self._platform_base}/lol/league/v4/entries/by-puuid/{puuid}"
        data = await self._get_json(url, "League")
        if not isinstance(data, list):
            return []
        return [LeagueEntry.model_validate(entry) for entry in data]

    @trace_adapter
    async def get_match_ids(self, puuid: str, count: int = 20, queue: int | None = None) -> list[str]:
        url = f"{self._regional_base}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        params: dict[str, Any] = {"start": 0, "count": max(1, min(count, 100))}
        if queue is not None:
            params["queue"] = queue
        data = await self._get_json(url, "Match IDs", params=params)
        return [str(m) for m in data] if isinstance(data, list) else []

    @trace_adapter
    async def get_match(self, match_id: str) -> Match | None:
        url = f"{self._regional_base}/lol/match/v5/matches/{match_id}"
        data = await self._get_json(url, "Match details")
        return Match.model_validate(data) if data else None

    @trace_adapter
    async def get_match_timeline(self, match_id: str) -> MatchTimeline | None:
        url = f"{self._regional_base}/lol/match/v5/matches/{match_id}/timeline"
        data = await self._get_json(url, "Timeline")
        return MatchTimeline.model_validate(data) if data else None


def regional_routing(platform: str) -> str:
    """Map a platform (e.g. ``euw1``) to its regional cluster."""
    return PLATFORM_TO_REGION.get(platform.lower(), Region.AMERICAS).value
