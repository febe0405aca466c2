"""HTTP client for the GitHub GraphQL contribution calendar."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Dict, List, Optional

import httpx

from .config import GITHUB_GRAPHQL_URL
from .models import ContributionDay, FetchResult

logger = logging.getLogger(__name__)

CONTRIBUTION_QUERY = """
query($userName: String!) {
  user(login: $userName) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
          }
        }
      }
    }
  }
}
"""

Sleep = Callable[[float], Awaitable[Any]]


class TransportError(RuntimeError):
    """Raised when a single GraphQL request fails at the HTTP layer."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchOutcomeError(RuntimeError):
    """All attempts to fetch a user's calendar failed."""

    def __init__(self, username: str, cause: Exception) -> None:
        super().__init__(f"Could not fetch contributions for {username}: {cause}")
        self.username = username
        self.cause = cause


class GitHubClient:
    """Async wrapper around the GitHub GraphQL endpoint used by Contribution Pulse."""

    def __init__(
        self,
        token: str,
        *,
        graphql_url: str = GITHUB_GRAPHQL_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 2.0,
        sleep: Sleep = asyncio.sleep,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.graphql_url = graphql_url
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _post_query(self, username: str) -> Dict[str, Any]:
        body = {"query": CONTRIBUTION_QUERY, "variables": {"userName": username}}
        try:
            response = await self._client.post(self.graphql_url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"request failed: {exc}") from exc
        if not response.is_success:
            raise TransportError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError("response body is not valid JSON") from exc

    async def fetch_contribution_days(self, username: str) -> FetchResult:
        """Fetch the contribution calendar for ``username``.

        Transport failures are retried up to ``max_retries`` times, waiting
        ``attempt * backoff_seconds`` between attempts. When every attempt
        fails the returned result carries a :class:`FetchOutcomeError`
        instead of raising.
        """

        attempt = 0
        while True:
            attempt += 1
            try:
                payload = await self._post_query(username)
            except TransportError as exc:
                logger.warning("Attempt %s failed for %s: %s", attempt, username, exc)
                if attempt >= self.max_retries:
                    logger.error("All %s attempts failed for %s", self.max_retries, username)
                    return FetchResult(username=username, error=FetchOutcomeError(username, exc))
                wait = attempt * self.backoff_seconds
                logger.info("Retrying %s in %s seconds", username, wait)
                await self._sleep(wait)
                continue
            return parse_calendar(username, payload)


def parse_calendar(username: str, payload: Any) -> FetchResult:
    """Flatten ``weeks[].contributionDays[]`` from a GraphQL response.

    A payload without the nested calendar (unknown login, GraphQL errors)
    is reported as a user with no contributions.
    """

    try:
        calendar = payload["data"]["user"]["contributionsCollection"]["contributionCalendar"]
        weeks = calendar["weeks"]
    except (KeyError, TypeError):
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            messages = "; ".join(str(err.get("message", err)) for err in errors if isinstance(err, dict))
            logger.warning("No contribution calendar for %s: %s", username, messages or errors)
        else:
            logger.warning("No contribution calendar for %s", username)
        return FetchResult(username=username)

    days: List[ContributionDay] = [
        ContributionDay.from_api(day)
        for week in weeks or []
        for day in week.get("contributionDays", [])
    ]
    return FetchResult(
        username=username,
        days=days,
        total_contributions=calendar.get("totalContributions"),
    )


__all__ = [
    "CONTRIBUTION_QUERY",
    "FetchOutcomeError",
    "GitHubClient",
    "TransportError",
    "parse_calendar",
]
