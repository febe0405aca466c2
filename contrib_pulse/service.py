"""Core orchestration logic for Contribution Pulse."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import Settings
from .dates import compute_window, format_for_display
from .filters import filter_to_last_month, to_active_date_set
from .github_client import GitHubClient, Sleep
from .table import empty_row, header, row

logger = logging.getLogger(__name__)


class InputUnavailableError(RuntimeError):
    """Raised when the list of users cannot be read."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Cannot read users from {path}: {cause}")
        self.path = path
        self.cause = cause


class ContributionPulseService:
    """Fetches users in paced batches and emits one table row per user."""

    def __init__(
        self,
        settings: Settings,
        client: GitHubClient,
        *,
        emit: Callable[[str], None] = print,
        sleep: Sleep = asyncio.sleep,
        today: Optional[date] = None,
    ) -> None:
        self.settings = settings
        self.client = client
        self.emit = emit
        self._sleep = sleep
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    async def process_user(self, username: str, window: Sequence[str]) -> str:
        width = self.settings.username_width
        try:
            result = await self.client.fetch_contribution_days(username)
            if not result.ok:
                logger.error("Failed to process %s: %s", username, result.error)
                return empty_row(username, window, width)
            today = date.fromisoformat(window[-1])
            active = to_active_date_set(filter_to_last_month(result.days, today))
            return row(username, active, window, width)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to process %s: %s", username, exc)
            return empty_row(username, window, width)

    async def process_batch(self, usernames: Sequence[str], window: Sequence[str]) -> List[str]:
        rows: List[str] = []
        for username in usernames:
            rows.append(await self.process_user(username, window))
        return rows

    async def run(self, usernames: Sequence[str]) -> int:
        """Emit the header, then each batch's rows as soon as the batch is done."""

        window = compute_window(self.today)
        for line in header(format_for_display(window), self.settings.username_width):
            self.emit(line)

        batches = chunked(usernames, self.settings.batch_size)
        emitted = 0
        for index, batch in enumerate(batches, start=1):
            logger.info("Processing batch %s/%s (%s users)", index, len(batches), len(batch))
            for line in await self.process_batch(batch, window):
                self.emit(line)
                emitted += 1
            if index < len(batches):
                logger.info("Waiting %s seconds before the next batch", self.settings.batch_delay_seconds)
                await self._sleep(self.settings.batch_delay_seconds)
        return emitted


def chunked(items: Sequence[str], size: int) -> List[List[str]]:
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [list(items[start:start + size]) for start in range(0, len(items), size)]


def load_usernames(path: Path) -> List[str]:
    try:
        with path.open(encoding="utf-8") as handle:
            return [line.strip() for line in handle if line.strip()]
    except (OSError, UnicodeDecodeError) as exc:
        raise InputUnavailableError(path, exc) from exc


__all__ = [
    "ContributionPulseService",
    "InputUnavailableError",
    "chunked",
    "load_usernames",
]
