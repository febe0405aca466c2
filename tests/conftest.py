from __future__ import annotations

from pathlib import Path

import pytest

from contrib_pulse.config import Settings

ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_GRAPHQL_URL",
    "CONTRIB_PULSE_USERS_FILE",
    "CONTRIB_PULSE_ENV",
    "BATCH_SIZE",
    "BATCH_DELAY_SECONDS",
    "MAX_RETRIES",
    "RETRY_BACKOFF_SECONDS",
    "USERNAME_WIDTH",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
)


class RecordingSleep:
    def __init__(self, events: list | None = None) -> None:
        self.calls: list[float] = []
        self.events = events

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.events is not None:
            self.events.append(("sleep", seconds))


def calendar_payload(days: list[tuple[str, int]], per_week: int = 7) -> dict:
    weeks = [
        {
            "contributionDays": [
                {"date": day, "contributionCount": count}
                for day, count in days[start:start + per_week]
            ]
        }
        for start in range(0, len(days), per_week)
    ]
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": sum(count for _, count in days),
                        "weeks": weeks,
                    }
                }
            }
        }
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        github_token="test-token",
        users_file=tmp_path / "users.txt",
        batch_delay_seconds=60.0,
    )
