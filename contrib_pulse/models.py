"""Dataclasses representing Contribution Pulse domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .github_client import FetchOutcomeError


@dataclass(slots=True)
class ContributionDay:
    date: str
    count: int

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> ContributionDay:
        return cls(
            date=str(payload["date"]),
            count=int(payload.get("contributionCount") or 0),
        )


@dataclass(slots=True)
class FetchResult:
    """Outcome of fetching one user's contribution calendar."""

    username: str
    days: list[ContributionDay] = field(default_factory=list)
    total_contributions: int | None = None
    error: FetchOutcomeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["ContributionDay", "FetchResult"]
