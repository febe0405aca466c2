"""Configuration helpers for Contribution Pulse."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    github_token: str
    users_file: Path
    graphql_url: str = GITHUB_GRAPHQL_URL
    batch_size: int = 50
    batch_delay_seconds: float = 60.0
    max_retries: int = 3
    retry_backoff_seconds: float = 2.0
    username_width: int = 16
    request_timeout: float = 10.0


def _int_env(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum}")
    return value


def _float_env(name: str, default: float, minimum: float, *, positive: bool = False) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc
    if positive and value <= minimum:
        raise RuntimeError(f"{name} must be greater than {minimum}")
    if value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum}")
    return value


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    token = os.getenv("GITHUB_TOKEN")
    if not token:
        raise RuntimeError("GITHUB_TOKEN must be configured")

    users_file = Path(
        os.getenv("CONTRIB_PULSE_USERS_FILE", "users.txt")
    ).expanduser()

    return Settings(
        github_token=token,
        users_file=users_file,
        graphql_url=os.getenv("GITHUB_GRAPHQL_URL") or GITHUB_GRAPHQL_URL,
        batch_size=_int_env("BATCH_SIZE", 50, minimum=1),
        batch_delay_seconds=_float_env("BATCH_DELAY_SECONDS", 60.0, minimum=0),
        max_retries=_int_env("MAX_RETRIES", 3, minimum=1),
        retry_backoff_seconds=_float_env("RETRY_BACKOFF_SECONDS", 2.0, minimum=0),
        username_width=_int_env("USERNAME_WIDTH", 16, minimum=1),
        request_timeout=_float_env("REQUEST_TIMEOUT", 10.0, minimum=0, positive=True),
    )


__all__ = ["GITHUB_GRAPHQL_URL", "Settings", "load_settings"]
