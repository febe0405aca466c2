"""Entrypoint for running Contribution Pulse via `python -m contrib_pulse.main`."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import Settings, load_settings
from .github_client import GitHubClient
from .service import ContributionPulseService, InputUnavailableError, load_usernames

logger = logging.getLogger("contrib_pulse")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contrib-pulse",
        description="Print a 30-day contribution activity table for a list of GitHub users.",
    )
    parser.add_argument("users_file", nargs="?", type=Path, help="file with one GitHub login per line")
    parser.add_argument("--env-file", default=os.getenv("CONTRIB_PULSE_ENV"), help="alternate .env file")
    parser.add_argument("--batch-size", type=int, help="users fetched before each pause")
    parser.add_argument("--batch-delay", type=float, help="seconds to wait between batches")
    parser.add_argument("--log-level", default=None, help="logging level (default: LOG_LEVEL or INFO)")
    return parser


async def _run_async(settings: Settings, usernames: Sequence[str]) -> int:
    client = GitHubClient(
        settings.github_token,
        graphql_url=settings.graphql_url,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        backoff_seconds=settings.retry_backoff_seconds,
    )
    try:
        service = ContributionPulseService(settings, client)
        return await service.run(usernames)
    finally:
        await client.close()


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level_name = (args.log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.INFO, handlers=[logging.StreamHandler()])
        logger.error("Invalid configuration: unknown log level %r", level_name)
        return 2
    logging.basicConfig(level=level, handlers=[logging.StreamHandler()])

    try:
        settings = load_settings(args.env_file)
    except RuntimeError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.users_file is not None:
        settings.users_file = args.users_file
    if args.batch_size is not None:
        if args.batch_size < 1:
            logger.error("Invalid configuration: --batch-size must be at least 1")
            return 2
        settings.batch_size = args.batch_size
    if args.batch_delay is not None:
        if args.batch_delay < 0:
            logger.error("Invalid configuration: --batch-delay must be at least 0")
            return 2
        settings.batch_delay_seconds = args.batch_delay

    try:
        usernames = load_usernames(settings.users_file)
    except InputUnavailableError as exc:
        logger.error("%s", exc)
        return 1

    rows = asyncio.run(_run_async(settings, usernames))
    logger.info("Rendered %s rows", rows)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run())
