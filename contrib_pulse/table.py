"""Fixed-width text table of daily activity."""

from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence, Tuple

USERNAME_WIDTH = 16
CELL_WIDTH = 12
PRESENT = "1"
ABSENT = "0"


def fit(text: str, width: int) -> str:
    """Pad or truncate ``text`` to exactly ``width`` characters."""

    return text[:width].ljust(width)


def header(display_dates: Iterable[str], username_width: int = USERNAME_WIDTH) -> Tuple[str, str]:
    dates = list(display_dates)
    title = f"| {fit('User'.center(username_width), username_width)} |"
    title += "".join(f"{day[:CELL_WIDTH].center(CELL_WIDTH)}|" for day in dates)
    separator = f"|{'-' * (username_width + 2)}|" + f"{'-' * CELL_WIDTH}|" * len(dates)
    return title, separator


def row(
    username: str,
    active_dates: AbstractSet[str],
    window: Sequence[str],
    username_width: int = USERNAME_WIDTH,
) -> str:
    line = f"| {fit(username, username_width)} |"
    for day in window:
        marker = PRESENT if day in active_dates else ABSENT
        line += f"{marker.center(CELL_WIDTH)}|"
    return line


def empty_row(username: str, window: Sequence[str], username_width: int = USERNAME_WIDTH) -> str:
    return row(username, frozenset(), window, username_width)


__all__ = ["ABSENT", "CELL_WIDTH", "PRESENT", "USERNAME_WIDTH", "empty_row", "fit", "header", "row"]
