"""Choosing which discovered themes to convert."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, TypeVar

LOG = logging.getLogger(__name__)

SELECT_ALL = "all"
SELECT_NONE = "none"

T = TypeVar("T")


def split_theme_names(value: str) -> tuple[str, ...]:
    """Split a comma-separated ``--themes`` value into names."""

    return tuple(part.strip() for part in value.split(",") if part.strip())


def filter_known_names(
    requested: Iterable[str],
    available: Sequence[str],
) -> list[str]:
    """Return requested names that exist, in request order.

    Unknown names are logged and dropped; duplicates are kept once.
    """

    known = set(available)
    selected: list[str] = []
    for name in requested:
        if name not in known:
            LOG.warning("Theme not found, skipping: %s", name)
            continue
        if name not in selected:
            selected.append(name)
    return selected


def parse_selection(text: str, items: Sequence[T]) -> list[T]:
    """Interpret an interactive selection against ``items``.

    Accepts ``all``, ``none`` or whitespace-separated 1-based indices.
    Raises ``ValueError`` for anything else, including an empty answer.
    """

    answer = text.strip().lower()
    if answer == SELECT_ALL:
        return list(items)
    if answer == SELECT_NONE:
        return []

    tokens = answer.split()
    if not tokens:
        raise ValueError("Enter theme numbers, 'all' or 'none'.")
    chosen: list[T] = []
    for token in tokens:
        if not token.isdigit():
            raise ValueError(f"Not a theme number: {token!r}")
        index = int(token)
        if index < 1 or index > len(items):
            raise ValueError(
                f"Theme number {index} is out of range 1-{len(items)}."
            )
        item = items[index - 1]
        if item not in chosen:
            chosen.append(item)
    return chosen
