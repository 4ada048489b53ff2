"""Symlink-aware path resolution."""

from __future__ import annotations

from enum import Enum
import logging
import os
from pathlib import Path

LOG = logging.getLogger(__name__)


class SymlinkPolicy(str, Enum):
    """How paths that may be symbolic links are treated."""

    RESOLVE = "resolve"
    PRESERVE = "preserve"


def resolve_path(
    path: Path,
    policy: SymlinkPolicy = SymlinkPolicy.RESOLVE,
) -> Path:
    """Return the canonical form of ``path`` under ``policy``.

    With ``RESOLVE`` every intermediate link is followed. A path that
    cannot be resolved (broken link, loop, permission problem) is returned
    unchanged instead of raising.
    """

    if policy is SymlinkPolicy.PRESERVE:
        return path
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        LOG.debug("Could not resolve %s, using it as-is: %s", path, exc)
        return path


def is_symlink(path: Path) -> bool:
    """Return ``True`` when ``path`` itself is a symbolic link."""

    try:
        return path.is_symlink()
    except OSError:
        return False


def read_link_target(path: Path) -> Path | None:
    """Return the immediate target of the link at ``path``, if any."""

    if not is_symlink(path):
        return None
    try:
        return Path(os.readlink(path))
    except OSError as exc:
        LOG.debug("Could not read link %s: %s", path, exc)
        return None
