"""Locate Omarchy theme directories below a source directory."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable

from .errors import ConfigurationError, EmptyResultError, NotFoundError
from .paths import SymlinkPolicy, is_symlink, read_link_target, resolve_path

LOG = logging.getLogger(__name__)

PALETTE_FILENAMES = ("palette.yml", "palette.yaml")


@dataclass(frozen=True)
class ThemeDescriptor:
    """A theme selected for conversion.

    ``canonical_path`` is the source directory after symlink resolution and
    is what discovery uses to recognise aliases of the same theme.
    """

    name: str
    source_directory: Path
    output_directory: Path
    canonical_path: Path

    @property
    def palette_file(self) -> Path | None:
        """Return the palette file inside the source directory."""

        return find_palette_file(self.source_directory)


def find_palette_file(theme_dir: Path) -> Path | None:
    """Return the first palette file found directly in ``theme_dir``."""

    for filename in PALETTE_FILENAMES:
        candidate = theme_dir / filename
        if candidate.is_file():
            return candidate
    return None


def theme_name_from_dir(
    theme_dir: Path,
    *,
    strip_prefixes: Iterable[str] = (),
    strip_suffixes: Iterable[str] = (),
) -> str:
    """Derive a theme name from a directory basename.

    The first matching prefix and the first matching suffix are removed.
    Stripping never produces an empty name; the basename is kept instead.
    """

    name = theme_dir.name
    stripped = name
    for prefix in strip_prefixes:
        if prefix and stripped.startswith(prefix):
            stripped = stripped[len(prefix):]
            break
    for suffix in strip_suffixes:
        if suffix and stripped.endswith(suffix):
            stripped = stripped[: -len(suffix)]
            break
    return stripped or name


def discover_themes(
    source_dir: Path,
    follow_dir_symlinks: bool = True,
    *,
    output_dir: Path,
    policy: SymlinkPolicy = SymlinkPolicy.RESOLVE,
    strip_prefixes: Iterable[str] = (),
    strip_suffixes: Iterable[str] = (),
) -> list[ThemeDescriptor]:
    """Return the theme candidates directly below ``source_dir``.

    Results follow filesystem enumeration order, which differs between
    platforms; sort the result when a stable order matters. Directories
    that resolve to an already discovered theme are skipped.
    """

    if not source_dir.exists():
        raise NotFoundError(
            f"Theme source directory does not exist: {source_dir}",
            path=source_dir,
            remedy=(
                "Install Omarchy or point --source at a directory of "
                "themes."
            ),
        )
    if not source_dir.is_dir():
        raise NotFoundError(
            f"Theme source path is not a directory: {source_dir}",
            path=source_dir,
            remedy="Point --source at a directory of themes.",
        )

    prefixes = tuple(strip_prefixes)
    suffixes = tuple(strip_suffixes)
    seen_paths: set[Path] = set()
    seen_names: set[str] = set()
    themes: list[ThemeDescriptor] = []

    try:
        children = list(source_dir.iterdir())
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read theme source directory {source_dir}: {exc}",
            path=source_dir,
            remedy="Check the permissions of the theme source directory.",
        ) from exc

    for child in children:
        linked = is_symlink(child)
        if linked and not follow_dir_symlinks:
            LOG.info("Skipping symlinked directory: %s", child)
            continue
        try:
            if not child.is_dir():
                continue
            palette_file = find_palette_file(child)
        except OSError as exc:
            LOG.warning("Skipping unreadable directory %s: %s", child, exc)
            continue
        if palette_file is None:
            LOG.info("Skipping directory without palette.yml: %s", child.name)
            continue

        canonical = resolve_path(child, policy)
        if canonical in seen_paths:
            LOG.info(
                "Skipping %s: same theme as an earlier entry (%s)",
                child.name,
                canonical,
            )
            continue
        if linked:
            LOG.debug("%s links to %s", child, read_link_target(child))

        name = theme_name_from_dir(
            child,
            strip_prefixes=prefixes,
            strip_suffixes=suffixes,
        )
        if name in seen_names:
            LOG.warning(
                "Skipping %s: theme name %r is already taken",
                child,
                name,
            )
            continue

        seen_paths.add(canonical)
        seen_names.add(name)
        themes.append(
            ThemeDescriptor(
                name=name,
                source_directory=child,
                output_directory=output_dir / name,
                canonical_path=canonical,
            )
        )
        LOG.info("Found valid theme: %s", name)

    if not themes:
        raise EmptyResultError(
            f"No valid themes found in {source_dir}",
            path=source_dir,
            remedy="Make sure theme directories contain palette.yml files.",
        )
    return themes
