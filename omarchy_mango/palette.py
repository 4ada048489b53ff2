"""Palette vocabulary, documented defaults and the palette.yml parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import Any, Final, Mapping

import yaml

from .discovery import find_palette_file
from .errors import ParseError
from .paths import SymlinkPolicy, resolve_path

LOG = logging.getLogger(__name__)

ColorTable = dict[str, str]


class ColorKey(str, Enum):
    """Semantic colour roles shared by every theme."""

    PRIMARY_BG = "primary_bg"
    SECONDARY_BG = "secondary_bg"
    TERTIARY_BG = "tertiary_bg"
    PRIMARY_ACCENT = "primary_accent"
    SECONDARY_ACCENT = "secondary_accent"
    TERTIARY_ACCENT = "tertiary_accent"
    TEXT_PRIMARY = "text_primary"
    TEXT_SECONDARY = "text_secondary"
    TEXT_DIM = "text_dim"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"
    SELECTION_BG = "selection_bg"


class AnsiColor(str, Enum):
    """The eight standard terminal colour names."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


class AnsiIntensity(str, Enum):
    """Terminal palette variants a theme may define."""

    NORMAL = "normal"
    BRIGHT = "bright"
    DIM = "dim"

    @property
    def section(self) -> str:
        """Return the palette.yml section holding this variant."""

        return f"ansi_{self.value}"


DEFAULT_COLORS: Final[Mapping[ColorKey, str]] = {
    ColorKey.PRIMARY_BG: "#101318",
    ColorKey.SECONDARY_BG: "#161B22",
    ColorKey.TERTIARY_BG: "#222733",
    ColorKey.PRIMARY_ACCENT: "#E37B66",
    ColorKey.SECONDARY_ACCENT: "#E0A568",
    ColorKey.TERTIARY_ACCENT: "#809D9E",
    ColorKey.TEXT_PRIMARY: "#EAEFF5",
    ColorKey.TEXT_SECONDARY: "#C6CED8",
    ColorKey.TEXT_DIM: "#98A0AE",
    ColorKey.SUCCESS: "#789FA2",
    ColorKey.WARNING: "#E7A46F",
    ColorKey.ERROR: "#CB886D",
    ColorKey.INFO: "#8999AA",
    ColorKey.SELECTION_BG: "#2B3040",
}

_NORMAL_ANSI_DEFAULTS: Final[Mapping[AnsiColor, str]] = {
    AnsiColor.BLACK: "#101318",
    AnsiColor.RED: "#CB886D",
    AnsiColor.GREEN: "#789FA2",
    AnsiColor.YELLOW: "#E7A46F",
    AnsiColor.BLUE: "#8999AA",
    AnsiColor.MAGENTA: "#E37B66",
    AnsiColor.CYAN: "#809D9E",
    AnsiColor.WHITE: "#C6CED8",
}

DEFAULT_ANSI_COLORS: Final[
    Mapping[AnsiIntensity, Mapping[AnsiColor, str]]
] = {
    AnsiIntensity.NORMAL: _NORMAL_ANSI_DEFAULTS,
    AnsiIntensity.BRIGHT: {
        AnsiColor.BLACK: "#222733",
        AnsiColor.RED: "#E37B66",
        AnsiColor.GREEN: "#809D9E",
        AnsiColor.YELLOW: "#E0A568",
        AnsiColor.BLUE: "#8999AA",
        AnsiColor.MAGENTA: "#E37B66",
        AnsiColor.CYAN: "#809D9E",
        AnsiColor.WHITE: "#EAEFF5",
    },
    AnsiIntensity.DIM: _NORMAL_ANSI_DEFAULTS,
}


def _check_default_tables() -> None:
    missing = [key.value for key in ColorKey if key not in DEFAULT_COLORS]
    for intensity in AnsiIntensity:
        table = DEFAULT_ANSI_COLORS.get(intensity, {})
        missing.extend(
            f"{intensity.section}.{name.value}"
            for name in AnsiColor
            if name not in table
        )
    if missing:
        raise RuntimeError(
            "Default colour tables are incomplete: " + ", ".join(missing)
        )


_check_default_tables()


@dataclass(frozen=True)
class AnsiTables:
    """Terminal colour tables for the three intensities."""

    normal: ColorTable = field(default_factory=dict)
    bright: ColorTable = field(default_factory=dict)
    dim: ColorTable = field(default_factory=dict)

    def table(self, intensity: AnsiIntensity) -> ColorTable:
        """Return the table for ``intensity``."""

        return getattr(self, intensity.value)


@dataclass(frozen=True)
class Palette:
    """Colours parsed from one theme's palette file."""

    colors: ColorTable = field(default_factory=dict)
    ansi: AnsiTables = field(default_factory=AnsiTables)
    source: Path | None = None

    def value_for(self, key: ColorKey) -> str:
        """Return the theme's colour for ``key`` or its documented default."""

        return self.colors.get(key.value, DEFAULT_COLORS[key])

    def ansi_value(self, intensity: AnsiIntensity, name: AnsiColor) -> str:
        """Return an ANSI colour, falling back to the documented default."""

        table = self.ansi.table(intensity)
        return table.get(name.value, DEFAULT_ANSI_COLORS[intensity][name])


def parse_palette(
    theme_dir: Path,
    policy: SymlinkPolicy = SymlinkPolicy.RESOLVE,
) -> Palette:
    """Parse the palette file of the theme stored in ``theme_dir``.

    Every call builds new tables, so nothing parsed for one theme can show
    up in another.
    """

    palette_file = find_palette_file(theme_dir)
    if palette_file is None:
        raise ParseError(
            f"No palette.yml found in {theme_dir}",
            path=theme_dir,
        )
    path = resolve_path(palette_file, policy)
    LOG.debug("Parsing palette file: %s", path)
    raw = _load_palette_document(path)

    colors: ColorTable = {}
    for key, value in raw.items():
        if isinstance(value, str) and value:
            colors[key] = value
            LOG.debug("Parsed color: %s = %s", key, value)

    sections: dict[AnsiIntensity, ColorTable] = {}
    for intensity in AnsiIntensity:
        sections[intensity] = _parse_ansi_section(
            raw.get(intensity.section),
            intensity,
            path,
        )

    return Palette(
        colors=colors,
        ansi=AnsiTables(
            normal=sections[AnsiIntensity.NORMAL],
            bright=sections[AnsiIntensity.BRIGHT],
            dim=sections[AnsiIntensity.DIM],
        ),
        source=path,
    )


def _load_palette_document(path: Path) -> dict[str, Any]:
    # BaseLoader keeps every scalar a string so values such as 000000 or
    # 101318 are not turned into integers.
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded: Any = yaml.load(handle, Loader=yaml.BaseLoader) or {}
    except OSError as exc:
        raise ParseError(
            f"Failed to read palette {path}: {exc}",
            path=path,
        ) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"Palette {path} is not valid UTF-8: {exc}",
            path=path,
        ) from exc
    except yaml.YAMLError as exc:
        raise ParseError(
            f"Failed to parse palette {path}: {exc}",
            path=path,
        ) from exc

    if not isinstance(loaded, dict):
        expected = type(loaded).__name__
        raise ParseError(
            f"Expected a mapping at the top level of {path}, got {expected}.",
            path=path,
        )
    return loaded


def _parse_ansi_section(
    section: Any,
    intensity: AnsiIntensity,
    path: Path,
) -> ColorTable:
    if section is None or section == "":
        return {}
    if not isinstance(section, dict):
        raise ParseError(
            f"Section {intensity.section!r} in {path} must be a mapping.",
            path=path,
        )
    table: ColorTable = {}
    for key, value in section.items():
        if isinstance(value, str) and value:
            table[key] = value
            LOG.debug("Parsed %s color: %s = %s", intensity.value, key, value)
    return table
