"""Render MangoWC theme files from a parsed palette."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path
import shutil
from string import Template
from typing import Final, Mapping

from . import templates
from .errors import RenderError
from .palette import (
    AnsiColor,
    AnsiIntensity,
    ColorKey,
    Palette,
)

LOG = logging.getLogger(__name__)

INSTALL_SCRIPT_NAME: Final = "install.sh"
README_NAME: Final = "README.md"
_INSTALL_SCRIPT_MODE: Final = 0o755

_METADATA_FIELDS: Final = frozenset({"theme_name", "generated_at"})
_README_FIELDS: Final = frozenset({"color_rows", "component_rows"})


@dataclass(frozen=True)
class OutputTarget:
    """One generated file.

    ``native_name`` marks terminal configs that are copied from the theme
    source when present. Targets without a template are copy-only.
    """

    filename: str
    description: str
    template: Template | None
    native_name: str | None = None


OUTPUT_TARGETS: Final[tuple[OutputTarget, ...]] = (
    OutputTarget(
        "config.conf",
        "MangoWC Configuration",
        templates.MANGOWC_CONFIG,
    ),
    OutputTarget("waybar.css", "Waybar Style", templates.WAYBAR_STYLE),
    OutputTarget(
        "alacritty.toml",
        "Alacritty Terminal",
        templates.ALACRITTY_CONFIG,
        native_name="alacritty.toml",
    ),
    OutputTarget(
        "kitty.conf",
        "Kitty Terminal",
        templates.KITTY_CONFIG,
        native_name="kitty.conf",
    ),
    OutputTarget(
        "ghostty.conf",
        "Ghostty Terminal",
        None,
        native_name="ghostty.conf",
    ),
    OutputTarget("mako.conf", "Notification Daemon", templates.MAKO_CONFIG),
    OutputTarget("swayosd.css", "OSD Configuration", templates.SWAYOSD_STYLE),
)

_COLOR_LABELS: Final[Mapping[ColorKey, str]] = {
    ColorKey.PRIMARY_BG: "Primary Background",
    ColorKey.SECONDARY_BG: "Secondary Background",
    ColorKey.TERTIARY_BG: "Tertiary Background",
    ColorKey.PRIMARY_ACCENT: "Primary Accent",
    ColorKey.SECONDARY_ACCENT: "Secondary Accent",
    ColorKey.TERTIARY_ACCENT: "Tertiary Accent",
    ColorKey.TEXT_PRIMARY: "Text Primary",
    ColorKey.TEXT_SECONDARY: "Text Secondary",
    ColorKey.TEXT_DIM: "Text Dim",
    ColorKey.SUCCESS: "Success",
    ColorKey.WARNING: "Warning",
    ColorKey.ERROR: "Error",
    ColorKey.INFO: "Info",
    ColorKey.SELECTION_BG: "Selection Background",
}


class TemplateFieldError(RuntimeError):
    """Raised when a template uses a placeholder without a default."""


def _ansi_field(intensity: AnsiIntensity, name: AnsiColor) -> str:
    return f"{intensity.value}_{name.value}"


def color_field_names() -> frozenset[str]:
    """Return every colour placeholder a template may reference."""

    names = {key.value for key in ColorKey}
    names.update(
        _ansi_field(intensity, name)
        for intensity in AnsiIntensity
        for name in AnsiColor
    )
    return frozenset(names)


def validate_templates() -> None:
    """Check that each template only uses placeholders with defaults."""

    allowed = color_field_names() | _METADATA_FIELDS
    checks: list[tuple[str, Template, frozenset[str]]] = [
        (target.filename, target.template, allowed)
        for target in OUTPUT_TARGETS
        if target.template is not None
    ]
    checks.append((README_NAME, templates.README, allowed | _README_FIELDS))

    problems: list[str] = []
    for filename, template, fields in checks:
        if not template.is_valid():
            problems.append(f"{filename}: malformed placeholder")
            continue
        unknown = sorted(set(template.get_identifiers()) - fields)
        if unknown:
            problems.append(f"{filename}: {', '.join(unknown)}")
    if problems:
        raise TemplateFieldError(
            "Templates reference unknown fields: " + "; ".join(problems)
        )


validate_templates()


def build_context(
    theme_name: str,
    palette: Palette,
    *,
    generated_at: datetime | None = None,
) -> dict[str, str]:
    """Return the substitution values for ``palette``.

    Colours missing from the palette take their documented defaults.
    """

    context = {key.value: palette.value_for(key) for key in ColorKey}
    for intensity in AnsiIntensity:
        for name in AnsiColor:
            context[_ansi_field(intensity, name)] = palette.ansi_value(
                intensity,
                name,
            )
    context["theme_name"] = theme_name
    context["generated_at"] = _format_timestamp(generated_at)
    return context


def render_theme(
    theme_name: str,
    palette: Palette,
    output_dir: Path,
    *,
    source_dir: Path | None = None,
    generated_at: datetime | None = None,
) -> list[Path]:
    """Write the theme's configuration files into ``output_dir``.

    Terminal configs shipped with the theme in ``source_dir`` are copied
    unchanged instead of being generated. Existing files are overwritten.
    Returns the written paths in generation order.
    """

    context = build_context(theme_name, palette, generated_at=generated_at)
    _ensure_directory(output_dir)

    written: list[Path] = []
    for target in OUTPUT_TARGETS:
        destination = output_dir / target.filename
        native = _native_file(source_dir, target)
        if native is not None:
            _copy_file(native, destination)
            LOG.info("Copied existing %s", target.filename)
        elif target.template is not None:
            _write_text(destination, target.template.substitute(context))
            LOG.debug("Generated %s", destination)
        else:
            continue
        written.append(destination)
    return written


def write_documents(
    theme_name: str,
    palette: Palette,
    output_dir: Path,
    *,
    generated_at: datetime | None = None,
) -> list[Path]:
    """Write the installer script and README for a converted theme."""

    _ensure_directory(output_dir)

    installer = output_dir / INSTALL_SCRIPT_NAME
    _write_text(installer, templates.INSTALL_SCRIPT)
    try:
        installer.chmod(_INSTALL_SCRIPT_MODE)
    except OSError as exc:
        raise RenderError(
            f"Failed to make {installer} executable: {exc}",
            path=installer,
        ) from exc
    LOG.debug("Installation script generated: %s", installer)

    context = build_context(theme_name, palette, generated_at=generated_at)
    context["color_rows"] = "\n".join(
        f"| {_COLOR_LABELS[key]} | {palette.value_for(key)} |"
        for key in ColorKey
    )
    context["component_rows"] = "\n".join(
        f"- **{target.description}** (`{target.filename}`)"
        for target in OUTPUT_TARGETS
    )
    readme = output_dir / README_NAME
    _write_text(readme, templates.README.substitute(context))
    LOG.debug("README file generated: %s", readme)
    return [installer, readme]


def _format_timestamp(generated_at: datetime | None) -> str:
    stamp = generated_at or datetime.now().astimezone()
    return stamp.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def _native_file(source_dir: Path | None, target: OutputTarget) -> Path | None:
    if source_dir is None or target.native_name is None:
        return None
    candidate = source_dir / target.native_name
    if candidate.is_file():
        return candidate
    return None


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RenderError(
            f"Failed to create output directory {path}: {exc}",
            path=path,
        ) from exc


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise RenderError(
            f"Failed to write {path}: {exc}",
            path=path,
        ) from exc


def _copy_file(source: Path, destination: Path) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise RenderError(
            f"Failed to copy {source} to {destination}: {exc}",
            path=destination,
        ) from exc

