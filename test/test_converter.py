from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path

import pytest

from omarchy_mango.converter import (
    BatchReport,
    ConversionOptions,
    ConversionResult,
    Outcome,
    ThemeConverter,
    convert_theme,
    format_summary,
    select_themes,
)
from omarchy_mango.errors import EmptyResultError, NotFoundError, ParseError
from omarchy_mango.palette import DEFAULT_COLORS, ColorKey

STAMP = datetime(2025, 3, 1, 12, 30, 0)


def _write_theme(source: Path, name: str, text: str) -> Path:
    theme_dir = source / name
    theme_dir.mkdir(parents=True)
    (theme_dir / "palette.yml").write_text(text, encoding="utf-8")
    return theme_dir


def _config_values(output: Path, name: str) -> dict[str, str]:
    text = (output / name / "config.conf").read_text(encoding="utf-8")
    values: dict[str, str] = {}
    for line in text.splitlines():
        if line and not line.startswith("#"):
            key, _, value = line.partition(" ")
            values[key] = value
    return values


def _options(tmp_path: Path, **overrides) -> ConversionOptions:
    values = {
        "source_dir": tmp_path / "themes",
        "output_dir": tmp_path / "out",
    }
    values.update(overrides)
    return ConversionOptions(**values)


def test_batch_isolates_failing_theme(tmp_path):
    source = tmp_path / "themes"
    _write_theme(
        source,
        "alpha",
        'warning: "#AA0000"\nprimary_bg: "#000001"\n',
    )
    _write_theme(source, "broken", "primary_bg: [unclosed\n")
    _write_theme(
        source,
        "gamma",
        'error: "#00AA00"\nprimary_bg: "#000003"\n',
    )

    report = ThemeConverter(_options(tmp_path), generated_at=STAMP).run()

    assert report.attempted == 3
    assert report.succeeded == 2
    assert report.failed == 1
    assert report.failed_names == ["broken"]
    failure = next(r for r in report.results if r.theme_name == "broken")
    assert failure.outcome is Outcome.FAILURE
    assert "Failed to parse palette" in (failure.error or "")

    output = tmp_path / "out"
    alpha = _config_values(output, "alpha")
    gamma = _config_values(output, "gamma")
    assert alpha["background_color"] == "#000001"
    assert gamma["background_color"] == "#000003"
    assert alpha["window_border_color_urgent"] == (
        DEFAULT_COLORS[ColorKey.ERROR]
    )
    assert gamma["window_border_color_urgent"] == "#00AA00"
    alpha_mako = (output / "alpha" / "mako.conf").read_text(encoding="utf-8")
    gamma_mako = (output / "gamma" / "mako.conf").read_text(encoding="utf-8")
    assert "border-color=#AA0000" in alpha_mako
    assert "#AA0000" not in gamma_mako
    assert f"border-color={DEFAULT_COLORS[ColorKey.WARNING]}" in gamma_mako


def test_successful_result_lists_generated_files(tmp_path):
    _write_theme(tmp_path / "themes", "alpha", 'info: "#123456"\n')

    report = ThemeConverter(_options(tmp_path), generated_at=STAMP).run()

    result = report.results[0]
    assert result.outcome is Outcome.SUCCESS
    names = [path.name for path in result.files]
    assert names == [
        "config.conf",
        "waybar.css",
        "alacritty.toml",
        "kitty.conf",
        "mako.conf",
        "swayosd.css",
        "install.sh",
        "README.md",
    ]
    assert all(path.exists() for path in result.files)
    assert result.destination == tmp_path / "out" / "alpha"


def test_copy_through_uses_theme_source_directory(tmp_path):
    theme_dir = _write_theme(tmp_path / "themes", "alpha", "")
    (theme_dir / "kitty.conf").write_text("# mine\n", encoding="utf-8")

    ThemeConverter(_options(tmp_path)).run()

    copied = tmp_path / "out" / "alpha" / "kitty.conf"
    assert copied.read_text(encoding="utf-8") == "# mine\n"


def test_dry_run_writes_nothing(tmp_path):
    source = tmp_path / "themes"
    _write_theme(source, "alpha", 'primary_bg: "#000001"\n')
    _write_theme(source, "broken", "primary_bg: [unclosed\n")

    report = ThemeConverter(_options(tmp_path, dry_run=True)).run()

    assert not (tmp_path / "out").exists()
    assert report.attempted == 2
    assert all(r.outcome is Outcome.PLANNED for r in report.results)
    assert report.failed == 0


def test_explicit_names_drop_unknown_themes(tmp_path, caplog):
    source = tmp_path / "themes"
    _write_theme(source, "alpha", "")
    _write_theme(source, "beta", "")

    with caplog.at_level(logging.WARNING, logger="omarchy_mango"):
        report = ThemeConverter(
            _options(tmp_path, theme_names=("beta", "missing")),
        ).run()

    assert [r.theme_name for r in report.results] == ["beta"]
    assert "Theme not found, skipping: missing" in caplog.text
    assert not (tmp_path / "out" / "alpha").exists()


def test_selector_replaces_name_selection(tmp_path):
    source = tmp_path / "themes"
    _write_theme(source, "alpha", "")
    _write_theme(source, "beta", "")
    seen: list[str] = []

    def choose(descriptors):
        seen.extend(sorted(d.name for d in descriptors))
        return [d for d in descriptors if d.name == "alpha"]

    report = ThemeConverter(_options(tmp_path)).run(selector=choose)

    assert seen == ["alpha", "beta"]
    assert [r.theme_name for r in report.results] == ["alpha"]


def test_empty_selection_converts_nothing(tmp_path):
    _write_theme(tmp_path / "themes", "alpha", "")

    report = ThemeConverter(_options(tmp_path)).run(selector=lambda d: [])

    assert report.attempted == 0
    assert not (tmp_path / "out").exists()


def test_run_propagates_discovery_errors(tmp_path):
    with pytest.raises(NotFoundError):
        ThemeConverter(_options(tmp_path)).run()

    (tmp_path / "themes").mkdir()
    with pytest.raises(EmptyResultError):
        ThemeConverter(_options(tmp_path)).run()


def test_select_themes_keeps_request_order(tmp_path):
    source = tmp_path / "themes"
    _write_theme(source, "alpha", "")
    _write_theme(source, "beta", "")
    discovered = ThemeConverter(_options(tmp_path)).discover()

    chosen = select_themes(discovered, ["beta", "alpha", "beta"])

    assert [d.name for d in chosen] == ["beta", "alpha"]
    assert select_themes(discovered) == discovered


def test_convert_single_propagates_parse_error(tmp_path):
    theme_dir = _write_theme(tmp_path / "themes", "broken", "- a\n- b\n")

    with pytest.raises(ParseError):
        ThemeConverter(_options(tmp_path)).convert_single(theme_dir)


def test_convert_single_writes_theme(tmp_path):
    theme_dir = _write_theme(tmp_path / "themes", "omarchy-solo", "")
    options = _options(tmp_path, strip_prefixes=("omarchy-",))

    result = ThemeConverter(options).convert_single(theme_dir)

    assert result.theme_name == "solo"
    assert (tmp_path / "out" / "solo" / "install.sh").exists()


def test_convert_theme_dry_run(tmp_path):
    source = tmp_path / "themes"
    _write_theme(source, "alpha", "")
    descriptor = ThemeConverter(_options(tmp_path)).discover()[0]

    result = convert_theme(descriptor, dry_run=True)

    assert result.outcome is Outcome.PLANNED
    assert result.ok
    assert result.files == ()
    assert not descriptor.output_directory.exists()


def test_format_summary_lists_failures(tmp_path):
    report = BatchReport(output_dir=tmp_path / "out")
    report.add(ConversionResult("alpha", Outcome.SUCCESS))
    report.add(ConversionResult("broken", Outcome.FAILURE, error="bad"))

    summary = format_summary(report)

    assert "Total themes processed: 2" in summary
    assert "Successfully converted: 1" in summary
    assert "Failed conversions: 1" in summary
    assert "Failed themes: broken" in summary
    assert str(tmp_path / "out") in summary


def test_format_summary_dry_run_lists_plan(tmp_path):
    report = BatchReport(output_dir=tmp_path / "out", dry_run=True)
    report.add(
        ConversionResult(
            "alpha",
            Outcome.PLANNED,
            source=tmp_path / "themes" / "alpha",
            destination=tmp_path / "out" / "alpha",
        )
    )

    summary = format_summary(report)

    assert "Would convert: 1" in summary
    assert "Successfully converted" not in summary
    assert "Dry run completed" in summary
    assert f"{tmp_path / 'themes' / 'alpha'} -> " in summary
