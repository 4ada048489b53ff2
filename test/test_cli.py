"""Tests for the omarchy-mango command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from omarchy_mango import cli


def _write_theme(source: Path, name: str, text: str = "") -> Path:
    theme_dir = source / name
    theme_dir.mkdir(parents=True)
    (theme_dir / "palette.yml").write_text(text, encoding="utf-8")
    return theme_dir


def _base_args(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "missing-config.yaml")]


def test_convert_all_themes(tmp_path, capsys):
    source = tmp_path / "themes"
    output = tmp_path / "out"
    _write_theme(source, "alpha", 'primary_bg: "#000001"\n')
    _write_theme(source, "beta")

    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(source), "-o", str(output)]
    )

    assert code == 0
    assert (output / "alpha" / "config.conf").exists()
    assert (output / "beta" / "README.md").exists()
    out = capsys.readouterr().out
    assert "Total themes processed: 2" in out
    assert "Successfully converted: 2" in out


def test_convert_reports_failures_but_exits_zero(tmp_path, capsys):
    source = tmp_path / "themes"
    _write_theme(source, "alpha")
    _write_theme(source, "broken", "primary_bg: [unclosed\n")

    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(source), "-o", str(tmp_path / "out")]
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "Failed conversions: 1" in out
    assert "Failed themes: broken" in out


def test_convert_selected_themes(tmp_path):
    source = tmp_path / "themes"
    output = tmp_path / "out"
    _write_theme(source, "alpha")
    _write_theme(source, "beta")

    code = cli.main(
        _base_args(tmp_path)
        + [
            "convert",
            "-s",
            str(source),
            "-o",
            str(output),
            "--themes",
            "beta,unknown",
        ]
    )

    assert code == 0
    assert (output / "beta").is_dir()
    assert not (output / "alpha").exists()


def test_convert_dry_run_writes_nothing(tmp_path, capsys):
    source = tmp_path / "themes"
    output = tmp_path / "out"
    _write_theme(source, "alpha")

    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(source), "-o", str(output), "--dry-run"]
    )

    assert code == 0
    assert not output.exists()
    assert "Dry run completed" in capsys.readouterr().out


def test_convert_missing_source_exits_non_zero(tmp_path):
    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(tmp_path / "nope"), "-o", str(tmp_path)]
    )

    assert code == 1


def test_convert_without_themes_exits_non_zero(tmp_path):
    source = tmp_path / "themes"
    (source / "empty").mkdir(parents=True)

    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(source), "-o", str(tmp_path / "out")]
    )

    assert code == 1


def test_default_command_uses_config_directories(tmp_path):
    source = tmp_path / "themes"
    output = tmp_path / "out"
    _write_theme(source, "omarchy-alpha")
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        f"source_dir: {source}\n"
        f"output_dir: {output}\n"
        "strip_prefixes: omarchy-\n",
        encoding="utf-8",
    )

    code = cli.main(["--config", str(cfg_path)])

    assert code == 0
    assert (output / "alpha" / "install.sh").exists()


def test_invalid_config_is_a_usage_error(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(cfg_path), "list"])

    assert excinfo.value.code == 2


def test_interactive_selection(tmp_path, monkeypatch):
    source = tmp_path / "themes"
    output = tmp_path / "out"
    _write_theme(source, "only")
    answers = iter(["7", "1"])
    monkeypatch.setattr(
        cli.Prompt,
        "ask",
        lambda *args, **kwargs: next(answers),
    )

    code = cli.main(
        _base_args(tmp_path)
        + ["convert", "-s", str(source), "-o", str(output), "-i"]
    )

    assert code == 0
    assert (output / "only" / "config.conf").exists()


def test_single_converts_one_theme(tmp_path, capsys):
    theme_dir = _write_theme(tmp_path / "themes", "solo")
    output = tmp_path / "out"

    code = cli.main(
        _base_args(tmp_path) + ["single", str(theme_dir), "-o", str(output)]
    )

    assert code == 0
    assert (output / "solo" / "kitty.conf").exists()
    assert "Converted solo" in capsys.readouterr().out


def test_single_parse_failure_exits_non_zero(tmp_path):
    theme_dir = _write_theme(tmp_path / "themes", "bad", "- list\n")

    code = cli.main(
        _base_args(tmp_path)
        + ["single", str(theme_dir), "-o", str(tmp_path / "out")]
    )

    assert code == 1


def test_list_shows_symlinked_themes(tmp_path, capsys):
    source = tmp_path / "themes"
    source.mkdir()
    real = _write_theme(tmp_path / "store", "shared")
    (source / "linked").symlink_to(real, target_is_directory=True)

    code = cli.main(_base_args(tmp_path) + ["list", "-s", str(source)])

    assert code == 0
    out = capsys.readouterr().out
    assert "linked -> " in out
    assert str(real) in out
