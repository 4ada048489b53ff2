"""Command-line entry point for omarchy-mango.

Converts Omarchy themes into MangoWC theme bundles (`convert`, the
default), converts one theme directory on its own (`single`) or lists the
themes found in a source directory (`list`).
"""

from __future__ import annotations

import argparse
import logging
import textwrap
from pathlib import Path
from typing import Callable, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from .config import (
    AppConfig,
    ConfigError,
    default_output_dir,
    default_source_dir,
    load_config,
)
from .converter import (
    ConversionOptions,
    ThemeConverter,
    format_summary,
)
from .discovery import ThemeDescriptor
from .errors import ConverterError, ParseError, RenderError
from .paths import SymlinkPolicy, read_link_target
from .selection import parse_selection, split_theme_names

LOG = logging.getLogger("omarchy_mango")
CONFIG_ATTR = "_config"


def build_parser() -> argparse.ArgumentParser:
    """Create the top-level argument parser."""

    parser = argparse.ArgumentParser(
        prog="omarchy-mango",
        description=textwrap.dedent(
            """
            Convert Omarchy themes to MangoWC. Every theme directory holding
            a palette.yml is turned into MangoWC, Waybar, terminal, Mako and
            SwayOSD configuration plus an install script.
            """
        ).strip(),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=(
            "Path to a YAML configuration file. Defaults to "
            "$OMARCHY_MANGO_CONFIG or ~/.config/omarchy-mango/config.yaml."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every parsed colour and generated file.",
    )

    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert all (or selected) themes",
    )
    _add_source_argument(convert_parser)
    _add_output_argument(convert_parser)
    convert_parser.add_argument(
        "-t",
        "--themes",
        default=None,
        help="Comma-separated list of specific themes to convert.",
    )
    convert_parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Choose the themes to convert from a numbered list.",
    )
    _add_dry_run_argument(convert_parser)
    _add_symlink_arguments(convert_parser)
    convert_parser.set_defaults(handler=_run_convert)

    single_parser = subparsers.add_parser(
        "single",
        help="Convert one theme directory",
    )
    single_parser.add_argument(
        "theme_dir",
        type=Path,
        help="Directory containing the theme's palette.yml.",
    )
    _add_output_argument(single_parser)
    _add_dry_run_argument(single_parser)
    single_parser.add_argument(
        "--preserve-symlinks",
        action="store_true",
        help="Do not resolve symbolic links to their targets.",
    )
    single_parser.set_defaults(handler=_run_single)

    list_parser = subparsers.add_parser(
        "list",
        help="List the themes found in the source directory",
    )
    _add_source_argument(list_parser)
    _add_symlink_arguments(list_parser)
    list_parser.set_defaults(handler=_run_list)

    parser.set_defaults(command="convert", handler=_run_convert)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point used by console scripts and ``python -m``."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.error(str(exc))

    setattr(args, CONFIG_ATTR, config)

    handler: Callable[[argparse.Namespace], int] = getattr(
        args,
        "handler",
        _run_convert,
    )
    try:
        return handler(args)
    except ConverterError as exc:
        _report_fatal(exc)
        return 1


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Send package log records to stderr through rich."""

    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    for existing in list(LOG.handlers):
        if isinstance(existing, RichHandler):
            LOG.removeHandler(existing)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    LOG.addHandler(handler)
    LOG.setLevel(level)


def _run_convert(args: argparse.Namespace) -> int:
    config: AppConfig = getattr(args, CONFIG_ATTR)
    options = _build_options(args, config)
    LOG.info("Source directory: %s", options.source_dir)
    LOG.info("Output directory: %s", options.output_dir)
    LOG.info("Dry run mode: %s", options.dry_run)

    converter = ThemeConverter(options)
    selector = None
    if getattr(args, "interactive", False):
        selector = _prompt_for_themes
    report = converter.run(selector)
    print(format_summary(report))
    return 0


def _run_single(args: argparse.Namespace) -> int:
    config: AppConfig = getattr(args, CONFIG_ATTR)
    theme_dir: Path = args.theme_dir.expanduser()
    options = _build_options(args, config)
    converter = ThemeConverter(options)
    try:
        result = converter.convert_single(theme_dir)
    except (ParseError, RenderError) as exc:
        LOG.error("Failed to convert %s: %s", theme_dir, exc)
        return 1

    if options.dry_run:
        print(f"Would convert: {result.source} -> {result.destination}")
        return 0
    print(f"Converted {result.theme_name} -> {result.destination}")
    for path in result.files:
        print(f"  {path.name}")
    return 0


def _run_list(args: argparse.Namespace) -> int:
    config: AppConfig = getattr(args, CONFIG_ATTR)
    options = _build_options(args, config)
    themes = ThemeConverter(options).discover()

    print(f"Available themes in {options.source_dir}:")
    for descriptor in themes:
        line = f"  {descriptor.name}"
        target = read_link_target(descriptor.source_directory)
        if target is not None:
            line += f" -> {target}"
        if descriptor.canonical_path != descriptor.source_directory:
            line += f" ({descriptor.canonical_path})"
        print(line)
    return 0


def _build_options(
    args: argparse.Namespace,
    config: AppConfig,
) -> ConversionOptions:
    source = (
        getattr(args, "source", None)
        or config.source_dir
        or default_source_dir()
    )
    output = (
        getattr(args, "output", None)
        or config.output_dir
        or default_output_dir()
    )
    themes = getattr(args, "themes", None)
    follow = config.follow_symlinks
    if getattr(args, "no_follow_symlinks", False):
        follow = False
    resolve = config.resolve_symlinks
    if getattr(args, "preserve_symlinks", False):
        resolve = False

    return ConversionOptions(
        source_dir=source.expanduser(),
        output_dir=output.expanduser(),
        theme_names=split_theme_names(themes) if themes else (),
        dry_run=getattr(args, "dry_run", False),
        follow_symlinks=follow,
        symlink_policy=(
            SymlinkPolicy.RESOLVE if resolve else SymlinkPolicy.PRESERVE
        ),
        strip_prefixes=config.strip_prefixes,
        strip_suffixes=config.strip_suffixes,
    )


def _prompt_for_themes(
    descriptors: Sequence[ThemeDescriptor],
) -> list[ThemeDescriptor]:
    console = Console()
    console.print()
    console.print("Available Omarchy Themes:", style="cyan")
    for index, descriptor in enumerate(descriptors, 1):
        console.print(f"  {index}) {descriptor.name}", markup=False)
    console.print()
    console.print("Selection Options:", style="cyan")
    console.print("  - Enter numbers separated by spaces (e.g., 1 3 5)")
    console.print("  - Enter 'all' to select all themes")
    console.print("  - Enter 'none' to skip selection")

    while True:
        answer = Prompt.ask("Select themes to convert", console=console)
        try:
            selected = parse_selection(answer, descriptors)
        except ValueError as exc:
            LOG.warning("Invalid selection. Please try again. (%s)", exc)
            continue
        names = ", ".join(descriptor.name for descriptor in selected)
        LOG.info("Selected themes: %s", names or "none")
        return selected


def _report_fatal(exc: ConverterError) -> None:
    LOG.error("%s", exc)
    if exc.remedy:
        LOG.error("%s", exc.remedy)


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s",
        "--source",
        type=Path,
        default=None,
        help=(
            "Directory containing Omarchy themes (overrides config; "
            "defaults to ~/.config/omarchy/themes)."
        ),
    )


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=(
            "Directory for MangoWC themes (overrides config; "
            "defaults to ~/.config/mango/themes)."
        ),
    )


def _add_dry_run_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Show what would be converted without writing anything.",
    )


def _add_symlink_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Skip theme directories that are symbolic links.",
    )
    parser.add_argument(
        "--preserve-symlinks",
        action="store_true",
        help=(
            "Do not resolve symbolic links, so aliases of one theme are "
            "converted separately."
        ),
    )


if __name__ == "__main__":
    raise SystemExit(main())
