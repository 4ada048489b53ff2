"""Batch conversion of Omarchy themes into MangoWC theme bundles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .discovery import ThemeDescriptor, discover_themes, theme_name_from_dir
from .errors import ParseError, RenderError
from .palette import parse_palette
from .paths import SymlinkPolicy, resolve_path
from .rendering import render_theme, write_documents
from .selection import filter_known_names

LOG = logging.getLogger(__name__)

ThemeSelector = Callable[
    [Sequence[ThemeDescriptor]],
    Sequence[ThemeDescriptor],
]


class Outcome(str, Enum):
    """Result of converting one theme."""

    SUCCESS = "success"
    FAILURE = "failure"
    PLANNED = "planned"


@dataclass(frozen=True)
class ConversionOptions:
    """Resolved options for a conversion run."""

    source_dir: Path
    output_dir: Path
    theme_names: tuple[str, ...] = ()
    dry_run: bool = False
    follow_symlinks: bool = True
    symlink_policy: SymlinkPolicy = SymlinkPolicy.RESOLVE
    strip_prefixes: tuple[str, ...] = ()
    strip_suffixes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConversionResult:
    """What happened to one theme."""

    theme_name: str
    outcome: Outcome
    files: tuple[Path, ...] = ()
    error: str | None = None
    source: Path | None = None
    destination: Path | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` unless the conversion failed."""

        return self.outcome is not Outcome.FAILURE


@dataclass
class BatchReport:
    """Results of a batch run, appended in processing order."""

    output_dir: Path
    dry_run: bool = False
    results: list[ConversionResult] = field(default_factory=list)

    def add(self, result: ConversionResult) -> None:
        """Record the result for one theme."""

        self.results.append(result)

    @property
    def attempted(self) -> int:
        """Return how many themes were processed."""

        return len(self.results)

    @property
    def succeeded(self) -> int:
        """Return how many themes converted (or would convert)."""

        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        """Return how many themes failed."""

        return self.attempted - self.succeeded

    @property
    def failed_names(self) -> list[str]:
        """Return the names of failed themes."""

        return [result.theme_name for result in self.results if not result.ok]


def convert_theme(
    descriptor: ThemeDescriptor,
    *,
    dry_run: bool = False,
    policy: SymlinkPolicy = SymlinkPolicy.RESOLVE,
    generated_at: datetime | None = None,
) -> ConversionResult:
    """Convert one theme, reporting parse and render failures as results.

    The palette is parsed afresh for every call and handed straight to the
    renderer.
    """

    source = descriptor.source_directory
    destination = descriptor.output_directory
    if dry_run:
        LOG.info("[DRY RUN] Would convert: %s -> %s", source, destination)
        return ConversionResult(
            theme_name=descriptor.name,
            outcome=Outcome.PLANNED,
            source=source,
            destination=destination,
        )

    LOG.info("Converting theme: %s", descriptor.name)
    try:
        files = _convert(descriptor, policy=policy, generated_at=generated_at)
    except (ParseError, RenderError) as exc:
        LOG.error("Failed to convert theme %s: %s", descriptor.name, exc)
        return ConversionResult(
            theme_name=descriptor.name,
            outcome=Outcome.FAILURE,
            error=str(exc),
            source=source,
            destination=destination,
        )
    LOG.info("Theme conversion completed: %s", descriptor.name)
    return ConversionResult(
        theme_name=descriptor.name,
        outcome=Outcome.SUCCESS,
        files=tuple(files),
        source=source,
        destination=destination,
    )


def select_themes(
    discovered: Sequence[ThemeDescriptor],
    names: Iterable[str] = (),
) -> list[ThemeDescriptor]:
    """Pick the themes to convert.

    With no ``names`` every discovered theme is selected. Otherwise the
    known names are kept in request order and unknown ones are dropped.
    """

    requested = list(names)
    if not requested:
        return list(discovered)
    by_name = {descriptor.name: descriptor for descriptor in discovered}
    chosen = filter_known_names(requested, list(by_name))
    return [by_name[name] for name in chosen]


class ThemeConverter:
    """Runs discovery, selection and per-theme conversion."""

    def __init__(
        self,
        options: ConversionOptions,
        *,
        generated_at: datetime | None = None,
    ) -> None:
        self.options = options
        self.generated_at = generated_at

    def discover(self) -> list[ThemeDescriptor]:
        """Return the themes available in the source directory."""

        options = self.options
        return discover_themes(
            options.source_dir,
            options.follow_symlinks,
            output_dir=options.output_dir,
            policy=options.symlink_policy,
            strip_prefixes=options.strip_prefixes,
            strip_suffixes=options.strip_suffixes,
        )

    def run(self, selector: ThemeSelector | None = None) -> BatchReport:
        """Convert the selected themes and return the batch report.

        ``selector`` replaces name-based selection, for example with an
        interactive prompt. Discovery errors propagate; per-theme failures
        are recorded in the report.
        """

        discovered = self.discover()
        LOG.info(
            "Found %d themes: %s",
            len(discovered),
            ", ".join(descriptor.name for descriptor in discovered),
        )
        if selector is not None:
            selected = list(selector(discovered))
        else:
            selected = select_themes(discovered, self.options.theme_names)
        return self.convert_all(selected)

    def convert_all(
        self,
        descriptors: Sequence[ThemeDescriptor],
    ) -> BatchReport:
        """Convert ``descriptors`` one at a time in the given order."""

        report = BatchReport(
            output_dir=self.options.output_dir,
            dry_run=self.options.dry_run,
        )
        if not descriptors:
            LOG.warning("No themes selected for conversion")
            return report

        total = len(descriptors)
        LOG.info("Starting bulk conversion of %d themes...", total)
        for index, descriptor in enumerate(descriptors, 1):
            LOG.info(
                "[%d/%d] Processing theme: %s",
                index,
                total,
                descriptor.name,
            )
            report.add(
                convert_theme(
                    descriptor,
                    dry_run=self.options.dry_run,
                    policy=self.options.symlink_policy,
                    generated_at=self.generated_at,
                )
            )
        return report

    def convert_single(self, theme_dir: Path) -> ConversionResult:
        """Convert the theme in ``theme_dir`` on its own.

        Unlike batch runs, a :class:`ParseError` or :class:`RenderError`
        propagates to the caller.
        """

        options = self.options
        name = theme_name_from_dir(
            theme_dir,
            strip_prefixes=options.strip_prefixes,
            strip_suffixes=options.strip_suffixes,
        )
        descriptor = ThemeDescriptor(
            name=name,
            source_directory=theme_dir,
            output_directory=options.output_dir / name,
            canonical_path=resolve_path(theme_dir, options.symlink_policy),
        )
        if options.dry_run:
            return convert_theme(descriptor, dry_run=True)
        files = _convert(
            descriptor,
            policy=options.symlink_policy,
            generated_at=self.generated_at,
        )
        return ConversionResult(
            theme_name=name,
            outcome=Outcome.SUCCESS,
            files=tuple(files),
            source=theme_dir,
            destination=descriptor.output_directory,
        )


def format_summary(report: BatchReport) -> str:
    """Return the human readable summary printed after a batch."""

    converted_label = "Successfully converted"
    if report.dry_run:
        converted_label = "Would convert"
    lines = [
        "Conversion Summary:",
        "==================",
        f"Total themes processed: {report.attempted}",
        f"{converted_label}: {report.succeeded}",
        f"Failed conversions: {report.failed}",
    ]
    if report.failed_names:
        lines.append("Failed themes: " + ", ".join(report.failed_names))
    if report.dry_run:
        lines.append("")
        lines.append("Dry run completed. No files were modified.")
        for result in report.results:
            lines.append(f"  {result.source} -> {result.destination}")
    elif report.succeeded:
        lines.append("")
        lines.append("Successfully converted themes are available in:")
        lines.append(str(report.output_dir))
        lines.append(
            "Run './install.sh' in each theme directory to install them."
        )
    return "\n".join(lines)


def _convert(
    descriptor: ThemeDescriptor,
    *,
    policy: SymlinkPolicy,
    generated_at: datetime | None,
) -> list[Path]:
    palette = parse_palette(descriptor.source_directory, policy)
    files = render_theme(
        descriptor.name,
        palette,
        descriptor.output_directory,
        source_dir=descriptor.source_directory,
        generated_at=generated_at,
    )
    files.extend(
        write_documents(
            descriptor.name,
            palette,
            descriptor.output_directory,
            generated_at=generated_at,
        )
    )
    return files
