"""Exception hierarchy shared by the conversion pipeline."""

from __future__ import annotations

from pathlib import Path


class ConverterError(Exception):
    """Base class for conversion failures.

    ``remedy`` holds an optional hint shown to the user alongside the
    message when the error is fatal.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        remedy: str = "",
    ) -> None:
        super().__init__(message)
        self.path = path
        self.remedy = remedy


class ConfigurationError(ConverterError):
    """Raised when the environment is unusable before any theme work."""


class NotFoundError(ConfigurationError):
    """Raised when the theme source directory does not exist."""


class DiscoveryError(ConverterError):
    """Raised when theme discovery cannot produce any candidates."""


class EmptyResultError(DiscoveryError):
    """Raised when a scan finds no directory holding a palette file."""


class ParseError(ConverterError):
    """Raised when a palette file is missing, unreadable or malformed."""


class RenderError(ConverterError):
    """Raised when an output file for a theme cannot be written."""
