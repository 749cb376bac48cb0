"""Exceptions raised by the analyzer and the configuration loader."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class AnalysisError(Exception):
    """Fatal error for a single file; no partial results are produced for it."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class IoFailure(AnalysisError):
    """Raised when a source file cannot be read or decoded."""


class SyntaxFailure(AnalysisError):
    """Raised when the syntax tree cannot be constructed."""


class ConfigError(Exception):
    """Raised when the configuration file is malformed."""
