"""Error types raised by ImplScan.

Only I/O failures are errors. A file without a namespace line, an interface
with no declaration, or a body scan that runs off the end of a file all
degrade to fewer (or degenerate) records instead.
"""

from __future__ import annotations

from pathlib import Path


class ImplScanError(Exception):
    """Base error for all fatal scrape failures."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class SolutionLoadError(ImplScanError):
    """A solution or project file is missing or cannot be parsed."""


class SourceReadError(ImplScanError):
    """A source file could not be read or decoded."""


class OutputWriteError(ImplScanError):
    """The result file could not be written."""


__all__ = ["ImplScanError", "OutputWriteError", "SolutionLoadError", "SourceReadError"]
