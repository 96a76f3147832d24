"""Custom exceptions for core logic."""

from __future__ import annotations

from pathlib import Path


class PatternConfigError(Exception):
    """Raised when a pattern file cannot be turned into a pattern forest."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        invalid_patterns: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.invalid_patterns = invalid_patterns or []


class InputFileError(Exception):
    """Raised when an input file cannot be opened or decoded."""

    def __init__(self, message: str, *, path: Path, line_number: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.line_number = line_number
