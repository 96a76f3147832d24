"""Analyzer interface definitions."""

from __future__ import annotations

from typing import Protocol, TextIO

from pydantic import BaseModel


class Analyzer(Protocol):
    """Protocol for line-by-line pattern analyzers.

    One instance covers one input file; state never carries over.
    """

    mode: str

    def analyze(self, line: str) -> None:
        """Update analysis state with one line of text."""

    def format(self, sink: TextIO) -> None:
        """Write a human-readable report to ``sink``."""

    def snapshot(self) -> BaseModel:
        """Return the current results as a report model."""


def format_count(value: int) -> str:
    """Render a count with thousands separators."""

    return f"{value:,}"
