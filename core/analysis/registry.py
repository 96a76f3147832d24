"""Analyzer registry for CLI mode resolution."""

from __future__ import annotations

from core.analysis.base import Analyzer
from core.analysis.counter import PatternCounter
from core.analysis.matcher import PatternMatcher
from core.patterns.models import GroupTree, Pattern

_SUPPORTED_MODES = ("count", "match")


def create_analyzer(
    mode: str, forest: list[GroupTree[Pattern]], *, top: int | None = None
) -> Analyzer:
    """Instantiate a fresh analyzer for one input file."""

    if mode == "count":
        return PatternCounter(forest)
    if mode == "match":
        return PatternMatcher(forest, top=top)
    raise ValueError(f"Unsupported analysis mode: {mode}")


def list_supported_modes() -> list[str]:
    """Return supported analysis modes in stable order."""

    return sorted(_SUPPORTED_MODES)
