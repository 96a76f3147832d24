"""Frequency tables of distinct matched substrings per pattern."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TextIO

from core.analysis.base import format_count
from core.analysis.models import MatchEntry, MatchReport, MatchTable
from core.patterns.group import FlatGroup
from core.patterns.models import GroupTree, Pattern


@dataclass
class PatternMatches:
    """Per-pattern match table state."""

    pattern: Pattern
    matches: Counter[str] = field(default_factory=Counter)

    def ranked(self, top: int | None = None) -> list[tuple[str, int]]:
        """Return matches by descending count, ties by text, cut to ``top``."""

        ordered = sorted(self.matches.items(), key=lambda item: (-item[1], item[0]))
        if top is None:
            return ordered
        return ordered[:top]


class PatternMatcher:
    """Records every non-overlapping match of every pattern.

    ``top`` limits how many distinct matches are shown per pattern; all of them
    are still recorded.
    """

    mode = "match"

    def __init__(self, forest: list[GroupTree[Pattern]], top: int | None = None) -> None:
        if top is not None and top < 0:
            raise ValueError(f"top must be non-negative, got {top}")
        self.patterns: FlatGroup[PatternMatches] = FlatGroup.from_tree(forest, PatternMatches)
        self.top = top

    def analyze(self, line: str) -> None:
        for entry in self.patterns:
            for match in entry.pattern.regex.finditer(line):
                entry.matches[match.group(0)] += 1

    def format(self, sink: TextIO) -> None:
        # Flat order: group nesting is not rebuilt for match tables.
        for entry in self.patterns:
            sink.write(f"{entry.pattern.name}\n")
            rows = [(f"{text}:", format_count(count)) for text, count in entry.ranked(self.top)]
            label_width = max((len(label) for label, _ in rows), default=0)
            count_width = max((len(count) for _, count in rows), default=0)
            for label, count in rows:
                sink.write(f"\t{label:<{label_width}} {count:>{count_width}}\n")

    def snapshot(self) -> MatchReport:
        tables = [
            MatchTable(
                name=entry.pattern.name,
                distinct=len(entry.matches),
                total=sum(entry.matches.values()),
                matches=[
                    MatchEntry(text=text, count=count) for text, count in entry.ranked(self.top)
                ],
            )
            for entry in self.patterns
        ]
        return MatchReport(top=self.top, patterns=tables)
