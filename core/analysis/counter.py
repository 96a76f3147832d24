"""Count how many lines each pattern matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from core.analysis.base import format_count
from core.analysis.models import CountNode, CountReport
from core.patterns.group import FlatGroup, ShadowTree
from core.patterns.models import GroupTree, Leaf, Pattern

INDENT = "  "


@dataclass
class PatternCount:
    """Per-pattern counter state."""

    pattern: Pattern
    count: int = 0


class PatternCounter:
    """Counts matching lines per pattern and reports them in group nesting.

    A line counts once per pattern no matter how many occurrences it holds.
    """

    mode = "count"

    def __init__(self, forest: list[GroupTree[Pattern]]) -> None:
        self.patterns: FlatGroup[PatternCount] = FlatGroup.from_tree(forest, PatternCount)

    def analyze(self, line: str) -> None:
        for entry in self.patterns:
            if entry.pattern.regex.search(line) is not None:
                entry.count += 1

    def format(self, sink: TextIO) -> None:
        # Leaf labels are padded to the widest one and counts right-aligned.
        rows: list[tuple[str, str | None]] = []
        for depth, node in self.patterns.walk():
            indent = INDENT * depth
            if isinstance(node, Leaf):
                entry = self.patterns[node.value]
                rows.append((f"{indent}{entry.pattern.name}:", format_count(entry.count)))
            else:
                rows.append((f"{indent}{node.name}:", None))

        leaves = [(label, count) for label, count in rows if count is not None]
        label_width = max((len(label) for label, _ in leaves), default=0)
        count_width = max((len(count) for _, count in leaves), default=0)
        for label, count in rows:
            if count is None:
                sink.write(f"{label}\n")
            else:
                sink.write(f"{label:<{label_width}} {count:>{count_width}}\n")

    def snapshot(self) -> CountReport:
        return CountReport(groups=[self._node(tree) for tree in self.patterns.shadow])

    def counts(self) -> dict[str, int]:
        """Return counts keyed by pattern name, in flat order."""

        return {entry.pattern.name: entry.count for entry in self.patterns}

    def _node(self, tree: ShadowTree) -> CountNode:
        if isinstance(tree, Leaf):
            entry = self.patterns[tree.value]
            return CountNode(name=entry.pattern.name, count=entry.count)
        return CountNode(name=tree.name, children=[self._node(child) for child in tree.children])
