from __future__ import annotations

import io
import re

from core.analysis.counter import PatternCounter
from core.patterns.models import Group, GroupTree, Leaf, Pattern


def _leaf(name: str, regex: str) -> Leaf[Pattern]:
    return Leaf(Pattern(name=name, regex=re.compile(regex)))


def _render(counter: PatternCounter) -> str:
    buffer = io.StringIO()
    counter.format(buffer)
    return buffer.getvalue()


def test_counts_lines_not_occurrences() -> None:
    counter = PatternCounter([_leaf("digits", "[0-9]+"), _leaf("word", "[a-z]+")])

    for line in ["abc123", "456", "xyz"]:
        counter.analyze(line)

    assert counter.counts() == {"digits": 2, "word": 2}


def test_multiple_occurrences_in_one_line_count_once() -> None:
    counter = PatternCounter([_leaf("num", "[0-9]+")])

    counter.analyze("1 2 3 4 5")
    counter.analyze("no numbers")

    assert counter.counts() == {"num": 1}


def test_format_nests_groups() -> None:
    forest: list[GroupTree[Pattern]] = [
        Group(
            name="net",
            children=[
                _leaf("ip", r"\d+\.\d+\.\d+\.\d+"),
                _leaf("port", r":\d+\b"),
            ],
        )
    ]
    counter = PatternCounter(forest)

    counter.analyze("connect 10.0.0.1:8080")
    counter.analyze("listen :22")

    assert _render(counter) == "net:\n  ip:   1\n  port: 2\n"


def test_format_deep_nesting_indents_per_level() -> None:
    forest: list[GroupTree[Pattern]] = [
        Group(name="a", children=[Group(name="b", children=[_leaf("c", "c")])]),
    ]
    counter = PatternCounter(forest)
    counter.analyze("abc")

    assert _render(counter) == "a:\n  b:\n    c: 1\n"


def test_format_empty_group_prints_only_name() -> None:
    counter = PatternCounter([Group(name="empty", children=[])])
    counter.analyze("anything")

    assert len(counter.patterns) == 0
    assert _render(counter) == "empty:\n"


def test_format_uses_thousands_separator() -> None:
    counter = PatternCounter([_leaf("any", ".")])
    for _ in range(1234):
        counter.analyze("x")

    assert _render(counter) == "any: 1,234\n"


def test_format_order_is_structural_not_by_count() -> None:
    counter = PatternCounter([_leaf("rare", "z"), _leaf("common", "a")])
    for line in ["a", "a", "az"]:
        counter.analyze(line)

    assert _render(counter) == "rare:   1\ncommon: 3\n"


def test_snapshot_mirrors_shadow_tree() -> None:
    forest: list[GroupTree[Pattern]] = [
        Group(name="net", children=[_leaf("ip", r"\d+\.\d+"), _leaf("host", "[a-z]+")]),
        Group(name="empty", children=[]),
    ]
    counter = PatternCounter(forest)
    counter.analyze("host 1.2")

    report = counter.snapshot().model_dump(mode="json")

    assert report == {
        "mode": "count",
        "groups": [
            {"name": "empty", "count": None, "children": []},
            {
                "name": "net",
                "count": None,
                "children": [
                    {"name": "ip", "count": 1, "children": []},
                    {"name": "host", "count": 1, "children": []},
                ],
            },
        ],
    }


def test_format_pads_labels_and_right_aligns_counts() -> None:
    forest: list[GroupTree[Pattern]] = [
        _leaf("a", "a"),
        Group(name="grp", children=[_leaf("bb", "b")]),
    ]
    counter = PatternCounter(forest)
    for _ in range(1234):
        counter.analyze("a")
    counter.analyze("b")

    assert _render(counter) == "a:    1,234\ngrp:\n  bb:     1\n"
