from __future__ import annotations

import io
import re

import pytest

from core.analysis.matcher import PatternMatcher
from core.patterns.models import Group, GroupTree, Leaf, Pattern


def _leaf(name: str, regex: str) -> Leaf[Pattern]:
    return Leaf(Pattern(name=name, regex=re.compile(regex)))


def _render(matcher: PatternMatcher) -> str:
    buffer = io.StringIO()
    matcher.format(buffer)
    return buffer.getvalue()


def test_records_every_distinct_match() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")], top=10)

    matcher.analyze("a1 b2")
    matcher.analyze("a1 c3")

    assert dict(matcher.patterns[0].matches) == {"1": 2, "2": 1, "3": 1}


def test_match_total_equals_occurrence_count() -> None:
    regex = r"\w+"
    lines = ["the cat sat", "the hat", "", "cat cat"]
    matcher = PatternMatcher([_leaf("word", regex)])

    for line in lines:
        matcher.analyze(line)

    expected = sum(len(re.findall(regex, line)) for line in lines)
    assert sum(matcher.patterns[0].matches.values()) == expected
    assert matcher.patterns[0].matches["cat"] == 3


def test_format_sorted_by_count_then_text_and_cut_to_top() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")], top=2)
    for line in ["3 1 2", "1 3", "1"]:
        matcher.analyze(line)

    assert _render(matcher) == "num\n\t1: 3\n\t3: 2\n"
    assert len(matcher.patterns[0].matches) == 3


def test_top_larger_than_table_shows_everything() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")], top=50)
    matcher.analyze("7 8")

    assert _render(matcher) == "num\n\t7: 1\n\t8: 1\n"


def test_unbounded_top_by_default() -> None:
    matcher = PatternMatcher([_leaf("letter", "[a-z]")])
    matcher.analyze("abcdefghij")

    rendered = _render(matcher).splitlines()
    assert rendered[0] == "letter"
    assert len(rendered) == 11


def test_format_uses_flat_order_without_group_headers() -> None:
    forest: list[GroupTree[Pattern]] = [
        Group(name="net", children=[_leaf("ip", r"\d+\.\d+"), _leaf("word", "[a-z]+")]),
        _leaf("colon", ":"),
    ]
    matcher = PatternMatcher(forest)
    matcher.analyze("ip: 1.2")

    assert _render(matcher) == "ip\n\t1.2: 1\nword\n\tip: 1\ncolon\n\t:: 1\n"


def test_pattern_without_matches_prints_only_name() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")])
    matcher.analyze("none here")

    assert _render(matcher) == "num\n"


def test_snapshot_reports_distinct_and_total() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")], top=1)
    matcher.analyze("a1 b2")
    matcher.analyze("a1 c3")

    report = matcher.snapshot().model_dump(mode="json")

    assert report == {
        "mode": "match",
        "top": 1,
        "patterns": [
            {
                "name": "num",
                "distinct": 3,
                "total": 4,
                "matches": [{"text": "1", "count": 2}],
            }
        ],
    }


def test_negative_top_rejected() -> None:
    with pytest.raises(ValueError, match="top must be non-negative"):
        PatternMatcher([_leaf("num", "[0-9]+")], top=-1)


def test_format_aligns_match_columns_per_pattern() -> None:
    matcher = PatternMatcher([_leaf("num", "[0-9]+")])
    for _ in range(10):
        matcher.analyze("100")
    matcher.analyze("7")

    assert _render(matcher) == "num\n\t100: 10\n\t7:    1\n"
