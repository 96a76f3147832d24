"""Pattern file loading utilities."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from core.patterns.models import Group, GroupTree, Leaf, Pattern
from core.utils.errors import PatternConfigError


def load_patterns(path: Path) -> list[GroupTree[Pattern]]:
    """Load a pattern forest from YAML.

    Each mapping value is either a regex string (a named pattern) or another
    mapping (a named group). Document order is preserved.
    """

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PatternConfigError(f"Pattern file not found: {path}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise PatternConfigError(f"Pattern file is not valid UTF-8: {path}", path=path) from exc
    except yaml.YAMLError as exc:
        raise PatternConfigError(f"Invalid YAML in pattern file: {path}", path=path) from exc

    if not isinstance(raw, Mapping):
        raise PatternConfigError(f"Pattern file must contain a mapping: {path}", path=path)

    return parse_pattern_document(raw, path=path)


def parse_pattern_document(
    raw: Mapping[object, object], *, path: Path | None = None
) -> list[GroupTree[Pattern]]:
    """Convert an already parsed document into a pattern forest.

    Every invalid regex is collected before failing so one error lists all of
    them.
    """

    invalid: list[str] = []
    forest = _convert_mapping(raw, invalid, path, trail=())
    if invalid:
        raise PatternConfigError(
            f"Unable to convert the following patterns: {invalid}",
            path=path,
            invalid_patterns=invalid,
        )
    return forest


def _convert_mapping(
    raw: Mapping[object, object],
    invalid: list[str],
    path: Path | None,
    trail: tuple[str, ...],
) -> list[GroupTree[Pattern]]:
    forest: list[GroupTree[Pattern]] = []
    for key, value in raw.items():
        name = str(key)
        if isinstance(value, str):
            try:
                regex = re.compile(value)
            except (re.error, OverflowError, RecursionError):
                invalid.append(value)
                continue
            forest.append(Leaf(Pattern(name=name, regex=regex)))
        elif isinstance(value, Mapping):
            children = _convert_mapping(value, invalid, path, trail + (name,))
            forest.append(Group(name=name, children=children))
        elif value is None:
            # `name:` with nothing after it is an empty group.
            forest.append(Group(name=name, children=[]))
        else:
            location = ".".join(trail + (name,))
            raise PatternConfigError(
                f"Pattern '{location}' must be a regex string or a mapping, "
                f"got {type(value).__name__}",
                path=path,
            )
    return forest
