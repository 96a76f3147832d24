"""Data models for named patterns and pattern group trees."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Pattern:
    """A display name paired with a compiled regular expression."""

    name: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class Leaf(Generic[T]):
    """Single payload in a group tree."""

    value: T


@dataclass
class Group(Generic[T]):
    """Named container of sub-trees.

    The name labels an output section only; it plays no part in matching.
    """

    name: str
    children: list[GroupTree[T]] = field(default_factory=list)


GroupTree = Union[Leaf[T], Group[T]]


def leaf_count(forest: list[GroupTree[T]]) -> int:
    """Return the total number of leaves in a forest."""

    total = 0
    for tree in forest:
        if isinstance(tree, Leaf):
            total += 1
        else:
            total += leaf_count(tree.children)
    return total


def iter_leaves(forest: list[GroupTree[T]]) -> list[T]:
    """Return leaf payloads in depth-first document order."""

    values: list[T] = []
    for tree in forest:
        if isinstance(tree, Leaf):
            values.append(tree.value)
        else:
            values.extend(iter_leaves(tree.children))
    return values
