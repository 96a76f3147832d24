"""Flattened pattern groups.

A ``FlatGroup`` turns a forest of ``GroupTree`` values into two parts:

- ``flat``: per-leaf analysis state in depth-first visiting order, so that
  analyzers can scan every pattern with a plain loop;
- ``shadow``: a forest with the same shape as the input where every leaf holds
  its index into ``flat``. Formatters walk it to rebuild the original nesting.

Shadow children are sorted after construction (leaves first by index, then
groups by name) so output ordering never depends on the input mapping order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from core.patterns.models import Group, GroupTree, Leaf

T = TypeVar("T")
V = TypeVar("V")

ShadowTree = GroupTree[int]


class FlatGroup(Generic[V]):
    """Flat analysis state plus a shadow index tree mirroring the input forest."""

    __slots__ = ("_flat", "_shadow")

    def __init__(self, flat: list[V], shadow: list[ShadowTree]) -> None:
        self._flat = flat
        self._shadow = shadow

    @classmethod
    def from_tree(cls, forest: list[GroupTree[T]], convert: Callable[[T], V]) -> FlatGroup[V]:
        """Flatten ``forest``, converting every leaf payload with ``convert``."""

        flat: list[V] = []

        def traverse(tree: GroupTree[T]) -> ShadowTree:
            if isinstance(tree, Leaf):
                flat.append(convert(tree.value))
                return Leaf(len(flat) - 1)
            children = [traverse(child) for child in tree.children]
            return Group(name=tree.name, children=_sorted_shadow(children))

        shadow = _sorted_shadow([traverse(tree) for tree in forest])
        return cls(flat, shadow)

    @property
    def flat(self) -> list[V]:
        return self._flat

    @property
    def shadow(self) -> list[ShadowTree]:
        return self._shadow

    def __len__(self) -> int:
        return len(self._flat)

    def __iter__(self) -> Iterator[V]:
        return iter(self._flat)

    def __getitem__(self, index: int) -> V:
        return self._flat[index]

    def walk(self) -> Iterator[tuple[int, ShadowTree]]:
        """Yield ``(depth, node)`` pairs over the shadow forest, depth first."""

        def visit(nodes: list[ShadowTree], depth: int) -> Iterator[tuple[int, ShadowTree]]:
            for node in nodes:
                yield depth, node
                if isinstance(node, Group):
                    yield from visit(node.children, depth + 1)

        yield from visit(self._shadow, 0)


def _sorted_shadow(nodes: list[ShadowTree]) -> list[ShadowTree]:
    return sorted(nodes, key=_shadow_sort_key)


def _shadow_sort_key(node: ShadowTree) -> tuple[int, int, str]:
    if isinstance(node, Leaf):
        return (0, node.value, "")
    return (1, 0, node.name)
