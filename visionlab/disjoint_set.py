"""Disjoint-set forest with union by rank and size tracking."""

from __future__ import annotations

__all__ = ["DisjointSet"]


class DisjointSet:
    """A collection of ``size`` elements, each starting in a set of its own."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self._parents: list[int | None] = [None] * size
        self._ranks = [0] * size
        self._sizes = [1] * size

    def __len__(self) -> int:
        return len(self._parents)

    def _check(self, element: int) -> None:
        if not 0 <= element < len(self._parents):
            raise IndexError(f"element {element} is out of range")

    def get_set(self, element: int) -> int:
        """Return the representative (root) of the set holding ``element``."""
        self._check(element)
        while (parent := self._parents[element]) is not None:
            element = parent
        return element

    def get_set_size(self, element: int) -> int:
        """Return the number of elements in the set holding ``element``."""
        return self._sizes[self.get_set(element)]

    def union_sets(self, element0: int, element1: int) -> int:
        """Merge the sets of two elements and return the merged set's root.

        The lower-ranked tree is hung under the other; on a tie the set of
        ``element1`` joins the set of ``element0``.
        """
        root0 = self.get_set(element0)
        root1 = self.get_set(element1)
        if root0 == root1:
            return root0
        if self._ranks[root0] < self._ranks[root1]:
            root0, root1 = root1, root0
        self._parents[root1] = root0
        self._sizes[root0] += self._sizes[root1]
        if self._ranks[root0] == self._ranks[root1]:
            self._ranks[root0] += 1
        return root0

    def count_sets(self) -> int:
        """Return how many distinct sets there are."""
        return sum(1 for parent in self._parents if parent is None)