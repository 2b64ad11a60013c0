"""A small grid game: mark cells until a whole row or column holds ones."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

__all__ = ["Outcome", "Board", "format_grid"]

_MIN_SIZE = 1
_MAX_SIZE = 20


class Outcome(enum.Enum):
    """Result of marking a cell on a :class:`Board`."""

    CONTINUE = ""
    ROW = "OX-XO-XO"
    COLUMN = "AX-XA-XA"


def format_grid(grid: Iterable[Iterable[int]]) -> str:
    """Render rows of numbers, each value followed by a space, one row per line."""
    return "".join(
        "".join(f"{value} " for value in row) + "\n" for row in grid
    )


class Board:
    """A rows x cols grid of counters, all starting at zero."""

    def __init__(self, rows: int, cols: int) -> None:
        for name, size in (("rows", rows), ("cols", cols)):
            if not _MIN_SIZE <= size <= _MAX_SIZE:
                raise ValueError(
                    f"{name} must be between {_MIN_SIZE} and {_MAX_SIZE}, got {size}"
                )
        self.rows = rows
        self.cols = cols
        self._cells = [[0] * cols for _ in range(rows)]

    @property
    def cells(self) -> list[list[int]]:
        """A copy of the current counters."""
        return [list(row) for row in self._cells]

    def mark(self, row: int, col: int) -> Outcome:
        """Increment one cell and report whether a row or column is all ones.

        Rows are checked before columns.
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"cell ({row}, {col}) is outside the board")
        self._cells[row][col] += 1
        if any(self._all_ones(r) for r in self._cells):
            return Outcome.ROW
        if any(self._all_ones(c) for c in zip(*self._cells)):
            return Outcome.COLUMN
        return Outcome.CONTINUE

    def render(self) -> str:
        """Return the board in the :func:`format_grid` layout."""
        return format_grid(self._cells)

    @staticmethod
    def _all_ones(values: Sequence[int]) -> bool:
        return all(value == 1 for value in values)