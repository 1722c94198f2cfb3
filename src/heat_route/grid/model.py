"""Weighted cost grid with four-way movement and cost paid on entry."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence, Tuple

import networkx as nx
import numpy as np

Cell = Tuple[int, int]  # (col, row)
# Costs are stored as int64.
MAX_COST = int(np.iinfo(np.int64).max)


class InvalidGrid(ValueError):
    """Raised when grid input is empty or ragged, or holds a bad cost."""


class Heading(Enum):
    """Axis-aligned movement direction."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Heading":
        dx, dy = self.value
        return Heading((-dx, -dy))


class Grid:
    """Immutable rectangular mapping from (col, row) to entry cost."""

    def __init__(self, costs: Sequence[Sequence[int]] | np.ndarray):
        if isinstance(costs, np.ndarray):
            arr = np.array(costs)
        else:
            rows = [list(row) for row in costs]
            if not rows:
                raise InvalidGrid("grid must contain at least one row.")
            width = len(rows[0])
            for row_idx, row in enumerate(rows):
                if len(row) != width:
                    msg = f"row {row_idx} has length {len(row)}, expected {width}."
                    raise InvalidGrid(msg)
            arr = np.empty((len(rows), width), dtype=object)
            for row_idx, row in enumerate(rows):
                for col_idx, value in enumerate(row):
                    arr[row_idx, col_idx] = value
        if arr.ndim != 2:
            msg = f"grid must be two-dimensional, got {arr.ndim} dimension(s)."
            raise InvalidGrid(msg)
        if arr.size == 0:
            raise InvalidGrid("grid must contain at least one cell.")
        for value in arr.flat:
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                msg = f"cell cost {value!r} is not an integer."
                raise InvalidGrid(msg)
            if value < 0 or value > MAX_COST:
                msg = f"cell cost {value!r} is outside [0, {MAX_COST}]."
                raise InvalidGrid(msg)
        self._costs = arr.astype(np.int64)
        self._costs.setflags(write=False)

    # ------------------------------------------------------------------ build
    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """Parse a block of digit lines, one row per line."""
        lines = [line.rstrip() for line in text.strip().splitlines()]
        if not lines or not lines[0]:
            raise InvalidGrid("grid text is empty.")
        width = len(lines[0])
        rows: list[list[int]] = []
        for row_idx, line in enumerate(lines):
            if len(line) != width:
                msg = f"row {row_idx} has length {len(line)}, expected {width}."
                raise InvalidGrid(msg)
            row: list[int] = []
            for col_idx, ch in enumerate(line):
                if ch not in "0123456789":
                    msg = f"non-digit character {ch!r} at row {row_idx}, column {col_idx}."
                    raise InvalidGrid(msg)
                row.append(int(ch))
            rows.append(row)
        return cls(rows)

    # ----------------------------------------------------------------- shape
    @property
    def width(self) -> int:
        return int(self._costs.shape[1])

    @property
    def height(self) -> int:
        return int(self._costs.shape[0])

    @property
    def costs(self) -> np.ndarray:
        """Read-only ``[row][col]`` cost array."""
        return self._costs

    def start(self) -> Cell:
        return (0, 0)

    def goal(self) -> Cell:
        return (self.width - 1, self.height - 1)

    # ---------------------------------------------------------------- lookup
    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def cost(self, c: Cell) -> int:
        assert self.in_bounds(c), f"cell {c} outside {self.width}x{self.height} grid"
        x, y = c
        return int(self._costs[y, x])

    def neighbor(self, c: Cell, heading: Heading) -> Cell | None:
        dx, dy = heading.delta
        n = (c[0] + dx, c[1] + dy)
        return n if self.in_bounds(n) else None

    def cells(self) -> Iterable[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def to_graph(self) -> nx.DiGraph:
        """Directed 4-neighbour graph; edge u->v weighs the cost of entering v."""
        g = nx.DiGraph()
        g.add_nodes_from(self.cells())
        for c in self.cells():
            for heading in Heading:
                n = self.neighbor(c, heading)
                if n is not None:
                    g.add_edge(c, n, weight=self.cost(n))
        return g

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self._costs, other._costs)

    def __hash__(self) -> int:
        return hash((self._costs.shape, self._costs.tobytes()))

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
