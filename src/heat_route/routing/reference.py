"""Plain positional shortest path, used to cross-check the constrained search."""

from __future__ import annotations

import networkx as nx

from heat_route.grid.model import Cell, Grid
from heat_route.routing.constrained import Unreachable


def unconstrained_cost(grid: Grid, *, start: Cell | None = None, goal: Cell | None = None) -> int:
    """Minimum entry cost from start to goal ignoring heading and run limits."""
    src = grid.start() if start is None else start
    dst = grid.goal() if goal is None else goal
    for name, cell in (("start", src), ("goal", dst)):
        if not grid.in_bounds(cell):
            msg = f"{name} cell {cell} is outside the grid."
            raise IndexError(msg)
    try:
        return int(nx.dijkstra_path_length(grid.to_graph(), src, dst, weight="weight"))
    except nx.NetworkXNoPath as exc:
        msg = f"{dst} is unreachable from {src}."
        raise Unreachable(msg) from exc


__all__ = ["unconstrained_cost"]
