"""Dijkstra over (cell, heading, run) states for run-length-constrained movers.

A mover pays the cost of every cell it enters, never reverses, must turn
after ``max_run`` straight steps and may only turn once it has gone at
least ``min_run`` steps straight. Position alone does not determine the
legal continuations, so the search key is the full ``SearchState``.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from heat_route.grid.model import Cell, Grid, Heading


class SearchError(RuntimeError):
    """Base class for defined search failures."""


class Unreachable(SearchError):
    """No goal state satisfies the profile's stopping condition."""


class ResourceExhausted(SearchError):
    """The search finalized more states than its configured budget."""


@dataclass(frozen=True)
class MovementProfile:
    """Run-length bounds: turning needs ``min_run`` straight steps, ``max_run`` forces one."""

    min_run: int = 1
    max_run: int = 3

    def __post_init__(self) -> None:
        if self.min_run < 1:
            msg = f"min_run must be >= 1, got {self.min_run}."
            raise ValueError(msg)
        if self.max_run < self.min_run:
            msg = f"max_run ({self.max_run}) must be >= min_run ({self.min_run})."
            raise ValueError(msg)

    @property
    def label(self) -> str:
        return f"{self.min_run}:{self.max_run}"


DIRECT = MovementProfile(min_run=1, max_run=3)
LONG_HAUL = MovementProfile(min_run=4, max_run=10)
PROFILES: Dict[str, MovementProfile] = {"direct": DIRECT, "long_haul": LONG_HAUL}


class StartBearing(Enum):
    """Bearing of the start state, before any move has been made."""

    START = "start"


START = StartBearing.START
Bearing = Union[Heading, StartBearing]

# Dense table slot per bearing; START sits after the four real headings.
_BEARING_INDEX: Dict[Bearing, int] = {h: i for i, h in enumerate(Heading)}
_BEARING_INDEX[START] = len(_BEARING_INDEX)


@dataclass(frozen=True)
class SearchState:
    """Cell reached, bearing it was entered with, and straight steps so far."""

    cell: Cell
    bearing: Bearing
    run: int

    @property
    def is_start(self) -> bool:
        return self.bearing is START


@dataclass
class SearchResult:
    cost: int
    path: List[Cell]
    final_state: SearchState
    expanded: int
    pushed: int
    metrics: Dict[str, object] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        """Flatten into a dictionary suitable for CSV/JSON output."""
        return {
            "cost": self.cost,
            "path_len": len(self.path),
            "final_heading": self.final_state.bearing.name,
            "final_run": self.final_state.run,
            "expanded": self.expanded,
            "pushed": self.pushed,
            **self.metrics,
        }


class ConstrainedPathSearch:
    """Single-use minimum-cost search for one grid, profile, start and goal."""

    def __init__(
        self,
        grid: Grid,
        profile: MovementProfile = DIRECT,
        *,
        start: Cell | None = None,
        goal: Cell | None = None,
        max_states: int | None = None,
    ) -> None:
        self.grid = grid
        self.profile = profile
        self.start = grid.start() if start is None else tuple(start)
        self.goal = grid.goal() if goal is None else tuple(goal)
        for name, cell in (("start", self.start), ("goal", self.goal)):
            if not grid.in_bounds(cell):
                msg = f"{name} cell {cell} is outside the {grid.width}x{grid.height} grid."
                raise ValueError(msg)
        if max_states is not None and max_states < 1:
            msg = f"max_states must be positive, got {max_states}."
            raise ValueError(msg)
        self.max_states = max_states
        # A straight run can never be longer than the grid's longest side.
        self._run_cap = min(profile.max_run, max(grid.width, grid.height) - 1)

    # ------------------------------------------------------------------ API --
    def run(self) -> SearchResult:
        """Pop states in cost order until a goal state may legally stop there."""
        best = np.full(
            (self.grid.height, self.grid.width, len(_BEARING_INDEX), self._run_cap + 1),
            -1,
            dtype=np.int64,
        )
        parent: Dict[SearchState, Optional[SearchState]] = {}
        seq = 0
        origin = SearchState(self.start, START, 0)
        frontier: List[Tuple[int, int, SearchState, Optional[SearchState]]] = [
            (0, seq, origin, None)
        ]
        expanded = 0
        pushed = 1

        while frontier:
            cost, _, state, prev = heapq.heappop(frontier)
            key = self._key(state)
            if best[key] >= 0:
                continue
            best[key] = cost
            parent[state] = prev
            expanded += 1
            if self.max_states is not None and expanded > self.max_states:
                msg = (
                    f"finalized more than {self.max_states} states "
                    f"on a {self.grid.width}x{self.grid.height} grid."
                )
                raise ResourceExhausted(msg)

            if self._can_stop(state):
                return SearchResult(
                    cost=cost,
                    path=self._reconstruct_path(state, parent),
                    final_state=state,
                    expanded=expanded,
                    pushed=pushed,
                    metrics={"profile": self.profile.label},
                )

            for nxt in self._successors(state):
                if best[self._key(nxt)] >= 0:
                    continue
                seq += 1
                pushed += 1
                heapq.heappush(frontier, (cost + self.grid.cost(nxt.cell), seq, nxt, state))

        msg = (
            f"goal {self.goal} is unreachable from {self.start} "
            f"under profile {self.profile.label}."
        )
        raise Unreachable(msg)

    # -------------------------------------------------------------- internal --
    def _key(self, state: SearchState) -> tuple[int, int, int, int]:
        x, y = state.cell
        return (y, x, _BEARING_INDEX[state.bearing], state.run)

    def _can_stop(self, state: SearchState) -> bool:
        if state.cell != self.goal:
            return False
        if state.is_start:
            return True
        return state.run >= self.profile.min_run

    def _successors(self, state: SearchState) -> Iterator[SearchState]:
        for heading in Heading:
            if state.is_start:
                run = 1
            elif heading is state.bearing.opposite:
                continue
            elif heading is state.bearing:
                if state.run >= self.profile.max_run:
                    continue
                run = state.run + 1
            else:
                if state.run < self.profile.min_run:
                    continue
                run = 1
            cell = self.grid.neighbor(state.cell, heading)
            if cell is None:
                continue
            yield SearchState(cell, heading, run)

    def _reconstruct_path(
        self, end: SearchState, parent: Dict[SearchState, Optional[SearchState]]
    ) -> List[Cell]:
        path: List[Cell] = []
        cur: Optional[SearchState] = end
        while cur is not None:
            path.append(cur.cell)
            cur = parent[cur]
        path.reverse()
        return path


def minimum_cost(
    grid: Grid,
    profile: MovementProfile = DIRECT,
    *,
    start: Cell | None = None,
    goal: Cell | None = None,
    max_states: int | None = None,
) -> int:
    """Return the minimum total entry cost from start to goal under ``profile``."""
    search = ConstrainedPathSearch(
        grid, profile, start=start, goal=goal, max_states=max_states
    )
    return search.run().cost


__all__ = [
    "Bearing",
    "ConstrainedPathSearch",
    "DIRECT",
    "LONG_HAUL",
    "MovementProfile",
    "PROFILES",
    "ResourceExhausted",
    "SearchError",
    "SearchResult",
    "SearchState",
    "START",
    "StartBearing",
    "Unreachable",
    "minimum_cost",
]
