"""heat-route package."""

from heat_route.eval.sweep import evaluate_profiles, parse_profile, solve
from heat_route.grid.model import Cell, Grid, Heading, InvalidGrid
from heat_route.routing.constrained import (
    DIRECT,
    LONG_HAUL,
    PROFILES,
    START,
    ConstrainedPathSearch,
    MovementProfile,
    ResourceExhausted,
    SearchError,
    SearchResult,
    SearchState,
    Unreachable,
    minimum_cost,
)
from heat_route.routing.reference import unconstrained_cost

__all__ = [
    "Cell",
    "ConstrainedPathSearch",
    "DIRECT",
    "Grid",
    "Heading",
    "InvalidGrid",
    "LONG_HAUL",
    "MovementProfile",
    "PROFILES",
    "ResourceExhausted",
    "START",
    "SearchError",
    "SearchResult",
    "SearchState",
    "Unreachable",
    "evaluate_profiles",
    "minimum_cost",
    "parse_profile",
    "solve",
    "unconstrained_cost",
    "grid_from_text",
]


def grid_from_text(text: str) -> Grid:
    """Helper to build a Grid from a block of digit lines."""
    return Grid.from_text(text)
