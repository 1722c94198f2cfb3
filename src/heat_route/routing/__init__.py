"""Routing utilities."""

from heat_route.routing.constrained import (
    DIRECT,
    LONG_HAUL,
    PROFILES,
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
    "ConstrainedPathSearch",
    "DIRECT",
    "LONG_HAUL",
    "MovementProfile",
    "PROFILES",
    "ResourceExhausted",
    "SearchError",
    "SearchResult",
    "SearchState",
    "Unreachable",
    "minimum_cost",
    "unconstrained_cost",
]
