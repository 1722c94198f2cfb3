import numpy as np
import pytest

from heat_route.grid.model import Grid
from heat_route.routing.constrained import MovementProfile, minimum_cost
from heat_route.routing.reference import unconstrained_cost

EXAMPLE = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""

UNBOUNDED = MovementProfile(min_run=1, max_run=10**6)


def _random_grid(seed: int, height: int, width: int) -> Grid:
    rng = np.random.default_rng(seed)
    return Grid(rng.integers(0, 10, size=(height, width)))


def test_unbounded_profile_matches_plain_dijkstra_on_example():
    grid = Grid.from_text(EXAMPLE)
    assert minimum_cost(grid, UNBOUNDED) == unconstrained_cost(grid)


@pytest.mark.parametrize("seed", range(6))
def test_unbounded_profile_matches_plain_dijkstra_on_random_grids(seed):
    grid = _random_grid(seed, height=3 + seed % 4, width=4 + seed)
    assert minimum_cost(grid, UNBOUNDED) == unconstrained_cost(grid)


def test_constrained_cost_never_beats_plain_dijkstra():
    grid = Grid.from_text(EXAMPLE)
    plain = unconstrained_cost(grid)
    for profile in (MovementProfile(1, 3), MovementProfile(4, 10), MovementProfile(2, 6)):
        assert minimum_cost(grid, profile) >= plain


def test_reference_handles_custom_endpoints():
    grid = Grid.from_text("131\n919\n111")
    assert unconstrained_cost(grid) == 3 + 1 + 1 + 1
    assert unconstrained_cost(grid, start=(1, 1), goal=(1, 1)) == 0
    assert unconstrained_cost(grid, start=(2, 2), goal=(0, 0)) == 1 + 1 + 3 + 1


def test_reference_rejects_cells_outside_grid():
    grid = Grid([[1, 1]])
    with pytest.raises(IndexError):
        unconstrained_cost(grid, goal=(5, 5))
    with pytest.raises(IndexError):
        unconstrained_cost(grid, start=(3, 0))
