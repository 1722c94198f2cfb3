import numpy as np
import pytest

from heat_route.grid.model import MAX_COST, Grid, Heading, InvalidGrid


def test_from_text_parses_rows_and_shape():
    grid = Grid.from_text("\n123\n456\n")
    assert grid.width == 3
    assert grid.height == 2
    assert grid.cost((0, 0)) == 1
    assert grid.cost((2, 0)) == 3
    assert grid.cost((1, 1)) == 5
    assert grid.start() == (0, 0)
    assert grid.goal() == (2, 1)


def test_from_text_ignores_trailing_whitespace():
    assert Grid.from_text("12  \n34\r\n") == Grid([[1, 2], [3, 4]])


@pytest.mark.parametrize(
    "text",
    ["", "   \n\n", "123\n45", "12a\n456", "1-2\n345"],
)
def test_from_text_rejects_bad_input(text):
    with pytest.raises(InvalidGrid):
        Grid.from_text(text)


@pytest.mark.parametrize(
    "rows",
    [[], [[]], [[1, 2], [3]], [[1, -1]], [[1, 2.5]], [[True, 1]], [["1", 2]], [[1, 2**63]]],
)
def test_constructor_rejects_bad_costs(rows):
    with pytest.raises(InvalidGrid):
        Grid(rows)


def test_constructor_accepts_large_costs_and_arrays():
    grid = Grid([[0, 120], [7, 3]])
    assert grid.cost((1, 0)) == 120
    arr_grid = Grid(np.array([[0, 120], [7, 3]]))
    assert arr_grid == grid


def test_grid_is_immutable():
    source = [[1, 2], [3, 4]]
    grid = Grid(source)
    source[0][0] = 9
    assert grid.cost((0, 0)) == 1
    assert grid.costs.flags.writeable is False
    with pytest.raises(ValueError):
        grid.costs[0, 0] = 5


def test_cost_out_of_bounds_fails_loudly():
    grid = Grid([[1, 2], [3, 4]])
    with pytest.raises(AssertionError):
        grid.cost((2, 0))
    with pytest.raises(AssertionError):
        grid.cost((0, -1))


def test_neighbor_respects_bounds():
    grid = Grid([[1, 2, 3], [4, 5, 6]])
    assert grid.neighbor((0, 0), Heading.RIGHT) == (1, 0)
    assert grid.neighbor((0, 0), Heading.DOWN) == (0, 1)
    assert grid.neighbor((0, 0), Heading.UP) is None
    assert grid.neighbor((0, 0), Heading.LEFT) is None
    assert grid.neighbor((2, 1), Heading.RIGHT) is None
    assert grid.neighbor((2, 1), Heading.DOWN) is None


def test_heading_opposites():
    assert Heading.UP.opposite is Heading.DOWN
    assert Heading.DOWN.opposite is Heading.UP
    assert Heading.LEFT.opposite is Heading.RIGHT
    assert Heading.RIGHT.opposite is Heading.LEFT
    for heading in Heading:
        assert heading.opposite is not heading
        assert heading.opposite.opposite is heading


def test_to_graph_weights_edges_by_entry_cost():
    grid = Grid([[1, 2, 3], [4, 5, 6]])
    g = grid.to_graph()
    assert g.number_of_nodes() == 6
    assert g.number_of_edges() == 2 * (2 * 2 + 3 * 1)
    assert g[(0, 0)][(1, 0)]["weight"] == 2
    assert g[(1, 0)][(0, 0)]["weight"] == 1
    assert g[(1, 0)][(1, 1)]["weight"] == 5


def test_package_helper_builds_grid():
    from heat_route import grid_from_text

    assert grid_from_text("12\n34") == Grid([[1, 2], [3, 4]])


def test_costs_are_bounded_by_int64():
    assert Grid([[0, MAX_COST]]).cost((1, 0)) == MAX_COST
    with pytest.raises(InvalidGrid):
        Grid([[0, MAX_COST + 1]])
    with pytest.raises(InvalidGrid):
        Grid(np.array([[0, 2**64 - 1]], dtype=np.uint64))
