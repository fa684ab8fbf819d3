"""
test_grid.py: Unit tests for the flow grid
"""

import pytest
import numpy as np
from pyonedim.core.grid import FlowGrid
from pyonedim.core.errors import InvalidGridError


@pytest.fixture
def basic_grid():
    """Create a basic grid for testing"""
    grid = FlowGrid(n_components=6)
    grid.setupGrid([0.0, 0.1, 0.3, 0.6, 1.0])
    return grid


def test_grid_metrics(basic_grid):
    """Test computation of grid metrics"""
    grid = basic_grid
    assert grid.nPoints == 5
    assert grid.jj == 4
    assert len(grid.hh) == grid.jj
    np.testing.assert_allclose(grid.hh, [0.1, 0.2, 0.3, 0.4])

    # Half widths of interior cells, zero at the ends
    np.testing.assert_allclose(grid.dlj, [0.0, 0.15, 0.25, 0.35, 0.0])
    assert grid.zmin == 0.0
    assert grid.zmax == 1.0


def test_normalized_coordinates():
    grid = FlowGrid()
    grid.setupGrid([0.02, 0.03, 0.06])
    np.testing.assert_allclose(grid.normalized(), [0.0, 0.25, 1.0])


def test_resize_callbacks():
    """Callbacks receive the new point count on every setup"""
    grid = FlowGrid()
    sizes = []
    grid.add_resize_callback(sizes.append)
    grid.setupGrid(np.linspace(0, 1, 4))
    grid.setupGrid(np.linspace(0, 1, 9))
    assert sizes == [4, 9]


def test_grid_copies_input():
    z = np.linspace(0, 1, 5)
    grid = FlowGrid()
    grid.setupGrid(z)
    z[2] = 10.0
    assert grid.z[2] == 0.5


@pytest.mark.parametrize("z", [
    [0.0],
    [0.0, 0.5, 0.5, 1.0],
    [0.0, 0.6, 0.4],
    [0.0, np.nan, 1.0],
])
def test_invalid_grids(z):
    grid = FlowGrid()
    with pytest.raises(InvalidGridError):
        grid.setupGrid(z)


def test_invalid_grid_is_a_value_error():
    with pytest.raises(ValueError):
        FlowGrid().setupGrid([1.0, 0.0])


def test_refinement_hooks(basic_grid):
    grid = basic_grid
    assert not grid.active(2)
    grid.setActive(2, True)
    assert grid.active(2)

    grid.setCriteria(ratio=5.0, slope=0.1, curve=0.2, prune=0.05)
    assert grid.criteria.ratio == 5.0
    assert grid.criteria.prune == 0.05

    grid.setExtraVar([1.0, 2.0, 3.0, 4.0, 5.0])
    np.testing.assert_allclose(grid.extra_var, [1, 2, 3, 4, 5])
