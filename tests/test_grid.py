from __future__ import annotations

import numpy as np

from falling_blocks.game import Grid


def test_new_grid_is_empty_and_flat():
    grid = Grid(5, 3)
    assert grid.cells.shape == (15,)
    assert grid.count() == 0


def test_index_conversion_round_trips():
    grid = Grid(7, 4)
    assert grid.index_of(2, 3) == 17
    assert grid.coords_of(17) == (2, 3)
    for index in range(28):
        assert grid.index_of(*grid.coords_of(index)) == index


def test_set_and_get():
    grid = Grid(4, 4)
    grid.set(1, 2, True)
    assert grid.get(1, 2)
    assert not grid.get(2, 1)
    assert grid.cells[6]


def test_row_slice_is_a_writable_view():
    grid = Grid(3, 2)
    grid.row_slice(1)[:] = True
    assert list(grid.occupied()) == [(1, 0), (1, 1), (1, 2)]
    assert not grid.row_slice(0).any()


def test_copy_row_leaves_source_intact():
    grid = Grid.from_rows([[1, 0, 1], [0, 0, 0], [0, 1, 0]])
    grid.copy_row(0, 1)
    assert np.array_equal(grid.as_matrix(), np.array([[1, 0, 1], [1, 0, 1], [0, 1, 0]], dtype=bool))


def test_copy_is_independent():
    grid = Grid.from_rows([[1, 0], [0, 1]])
    other = grid.copy()
    other.set(0, 1, True)
    assert not grid.get(0, 1)
    assert grid != other
