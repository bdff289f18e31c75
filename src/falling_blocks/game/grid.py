from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class Grid:
    """Fixed-size boolean occupancy table backed by a flat numpy array.

    Cells are stored row-major, so ``(row, col)`` lives at
    ``row * column_count + col``. Bounds are not checked here; the owner
    fixes the dimensions once at construction.
    """

    def __init__(self, column_count: int, row_count: int) -> None:
        self.column_count = int(column_count)
        self.row_count = int(row_count)
        self.cells = np.zeros(self.column_count * self.row_count, dtype=np.bool_)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        grid = cls(len(rows[0]), len(rows))
        grid.cells[:] = np.asarray(rows, dtype=np.bool_).reshape(-1)
        return grid

    def index_of(self, row: int, col: int) -> int:
        return row * self.column_count + col

    def coords_of(self, index: int) -> Coordinate:
        return index // self.column_count, index % self.column_count

    def get(self, row: int, col: int) -> bool:
        return bool(self.cells[self.index_of(row, col)])

    def set(self, row: int, col: int, value: bool) -> None:
        self.cells[self.index_of(row, col)] = value

    def row_slice(self, row: int) -> np.ndarray:
        """Writable view of one row; assigning into it updates the grid."""
        start = row * self.column_count
        return self.cells[start : start + self.column_count]

    def copy_row(self, src: int, dst: int) -> None:
        if src == dst:
            return
        self.row_slice(dst)[:] = self.row_slice(src)

    def clear(self) -> None:
        self.cells.fill(False)

    def count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def occupied(self) -> Iterable[Coordinate]:
        for index in np.flatnonzero(self.cells):
            yield self.coords_of(int(index))

    def as_matrix(self) -> np.ndarray:
        return self.cells.reshape(self.row_count, self.column_count)

    def copy(self) -> "Grid":
        new_grid = Grid(self.column_count, self.row_count)
        new_grid.cells = self.cells.copy()
        return new_grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.column_count == other.column_count
                and self.row_count == other.row_count
                and bool(np.array_equal(self.cells, other.cells)))

    def __repr__(self) -> str:
        rows = ["".join("#" if v else "." for v in self.row_slice(r)) for r in range(self.row_count)]
        return f"Grid({self.column_count}x{self.row_count}: {'/'.join(rows)})"
