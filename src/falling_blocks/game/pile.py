from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .grid import Coordinate, Grid
from .pieces import Piece, PieceColor


class Pile:
    """Landed blocks.

    The grid answers collision queries; ``colors`` keeps the colour of every
    occupied cell for rendering. A cell is in ``colors`` exactly when it is
    set in the grid.
    """

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        self.grid = Grid(columns, rows)
        self.colors: Dict[Coordinate, PieceColor] = {}

    def reset(self) -> None:
        self.grid.clear()
        self.colors.clear()

    def contains(self, row: int, col: int) -> bool:
        return self.grid.get(row, col)

    def add(self, piece: Piece) -> None:
        color = piece.color
        for row, col in piece.get_positions():
            self.grid.set(row, col, True)
            self.colors[(row, col)] = color

    def cells(self) -> Iterator[Tuple[Coordinate, PieceColor]]:
        return iter(sorted(self.colors.items()))

    def height(self) -> int:
        """Number of rows from the floor up to the highest landed block."""
        if not self.colors:
            return 0
        return self.rows - min(row for row, _ in self.colors)

    def _is_complete_line_with(self, line: int, additional: Set[Coordinate]) -> bool:
        for col, value in enumerate(self.grid.row_slice(line)):
            if not value and (line, col) not in additional:
                return False
        return True

    def get_complete_lines_with(self, positions: Iterable[Coordinate]) -> List[int]:
        extra = set(positions)
        candidates = sorted({row for row, _ in extra if 0 <= row < self.rows})
        return [line for line in candidates if self._is_complete_line_with(line, extra)]

    def _copy_line(self, src: int, dst: int) -> None:
        self.grid.copy_row(src, dst)
        for col, value in enumerate(self.grid.row_slice(dst)):
            if value:
                self.colors[(dst, col)] = self.colors[(src, col)]
            else:
                self.colors.pop((dst, col), None)

    def _remove_line(self, line: int) -> None:
        self.grid.row_slice(line)[:] = False
        for col in range(self.columns):
            self.colors.pop((line, col), None)

    def cleanup_full_lines(self) -> int:
        """Remove full rows and compact the rest downward in one pass.

        Rows are scanned bottom-up with a write cursor. Each surviving row is
        copied to the cursor, so it drops by exactly the number of full rows
        below it. Returns the number of rows removed.
        """
        current = self.rows - 1
        cleaned_up = 0
        empty: Set[Coordinate] = set()

        for line in range(self.rows - 1, -1, -1):
            if self._is_complete_line_with(line, empty):
                self._remove_line(line)
                cleaned_up += 1
                continue
            if line != current:
                self._copy_line(line, current)
                self._remove_line(line)
            current -= 1

        for line in range(current + 1):
            self._remove_line(line)
        return cleaned_up
