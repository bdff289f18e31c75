from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .grid import Coordinate, Grid


class PiecePlacementError(AssertionError):
    """Raised when absolute positions are requested for a piece hanging off the board."""


class ShapeKind(IntEnum):
    SQUARE = 0
    L = 1
    STRAIGHT = 2
    REVERSE_L = 3
    T = 4
    WORM = 5
    REVERSE_WORM = 6


class PieceColor(IntEnum):
    RED = 1
    BLUE = 2
    LIGHT_BLUE = 3
    YELLOW = 4
    LIGHT_YELLOW = 5
    GREEN = 6
    MAGENTA = 7


_COLORS: Dict[ShapeKind, PieceColor] = {
    ShapeKind.SQUARE: PieceColor.RED,
    ShapeKind.L: PieceColor.GREEN,
    ShapeKind.STRAIGHT: PieceColor.LIGHT_BLUE,
    ShapeKind.REVERSE_L: PieceColor.BLUE,
    ShapeKind.T: PieceColor.LIGHT_YELLOW,
    ShapeKind.WORM: PieceColor.YELLOW,
    ShapeKind.REVERSE_WORM: PieceColor.MAGENTA,
}


def color_for(kind: ShapeKind) -> PieceColor:
    return _COLORS[kind]


# Every template is square so rotation stays well defined; the straight
# piece is padded to 4x4 for that reason.
TEMPLATES: Dict[ShapeKind, List[List[int]]] = {
    ShapeKind.SQUARE: [[1, 1],
                       [1, 1]],
    ShapeKind.L: [[0, 0, 1],
                  [1, 1, 1],
                  [0, 0, 0]],
    ShapeKind.REVERSE_L: [[1, 0, 0],
                          [1, 1, 1],
                          [0, 0, 0]],
    ShapeKind.STRAIGHT: [[0, 0, 0, 0],
                         [1, 1, 1, 1],
                         [0, 0, 0, 0],
                         [0, 0, 0, 0]],
    ShapeKind.T: [[0, 1, 0],
                  [1, 1, 1],
                  [0, 0, 0]],
    ShapeKind.WORM: [[1, 1, 0],
                     [0, 1, 1],
                     [0, 0, 0]],
    ShapeKind.REVERSE_WORM: [[0, 1, 1],
                             [1, 1, 0],
                             [0, 0, 0]],
}


def template_for(kind: ShapeKind) -> Grid:
    return Grid.from_rows(TEMPLATES[kind])


def random_kind(rng: random.Random) -> ShapeKind:
    return rng.choice(list(ShapeKind))


class Piece:
    """A tetromino: a square local template plus an anchor on the board.

    Movement here is pure geometry. The ``*_unsafe`` moves never look at the
    board, callers validate them against the pile first.
    """

    def __init__(self, kind: ShapeKind, anchor_x: int = 0, anchor_y: int = 0,
                 template: Optional[Grid] = None) -> None:
        self.kind = ShapeKind(kind)
        self.anchor_x = int(anchor_x)
        self.anchor_y = int(anchor_y)
        self.template = template if template is not None else template_for(self.kind)

    @classmethod
    def random_at(cls, anchor_x: int, anchor_y: int, rng: random.Random) -> "Piece":
        return cls(random_kind(rng), anchor_x, anchor_y)

    @property
    def color(self) -> PieceColor:
        return color_for(self.kind)

    @property
    def size(self) -> int:
        return self.template.column_count

    def _rotated(self, clockwise: bool) -> Grid:
        matrix = self.template.as_matrix()
        if clockwise:
            rotated = np.rot90(matrix, 1, axes=(1, 0))  # new[i][j] = old[n-1-j][i]
        else:
            rotated = np.rot90(matrix, 1)  # new[i][j] = old[j][n-1-i]
        new_template = Grid(self.size, self.size)
        new_template.cells = np.array(rotated, dtype=np.bool_).reshape(-1)
        return new_template

    def rotate_clockwise(self) -> None:
        self.template = self._rotated(clockwise=True)

    def rotate_counter_clockwise(self) -> None:
        self.template = self._rotated(clockwise=False)

    def get_positions_unsafe(self) -> List[Tuple[int, int]]:
        """Board (row, col) pairs of the four blocks; may be off the board."""
        return [(row + self.anchor_y, col + self.anchor_x) for row, col in self.template.occupied()]

    def get_positions(self) -> List[Coordinate]:
        positions = self.get_positions_unsafe()
        for row, col in positions:
            if row < 0 or col < 0:
                raise PiecePlacementError(
                    f"{self.kind.name} at anchor ({self.anchor_x}, {self.anchor_y}) "
                    f"has a block at ({row}, {col})"
                )
        return positions

    def move_down_unsafe(self) -> None:
        self.anchor_y += 1

    def move_left_unsafe(self) -> None:
        self.anchor_x -= 1

    def move_right_unsafe(self) -> None:
        self.anchor_x += 1

    def place_at(self, anchor_x: int, anchor_y: int) -> None:
        self.anchor_x = anchor_x
        self.anchor_y = anchor_y

    def swap_figures(self, other: "Piece") -> None:
        self.template, other.template = other.template, self.template
        self.kind, other.kind = other.kind, self.kind

    def refresh(self) -> None:
        """Return the piece to its spawn orientation."""
        self.template = template_for(self.kind)

    def randomize(self, rng: random.Random) -> None:
        self.kind = random_kind(rng)
        self.template = template_for(self.kind)

    def copy(self) -> "Piece":
        return Piece(self.kind, self.anchor_x, self.anchor_y, self.template.copy())

    def __repr__(self) -> str:
        return f"Piece({self.kind.name}, anchor=({self.anchor_x}, {self.anchor_y}))"
