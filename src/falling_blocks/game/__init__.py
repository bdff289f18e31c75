"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Grid: Flat boolean occupancy table
- Piece: Tetromino piece with rotation mechanics
- ShapeKind / PieceColor: The seven shapes and their display colours
- Pile: Landed blocks, line detection and compaction
- TimeManager: Gravity interval and lock delay
- ScoringRules: Scoring helpers
- TetrisGame: Main engine and command surface
"""

from .config import GameConfig
from .grid import Grid
from .pieces import Piece, PieceColor, PiecePlacementError, ShapeKind, color_for
from .pile import Pile
from .rules import ScoringRules
from .timing import TimeManager
from .core import TetrisGame, Action, KICK_OFFSETS

__all__ = [
    "GameConfig",
    "Grid",
    "Piece",
    "PieceColor",
    "PiecePlacementError",
    "ShapeKind",
    "color_for",
    "Pile",
    "ScoringRules",
    "TimeManager",
    "TetrisGame",
    "Action",
    "KICK_OFFSETS",
]
