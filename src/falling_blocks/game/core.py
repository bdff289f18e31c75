from __future__ import annotations

import logging
import random
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .config import GameConfig
from .pieces import Piece
from .pile import Pile
from .rules import ScoringRules
from .timing import Clock, TimeManager


logger = logging.getLogger(__name__)

# Horizontal offsets tried after a rotation, in order of preference
KICK_OFFSETS: Tuple[int, ...] = (0, -1, 1, -2, 2)

NEXT_PREVIEW_ANCHOR = (0, 1)
SPARE_PREVIEW_ANCHOR = (0, 7)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    HOLD = 6
    NONE = 7


class TetrisGame:
    """The falling-block engine.

    Holds the active piece, the next and spare pieces, the pile and the
    timer. Every command checks for collisions before touching any state,
    and illegal commands are silently ignored.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 clock: Optional[Clock] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.clock = clock
        self.rng = random.Random(self.config.random_seed)
        self.pile = Pile(self.config.columns, self.config.rows)
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.pile.reset()
        self.current_piece = Piece.random_at(0, 0, self.rng)
        self.next_piece = Piece.random_at(*NEXT_PREVIEW_ANCHOR, self.rng)
        self.spare_piece = Piece.random_at(*SPARE_PREVIEW_ANCHOR, self.rng)
        self.projected_piece = self.current_piece.copy()
        self.spare_used = False
        self.score = 0
        self.last_combo = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.time_manager = TimeManager(self.config, self.clock)
        self._put_in_starting_position()
        self.project()

    # -- collision -------------------------------------------------------

    def collides(self, piece: Piece, offset: Tuple[int, int] = (0, 0)) -> bool:
        offset_x, offset_y = offset
        for row, col in piece.get_positions_unsafe():
            row += offset_y
            col += offset_x
            if row < 0 or col < 0:
                return True
            if col >= self.pile.columns or row >= self.pile.rows:
                return True
            if self.pile.contains(row, col):
                return True
        return False

    def touches_on_bottom(self, piece: Piece) -> bool:
        return self.collides(piece, (0, 1))

    def can_move_down(self) -> bool:
        return not self.touches_on_bottom(self.current_piece)

    def is_over(self) -> bool:
        return self.collides(self.current_piece)

    # -- ghost -----------------------------------------------------------

    def project(self) -> None:
        self.projected_piece = self.current_piece.copy()
        while not self.touches_on_bottom(self.projected_piece):
            self.projected_piece.move_down_unsafe()

    def highlighted_lines(self) -> List[int]:
        """Rows the ghost piece would complete if dropped now."""
        if self.collides(self.projected_piece):
            return []
        return self.pile.get_complete_lines_with(self.projected_piece.get_positions())

    # -- commands --------------------------------------------------------

    def _put_in_starting_position(self) -> None:
        self.current_piece.place_at(self.config.spawn_column, 0)

    def move_left(self) -> None:
        if not self.collides(self.current_piece, (-1, 0)):
            self.current_piece.move_left_unsafe()
            self.project()

    def move_right(self) -> None:
        if not self.collides(self.current_piece, (1, 0)):
            self.current_piece.move_right_unsafe()
            self.project()

    def move_down(self) -> None:
        # Each move down counts as one gravity tick
        if self.can_move_down():
            self.time_manager.tick()
            self.current_piece.move_down_unsafe()

    def drop_to_bottom(self) -> bool:
        while self.can_move_down():
            self.current_piece.move_down_unsafe()
        return self.finish_turn()

    def safe_rotate_clockwise(self) -> None:
        self._safe_rotate(clockwise=True)

    def safe_rotate_counter_clockwise(self) -> None:
        self._safe_rotate(clockwise=False)

    def _safe_rotate(self, clockwise: bool) -> None:
        rotated = self.current_piece.copy()
        if clockwise:
            rotated.rotate_clockwise()
        else:
            rotated.rotate_counter_clockwise()

        for offset_x in KICK_OFFSETS:
            if not self.collides(rotated, (offset_x, 0)):
                self.current_piece.template = rotated.template
                self.current_piece.anchor_x = rotated.anchor_x + offset_x
                self.project()
                return

    def use_spare(self) -> None:
        if self.spare_used:
            return
        self.current_piece.swap_figures(self.spare_piece)
        self.spare_piece.refresh()
        self._put_in_starting_position()
        self.project()
        self.spare_used = True
        logger.debug("held %s, playing %s", self.spare_piece.kind.name, self.current_piece.kind.name)

    def finish_turn(self) -> bool:
        """Lock the current piece, clear lines, spawn the next one.

        Returns True when the freshly spawned piece already collides with
        the pile, i.e. the game is over.
        """
        self.pile.add(self.current_piece)
        self.pieces_placed += 1
        cleaned_up = self.pile.cleanup_full_lines()

        self.current_piece.swap_figures(self.next_piece)
        self.next_piece.randomize(self.rng)
        self._put_in_starting_position()
        self.project()
        self.spare_used = False

        self.score += self.rules.score_for_lines(cleaned_up, self.pile.columns)
        if self.rules.is_combo(cleaned_up):
            self.last_combo = cleaned_up
        if cleaned_up:
            self.lines_cleared_total += cleaned_up
            logger.debug("cleared %d rows, score %d", cleaned_up, self.score)

        self.time_manager.update_tick_speed(cleaned_up)
        self.time_manager.tick()

        over = self.is_over()
        if over:
            logger.info("game over with score %d after %d pieces", self.score, self.pieces_placed)
        return over

    def handle_timeout(self) -> None:
        """What the driver does when no input arrived within ``get_timeout()``."""
        if self.can_move_down():
            self.move_down()
        elif self.should_finish_turn():
            self.finish_turn()
        else:
            self.advance_stuck()

    def apply(self, action: Action) -> None:
        if self.is_over():
            return
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.safe_rotate_clockwise()
        elif action == Action.ROTATE_CCW:
            self.safe_rotate_counter_clockwise()
        elif action == Action.SOFT_DROP:
            self.move_down()
        elif action == Action.HARD_DROP:
            self.drop_to_bottom()
        elif action == Action.HOLD:
            self.use_spare()
        elif action == Action.NONE:
            pass

    # -- timer -----------------------------------------------------------

    def get_tick_speed(self) -> int:
        return self.time_manager.tick_time

    def get_timeout(self) -> int:
        return self.time_manager.get_timeout()

    def should_finish_turn(self) -> bool:
        return self.time_manager.should_finish_turn()

    def advance_stuck(self) -> None:
        self.time_manager.advance_stuck()

    # -- snapshots -------------------------------------------------------

    def get_board(self) -> np.ndarray:
        """Pile colours with the falling piece overlaid as negative values."""
        board = np.zeros((self.pile.rows, self.pile.columns), dtype=np.int8)
        for (row, col), color in self.pile.colors.items():
            board[row, col] = int(color)
        for row, col in self.current_piece.get_positions_unsafe():
            if 0 <= row < self.pile.rows and 0 <= col < self.pile.columns:
                board[row, col] = -int(self.current_piece.color)
        return board

    def get_state(self) -> Dict[str, Any]:
        return {
            "board": self.get_board(),
            "current": self.current_piece.get_positions_unsafe(),
            "current_kind": self.current_piece.kind,
            "projected": self.projected_piece.get_positions_unsafe(),
            "highlighted_lines": self.highlighted_lines(),
            "next_kind": self.next_piece.kind,
            "spare_kind": self.spare_piece.kind,
            "spare_used": self.spare_used,
            "score": self.score,
            "last_combo": self.last_combo,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_placed": self.pieces_placed,
            "tick_time": self.get_tick_speed(),
            "timeout": self.get_timeout(),
            "game_over": self.is_over(),
        }
