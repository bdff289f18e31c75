from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    """Points per cleared row scale with the board width; multi-row clears earn a combo bonus."""

    combo_threshold: int = 1

    def is_combo(self, cleared_rows: int) -> bool:
        return cleared_rows > self.combo_threshold

    def score_for_lines(self, cleared_rows: int, board_width: int) -> int:
        if cleared_rows <= 0:
            return 0
        score = cleared_rows * board_width
        if self.is_combo(cleared_rows):
            score += cleared_rows * cleared_rows
        return score
