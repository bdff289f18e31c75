from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import pygame

from falling_blocks.game import Piece, PieceColor, TetrisGame


RGB = Tuple[int, int, int]

PALETTE: Dict[PieceColor, RGB] = {
    PieceColor.RED: (220, 50, 47),
    PieceColor.BLUE: (38, 80, 210),
    PieceColor.LIGHT_BLUE: (0, 200, 240),
    PieceColor.YELLOW: (220, 200, 0),
    PieceColor.LIGHT_YELLOW: (250, 240, 140),
    PieceColor.GREEN: (40, 200, 80),
    PieceColor.MAGENTA: (210, 60, 200),
}

BACKGROUND: RGB = (10, 10, 14)
PLAYFIELD: RGB = (30, 30, 36)
PILE: RGB = (90, 90, 96)
PILE_HIGHLIGHT: RGB = (200, 200, 200)
GHOST: RGB = (60, 60, 66)
TEXT: RGB = (235, 235, 235)


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20, preview_cell: int = 18) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = preview_cell
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        width = self.margin * 3 + game.pile.columns * self.cell_size + 6 * self.preview_cell
        height = self.margin * 2 + game.pile.rows * self.cell_size
        return width, height

    def _font_for(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    def _cell(self, surf: pygame.Surface, x0: int, y0: int, size: int, row: int, col: int, color: RGB) -> None:
        rect = pygame.Rect(x0 + col * size, y0 + row * size, size - 1, size - 1)
        pygame.draw.rect(surf, color, rect)

    def _blocks(self, surf: pygame.Surface, x0: int, y0: int, size: int,
                cells: Iterable[Tuple[int, int]], color: RGB) -> None:
        for row, col in cells:
            if row >= 0 and col >= 0:
                self._cell(surf, x0, y0, size, row, col, color)

    def _preview(self, surf: pygame.Surface, piece: Piece, x0: int, y0: int) -> None:
        self._blocks(surf, x0, y0, self.preview_cell, piece.template.occupied(), PALETTE[piece.color])

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> None:
        screen.fill(BACKGROUND)
        x0 = y0 = self.margin
        board_rect = pygame.Rect(x0, y0, game.pile.columns * self.cell_size, game.pile.rows * self.cell_size)
        pygame.draw.rect(screen, PLAYFIELD, board_rect)

        highlighted = set(game.highlighted_lines())
        for (row, col), _ in game.pile.cells():
            color = PILE_HIGHLIGHT if row in highlighted else PILE
            self._cell(screen, x0, y0, self.cell_size, row, col, color)

        self._blocks(screen, x0, y0, self.cell_size, game.projected_piece.get_positions_unsafe(), GHOST)
        self._blocks(screen, x0, y0, self.cell_size, game.current_piece.get_positions_unsafe(),
                     PALETTE[game.current_piece.color])

        panel_x = board_rect.right + self.margin
        font = self._font_for()
        screen.blit(font.render("Next", True, TEXT), (panel_x, y0 - 4))
        self._preview(screen, game.next_piece, panel_x, y0 + 24)
        screen.blit(font.render("Spare", True, TEXT), (panel_x, y0 + 6 * self.preview_cell - 4))
        self._preview(screen, game.spare_piece, panel_x, y0 + 6 * self.preview_cell + 24)

        text_y = y0 + 13 * self.preview_cell
        for line in (f"Score: {game.score}", f"Last combo: {game.last_combo}",
                     f"Tick: {game.get_tick_speed()} ms"):
            screen.blit(font.render(line, True, TEXT), (panel_x, text_y))
            text_y += 26
        pygame.display.flip()

    def draw_game_over(self, screen: pygame.Surface, game: TetrisGame) -> None:
        font = pygame.font.SysFont(None, 36)
        for i, line in enumerate((f"Your score is {game.score}", "R to restart, Q to quit")):
            text = font.render(line, True, TEXT)
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2 + i * 40))
            screen.blit(text, rect)
        pygame.display.flip()
