from __future__ import annotations

import pytest

from falling_blocks.game import GameConfig, Piece, ShapeKind, TetrisGame


class FakeClock:
    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def fill_row(pile, row: int, skip=()) -> None:
    for col in range(pile.columns):
        if col not in skip:
            pile.grid.set(row, col, True)
            pile.colors[(row, col)] = Piece(ShapeKind.SQUARE).color


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000)


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(random_seed=7)


@pytest.fixture
def game(config: GameConfig, clock: FakeClock) -> TetrisGame:
    return TetrisGame(config, clock=clock)
