from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    """Build-time constants for the playfield, gravity and lock delay.

    Board dimensions are derived from the playfield size in terminal-style
    pixels divided by the block size, so the defaults give an 18x27 board.
    """

    playfield_width: int = 74
    playfield_height: int = 54
    block_height: int = 2
    block_width: int = 4
    initial_tick_ms: int = 1000
    sticky_timeout_ms: int = 1000
    quickening_ms: int = 20
    speed_cap_ms: int = 20
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000

    def __post_init__(self) -> None:
        for name in ("playfield_width", "playfield_height", "block_height", "block_width",
                     "initial_tick_ms", "speed_cap_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.quickening_ms < 0 or self.sticky_timeout_ms < 0:
            raise ValueError("quickening_ms and sticky_timeout_ms must be non-negative")
        if self.initial_tick_ms < self.speed_cap_ms:
            raise ValueError(f"initial_tick_ms {self.initial_tick_ms} is below the speed cap {self.speed_cap_ms}")
        # Every template fits in 4x4, spawning needs at least that much room
        if self.columns < 4 or self.rows < 4:
            raise ValueError(f"board of {self.columns}x{self.rows} is too small to spawn a piece")

    @property
    def columns(self) -> int:
        return self.playfield_width // self.block_width

    @property
    def rows(self) -> int:
        return self.playfield_height // self.block_height

    @property
    def spawn_column(self) -> int:
        return self.columns // 2 - 2
