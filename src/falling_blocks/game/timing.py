from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .config import GameConfig


logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class TimeManager:
    """Gravity interval and lock-delay bookkeeping.

    ``tick_time`` is how long a piece hangs before gravity pulls it down.
    ``sticky_timeout`` is the grace budget a grounded piece gets before it is
    locked; every timer expiry while grounded spends one ``tick_time`` of it.
    """

    def __init__(self, config: Optional[GameConfig] = None, clock: Optional[Clock] = None) -> None:
        self.config = config or GameConfig()
        self.clock: Clock = clock or monotonic_ms
        self.tick_time = self.config.initial_tick_ms
        self.sticky_timeout = self.config.sticky_timeout_ms
        self.offset_tick = 0
        self.last = self.clock()

    def tick(self) -> None:
        self.last = self.clock()
        self.sticky_timeout = self.config.sticky_timeout_ms
        self.offset_tick = 0

    def elapsed(self) -> int:
        return max(0, self.clock() - self.last)

    def get_timeout(self) -> int:
        with_offset = self.offset_tick + self.elapsed()
        return max(0, self.tick_time - with_offset)

    def should_finish_turn(self) -> bool:
        return self.sticky_timeout <= self.tick_time

    def advance_stuck(self) -> None:
        # Piece is resting: wait out the grace budget instead of locking at tick speed
        self.sticky_timeout = max(0, self.sticky_timeout - self.tick_time)
        if self.sticky_timeout < self.tick_time:
            self.offset_tick = self.tick_time - self.sticky_timeout
        self.last = self.clock()

    def update_tick_speed(self, cleared_rows: int) -> None:
        quickening = self.config.quickening_ms * cleared_rows
        if quickening == 0:
            return
        cap = self.config.speed_cap_ms
        if self.tick_time >= quickening + cap:
            self.tick_time -= quickening
        else:
            self.tick_time = cap
        logger.debug("tick time now %d ms after %d cleared rows", self.tick_time, cleared_rows)
