from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, GameConfig, PieceColor, ShapeKind, TetrisGame


class _StepClock:
    """Simulated clock so episodes do not depend on wall time."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


class FallingBlocksEnv(gym.Env):
    """Drives the engine with the same discrete commands as the keyboard.

    ``Action.NONE`` stands for "no key pressed before the timer ran out" and
    triggers one gravity/lock-delay step. With ``gravity_every`` set, every
    n-th step also lets the timer run out so an agent cannot stall forever.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 gravity_every: int = 0,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.clock = _StepClock()
        self.game = TetrisGame(config, clock=self.clock)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        rows, columns = self.game.config.rows, self.game.config.columns
        max_color = int(max(PieceColor))
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-max_color, high=max_color, shape=(rows, columns), dtype=np.int8),
                "current": spaces.Discrete(len(ShapeKind)),
                "next": spaces.Discrete(len(ShapeKind)),
                "spare": spaces.Discrete(len(ShapeKind)),
                "spare_used": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_board(),
            "current": int(self.game.current_piece.kind),
            "next": int(self.game.next_piece.kind),
            "spare": int(self.game.spare_piece.kind),
            "spare_used": int(self.game.spare_used),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "last_combo": self.game.last_combo,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "tick_time": self.game.get_tick_speed(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.clock.now = 0
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _expire_timer(self) -> None:
        self.clock.now += self.game.get_timeout()
        self.game.handle_timeout()

    def step(self, action: int):
        action = Action(int(action))
        score_before = self.game.score

        self.game.apply(action)
        self._steps += 1
        if not self.game.is_over():
            if action == Action.NONE:
                self._expire_timer()
            elif self.gravity_every > 0 and self._steps % self.gravity_every == 0:
                self._expire_timer()

        terminated = self.game.is_over()
        truncated = self._steps >= self.game.config.max_episode_steps and not terminated

        reward = float(self.game.score - score_before) + self.step_penalty
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["engine_score_delta"] = self.game.score - score_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering is the pygame front end's job
            return None
        from falling_blocks.visualization.renderer import PALETTE, PLAYFIELD

        board = self.game.get_board()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = PALETTE[PieceColor(abs(v))] if v else PLAYFIELD
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
