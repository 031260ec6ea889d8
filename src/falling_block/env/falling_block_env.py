from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block.game import (
    EVENT_PIECE_LOCKED,
    EVENT_TOPPED_OUT,
    Action,
    GameConfig,
    GameSession,
    ManualScheduler,
    ShapeKind,
)
from falling_block.game.shapes import color_for


def _rgb(hex_color: str) -> Tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


class FallingBlockEnv(gym.Env):
    """Gymnasium wrapper around `GameSession`.

    Each step applies one action and then advances a virtual clock by one tick
    interval, so gravity runs once per step. Reward is the number of rows
    cleared during the step; the episode terminates when the stack tops out.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
        top_out_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.top_out_penalty = float(top_out_penalty)

        self.scheduler = ManualScheduler()
        self.session = GameSession(self.config, scheduler=self.scheduler)
        self.session.bus.subscribe(EVENT_PIECE_LOCKED, self._on_locked)
        self.session.bus.subscribe(EVENT_TOPPED_OUT, self._on_topped_out)

        k = len(ShapeKind)
        self.observation_space = spaces.Box(
            low=-k, high=k, shape=(self.config.rows, self.config.cols), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._lines_this_step = 0
        self._topped_out = False

    def _on_locked(self, sender, piece, lines) -> None:
        self._lines_this_step += int(lines)

    def _on_topped_out(self, sender, piece) -> None:
        self._topped_out = True

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lines_cleared_total": self.session.lines_cleared_total,
            "pieces_locked": self.session.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self._steps = 0
        self._lines_this_step = 0
        self._topped_out = False
        self.session.reset()
        return self.session.get_state(), self._get_info()

    def step(self, action):
        self._lines_this_step = 0
        self._topped_out = False
        self.session.apply(Action(int(action)))
        self.scheduler.advance(self.config.tick_interval_ms)
        self._steps += 1

        reward = float(self._lines_this_step)
        terminated = self._topped_out
        if terminated:
            reward -= self.top_out_penalty
        truncated = not terminated and self._steps >= self.max_episode_steps
        info = self._get_info()
        info["lines"] = self._lines_this_step
        return self.session.get_state(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.session.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = _rgb(color_for(abs(v))) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        self.session.stop()
