from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, GameConfig, GameSession, ScoringRules
from blockfall.visualization.renderer import to_rgb_array


# Agent-controlled actions; gravity is applied by the env itself.
AGENT_ACTIONS = (Action.LEFT, Action.RIGHT, Action.DOWN, Action.ROTATE, Action.DROP)


class FallingBlocksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 2}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None, gravity_every: int = 1) -> None:
        super().__init__()
        if gravity_every < 1:
            raise ValueError(f"gravity_every must be >= 1, got {gravity_every}")
        self.session = GameSession(config, rules)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)

        cfg = self.session.config
        n_kinds = 7
        # Landed cells hold the positive piece tag, the active block the negative one.
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(cfg.height, cfg.width), dtype=np.int8)
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

        self._steps = 0

    @property
    def config(self) -> GameConfig:
        return self.session.config

    def _get_obs(self) -> np.ndarray:
        return self.session.state.to_array().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        state = self.session.state
        return {
            "score": state.score,
            "rows_cleared": state.rows_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action!r} for {self.action_space}")
        score_before = self.session.score

        self.session.step(AGENT_ACTIONS[int(action)])
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            self.session.step(Action.TICK)

        terminated = bool(self.session.game_over)
        truncated = not terminated and self._steps >= self.config.max_episode_steps
        reward = float(self.session.score - score_before)
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            return to_rgb_array(self._get_obs())
        return None

    def close(self) -> None:
        pass
