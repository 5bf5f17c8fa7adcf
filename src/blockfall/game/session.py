from __future__ import annotations

import logging
import random
from typing import Optional

from .core import Action, GameConfig, GameState, initial_state, update_state
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class GameSession:
    """Holds the latest state of one game and feeds actions through the reducer.

    This is the only place where state is kept between events. Once a
    transition ends the game the session ignores further actions until
    :meth:`reset` starts a new game.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.seed)
        self.steps = 0
        self._state = initial_state(self.rng, self.config.width, self.config.height)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def score(self) -> int:
        return self._state.score

    def reset(self, seed: Optional[int] = None) -> GameState:
        if seed is not None:
            self.rng.seed(seed)
        self.steps = 0
        self._state = initial_state(self.rng, self.config.width, self.config.height)
        logger.info("new game, first piece %s", self._state.current_block.tetromino.kind.name)
        return self._state

    def step(self, action: Action) -> GameState:
        if self._state.game_over:
            return self._state
        before = self._state
        after = update_state(before, action, self.rng, self.rules)
        self.steps += 1
        # Only a lock produces a new board.
        if after.board is not before.board:
            logger.debug(
                "locked %s, rows cleared %d, score %d",
                before.current_block.tetromino.kind.name,
                after.rows_cleared - before.rows_cleared,
                after.score,
            )
        if after.game_over:
            logger.info("game over after %d steps, score %d", self.steps, after.score)
        self._state = after
        return after
