from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, Iterator, Optional

import numpy as np

from .grid import (
    GRID_HEIGHT,
    GRID_WIDTH,
    Board,
    FallingBlock,
    can_place_tetromino,
    cells_of,
    clear_rows,
    create_empty_board,
    freeze,
    merge_tetromino,
)
from .pieces import Tetromino, random_tetromino
from .rules import ScoringRules


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    DROP = 4
    TICK = 5


@dataclass
class GameConfig:
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    tick_ms: int = 500
    seed: Optional[int] = None
    max_episode_steps: int = 10000

    def __post_init__(self) -> None:
        # The I piece needs a 4x4 box to spawn and rotate.
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")


DEFAULT_RULES = ScoringRules()


@dataclass(frozen=True, eq=False)
class GameState:
    """Immutable snapshot handed to renderers after every transition."""

    board: Board
    current_block: FallingBlock
    next_tetromino: Tetromino
    game_over: bool = False
    score: int = 0
    rows_cleared: int = 0

    def __post_init__(self) -> None:
        freeze(self.board)
        freeze(self.next_tetromino.shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            np.array_equal(self.board, other.board)
            and self.current_block == other.current_block
            and self.next_tetromino == other.next_tetromino
            and self.game_over == other.game_over
            and self.score == other.score
            and self.rows_cleared == other.rows_cleared
        )

    def __hash__(self) -> int:
        return hash((self.board.tobytes(), self.current_block, self.next_tetromino, self.game_over, self.score))

    def to_array(self) -> np.ndarray:
        """Board with the active block overlaid as negative tags."""
        state = self.board.copy()
        if not self.game_over:
            tag = self.current_block.tetromino.tag
            height, width = state.shape
            for x, y in cells_of(self.current_block):
                if 0 <= y < height and 0 <= x < width:
                    state[y, x] = -tag
        return state


def spawn_block(board: Board, tetromino: Tetromino) -> FallingBlock:
    """Place ``tetromino`` horizontally centered on the top row."""
    width = board.shape[1]
    return FallingBlock(tetromino=tetromino, x=(width - tetromino.width) // 2, y=0)


def initial_state(
    rng: Optional[random.Random] = None, width: int = GRID_WIDTH, height: int = GRID_HEIGHT
) -> GameState:
    board = create_empty_board(width, height)
    current = spawn_block(board, random_tetromino(rng))
    return GameState(board=board, current_block=current, next_tetromino=random_tetromino(rng))


def _lock(
    state: GameState, block: FallingBlock, rng: Optional[random.Random], rules: ScoringRules
) -> GameState:
    merged = merge_tetromino(state.board, block)
    cleared = clear_rows(merged)
    board = cleared.board
    spawned = spawn_block(board, state.next_tetromino)
    return GameState(
        board=board,
        current_block=spawned,
        next_tetromino=random_tetromino(rng),
        game_over=not can_place_tetromino(board, spawned.tetromino, spawned.x, spawned.y),
        score=state.score + rules.score_for_rows(cleared.rows_cleared),
        rows_cleared=state.rows_cleared + cleared.rows_cleared,
    )


def _as_action(value: object) -> Optional[Action]:
    if isinstance(value, Action):
        return value
    # bool is an int subclass; only true integers name an action.
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        try:
            return Action(int(value))
        except ValueError:
            return None
    return None


def _fits(state: GameState, block: FallingBlock) -> bool:
    return can_place_tetromino(state.board, block.tetromino, block.x, block.y)


def update_state(
    state: GameState,
    action: object,
    rng: Optional[random.Random] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    """Apply one action and return the next state.

    Illegal moves return ``state`` itself. Once ``game_over`` is set every
    action is a no-op. ``rng`` draws the next preview piece when a block
    locks; ``rules`` prices cleared rows.
    """
    if state.game_over:
        return state
    action = _as_action(action)
    if action is None:
        return state
    rules = rules or DEFAULT_RULES
    block = state.current_block

    if action in (Action.LEFT, Action.RIGHT):
        moved = block.moved(dx=-1 if action == Action.LEFT else 1)
        if _fits(state, moved):
            return replace(state, current_block=moved)
        return state
    if action == Action.ROTATE:
        turned = FallingBlock(block.tetromino.rotated(), block.x, block.y)
        if _fits(state, turned):
            return replace(state, current_block=turned)
        return state
    if action in (Action.TICK, Action.DOWN):
        fallen = block.moved(dy=1)
        if _fits(state, fallen):
            return replace(state, current_block=fallen)
        return _lock(state, block, rng, rules)
    if action == Action.DROP:
        while _fits(state, block.moved(dy=1)):
            block = block.moved(dy=1)
        return _lock(state, block, rng, rules)
    return state


def play(
    state: GameState,
    actions: Iterable[object],
    rng: Optional[random.Random] = None,
    rules: Optional[ScoringRules] = None,
) -> Iterator[GameState]:
    """Fold ``actions`` through :func:`update_state`, yielding every new state.

    The stream stops right after the first game-over state is yielded.
    """
    if state.game_over:
        return
    for action in actions:
        state = update_state(state, action, rng, rules)
        yield state
        if state.game_over:
            return
