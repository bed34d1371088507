"""Random baseline agents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gridmcts.actions import ActionSpace
from gridmcts.ai.base import Agent
from gridmcts.mcts.rollout import safe_random_action

if TYPE_CHECKING:
    from gridmcts.protocols import GridForwardModel


class RandomAgent(Agent):
    """Agent that selects uniformly random actions."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    def get_move(self, state: GridForwardModel) -> int:
        return int(self._rng.integers(state.legal_action_count()))

    @property
    def name(self) -> str:
        return "Random"


class SafeRandomAgent(Agent):
    """Agent that plays the rollout policy: random, but never into hazards or off the board."""

    def __init__(self, action_space: ActionSpace | None = None, seed: int | None = None) -> None:
        self.action_space = action_space or ActionSpace.default()
        self._rng = np.random.default_rng(seed)

    def get_move(self, state: GridForwardModel) -> int:
        return safe_random_action(state, self.action_space, self._rng)

    @property
    def name(self) -> str:
        return "SafeRandom"
