"""Classical MCTS agent."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from gridmcts.actions import ActionSpace
from gridmcts.ai.base import Agent
from gridmcts.mcts.config import ClassicalMCTSConfig

if TYPE_CHECKING:
    from gridmcts.protocols import GridForwardModel, StateHeuristic

logger = logging.getLogger(__name__)


class MCTSAgent(Agent):
    """Agent that runs a fresh UCB1 + RAVE search every turn.

    Attributes:
        config: Search configuration.
        durations: Search duration of every move so far, in milliseconds.
    """

    def __init__(
        self,
        heuristic: StateHeuristic,
        config: ClassicalMCTSConfig | None = None,
        action_space: ActionSpace | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or ClassicalMCTSConfig()
        self.heuristic = heuristic
        self.action_space = action_space or ActionSpace.default()
        self._rng = np.random.default_rng(seed)
        self.durations: list[float] = []

    def get_move(self, state: GridForwardModel) -> int:
        """Search on a copy of ``state`` and return the robust child."""
        search = self.config.build(self.heuristic, self.action_space, self._rng)
        search.attach(state.copy())
        result = search.search()

        self.durations.append(result.elapsed_ms)
        logger.debug(
            f"{self.name} agent {state.acting_agent_id()} plays {result.action} "
            f"(visits={result.visit_counts.tolist()})"
        )
        return result.action

    def reset(self) -> None:
        self.durations = []

    @property
    def name(self) -> str:
        return f"MCTS({self.config.max_iterations},k={self.config.k:.2f})"
