"""Evolutionary MCTS agent with genome carry-over between turns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from gridmcts.actions import ActionSpace
from gridmcts.ai.base import Agent
from gridmcts.mcts.config import EvolutionaryMCTSConfig
from gridmcts.mcts.genome import shift_genome
from gridmcts.mcts.utils import safe_default_action

if TYPE_CHECKING:
    from gridmcts.mcts.evolutionary import EvolutionaryResult
    from gridmcts.mcts.genome import Genome
    from gridmcts.protocols import GridForwardModel, StateHeuristic

logger = logging.getLogger(__name__)


class EMCTSAgent(Agent):
    """Agent that plays the first gene of the best genome found each turn.

    After a move the played genome is shifted left by one gene and a random
    gene is appended; that becomes the next turn's root genome.

    Attributes:
        config: Search configuration.
        genome: Root genome for the next search (None before the first turn).
        last_result: Result of the most recent search.
        durations: Search duration of every move so far, in milliseconds.
    """

    def __init__(
        self,
        heuristic: StateHeuristic,
        config: EvolutionaryMCTSConfig | None = None,
        action_space: ActionSpace | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or EvolutionaryMCTSConfig()
        self.heuristic = heuristic
        self.action_space = action_space or ActionSpace.default()
        self._rng = np.random.default_rng(seed)
        self.genome: Genome | None = None
        self.last_result: EvolutionaryResult | None = None
        self.durations: list[float] = []

    def get_move(self, state: GridForwardModel) -> int:
        """Search from the carried genome and play the best genome's first gene.

        Falls back to the no-op action when no leaf improved on -inf.
        """
        search = self.config.build(self.heuristic, self.action_space, self._rng)
        search.attach(state.copy(), self.genome)
        result = search.search()
        self.durations.append(result.elapsed_ms)
        self.last_result = result

        num_actions = state.legal_action_count()
        if result.genome is None:
            action = safe_default_action(self.action_space)
            logger.warning(
                f"{self.name}: no improving genome after {result.iterations} iterations, "
                f"playing default action {action}"
            )
            assert search.tree is not None
            accepted = search.tree.root.genome
        else:
            action = result.genome[0]
            accepted = result.genome
            logger.debug(f"{self.name} plays {action} from genome {result.genome}")

        self.genome = shift_genome(accepted, num_actions, self._rng)
        return action

    def reset(self) -> None:
        self.genome = None
        self.last_result = None
        self.durations = []

    @property
    def name(self) -> str:
        fpu = "+FPU" if self.config.use_fpu else ""
        return f"EMCTS({self.config.max_iterations},b={self.config.branching_factor}){fpu}"
