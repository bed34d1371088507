"""Search algorithm configuration variants."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import Field

from gridmcts.config.base import StrictBaseModel

if TYPE_CHECKING:
    import numpy as np

    from gridmcts.actions import ActionSpace
    from gridmcts.mcts.evolutionary import EvolutionarySearch
    from gridmcts.mcts.search import ClassicalSearch
    from gridmcts.protocols import StateHeuristic


class ClassicalMCTSConfig(StrictBaseModel):
    """Config for classical MCTS with UCB1 + RAVE selection."""

    variant: Literal["mcts"] = "mcts"
    max_rollout_depth: int = Field(default=10, gt=0)
    max_iterations: int = Field(default=100, gt=0)
    time_budget_ms: Annotated[float, Field(gt=0)] | None = None
    k: float = Field(default=math.sqrt(2), ge=0)
    epsilon: float = Field(default=1e-6, gt=0)
    rave_r: float = Field(default=2.0, gt=0)

    def build(
        self,
        heuristic: StateHeuristic,
        action_space: ActionSpace,
        rng: np.random.Generator,
    ) -> ClassicalSearch:
        """Construct a ClassicalSearch from this config."""
        from gridmcts.mcts.search import ClassicalSearch

        return ClassicalSearch(self, heuristic, action_space, rng)


class EvolutionaryMCTSConfig(StrictBaseModel):
    """Config for evolutionary MCTS over action genomes.

    Each iteration builds a full tree of depth ``max_rollout_depth`` with
    ``branching_factor`` children per node, so the leaf count per iteration
    is ``branching_factor ** max_rollout_depth``.
    """

    variant: Literal["emcts"] = "emcts"
    max_rollout_depth: int = Field(default=4, gt=0)
    max_iterations: int = Field(default=200, gt=0)
    time_budget_ms: Annotated[float, Field(gt=0)] | None = None
    epsilon: float = Field(default=1e-6, gt=0)
    branching_factor: int = Field(default=2, gt=0)
    genome_length: int = Field(default=5, gt=0)
    use_fpu: bool = False
    fpu_default_urgency: float = 0.0

    def build(
        self,
        heuristic: StateHeuristic,
        action_space: ActionSpace,
        rng: np.random.Generator,
    ) -> EvolutionarySearch:
        """Construct an EvolutionarySearch from this config."""
        from gridmcts.mcts.evolutionary import EvolutionarySearch

        return EvolutionarySearch(self, heuristic, action_space, rng)


SearchConfig = Annotated[
    ClassicalMCTSConfig | EvolutionaryMCTSConfig,
    Field(discriminator="variant"),
]
