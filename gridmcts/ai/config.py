"""Agent configuration with discriminated union pattern.

Each config type inherits from AgentConfigBase and implements `build()`.
Pydantic dispatches on the `variant` field.

Example YAML:
    variant: emcts
    search:
      max_iterations: 100
      branching_factor: 2
      use_fpu: true
    seed: 7
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import Field

from gridmcts.config.base import StrictBaseModel
from gridmcts.mcts.config import ClassicalMCTSConfig, EvolutionaryMCTSConfig

if TYPE_CHECKING:
    from gridmcts.actions import ActionSpace
    from gridmcts.ai.base import Agent
    from gridmcts.protocols import StateHeuristic


class AgentConfigBase(StrictBaseModel):
    """Base class for agent configurations."""

    seed: int | None = None

    @abstractmethod
    def build(self, heuristic: StateHeuristic, action_space: ActionSpace | None = None) -> Agent:
        """Build the agent from this configuration.

        Args:
            heuristic: State evaluation used by searching agents.
            action_space: Action domain; the grid game's default when None.

        Returns:
            Configured Agent instance.
        """
        ...


class RandomAgentConfig(AgentConfigBase):
    """Configuration for the uniform random agent."""

    variant: Literal["random"] = "random"

    def build(self, heuristic: StateHeuristic, action_space: ActionSpace | None = None) -> Agent:
        from gridmcts.ai.random_agent import RandomAgent

        return RandomAgent(seed=self.seed)


class SafeRandomAgentConfig(AgentConfigBase):
    """Configuration for the hazard-avoiding random agent."""

    variant: Literal["safe_random"] = "safe_random"

    def build(self, heuristic: StateHeuristic, action_space: ActionSpace | None = None) -> Agent:
        from gridmcts.ai.random_agent import SafeRandomAgent

        return SafeRandomAgent(action_space=action_space, seed=self.seed)


class MCTSAgentConfig(AgentConfigBase):
    """Configuration for the classical MCTS agent."""

    variant: Literal["mcts"] = "mcts"
    search: ClassicalMCTSConfig = Field(default_factory=ClassicalMCTSConfig)

    def build(self, heuristic: StateHeuristic, action_space: ActionSpace | None = None) -> Agent:
        from gridmcts.ai.mcts_agent import MCTSAgent

        return MCTSAgent(heuristic, self.search, action_space=action_space, seed=self.seed)


class EMCTSAgentConfig(AgentConfigBase):
    """Configuration for the evolutionary MCTS agent."""

    variant: Literal["emcts"] = "emcts"
    search: EvolutionaryMCTSConfig = Field(default_factory=EvolutionaryMCTSConfig)

    def build(self, heuristic: StateHeuristic, action_space: ActionSpace | None = None) -> Agent:
        from gridmcts.ai.emcts_agent import EMCTSAgent

        return EMCTSAgent(heuristic, self.search, action_space=action_space, seed=self.seed)


AgentConfig = Annotated[
    RandomAgentConfig | SafeRandomAgentConfig | MCTSAgentConfig | EMCTSAgentConfig,
    Field(discriminator="variant"),
]
