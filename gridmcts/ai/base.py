"""Base class for grid-game agents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gridmcts.protocols import GridForwardModel


class Agent(ABC):
    """Base class for grid-game agents.

    Agents receive the game state as seen by the agent that has to act
    (``state.acting_agent_id()``) and return an action index. They can keep
    state between turns (e.g., a carried-over genome).
    """

    @abstractmethod
    def get_move(self, state: GridForwardModel) -> int:
        """Select an action for the acting agent.

        Args:
            state: Current game state. DO NOT modify this.

        Returns:
            Action index in [0, state.legal_action_count()).
        """
        ...

    def reset(self) -> None:
        """Reset agent state for a new game.

        Override this if your agent maintains state between turns.
        """
        return  # noqa: B027

    def observe_move(self, joint_actions: Mapping[int, int]) -> None:
        """Called after every agent's action for the turn is known.

        Args:
            joint_actions: Action played by each agent id.
        """
        return  # noqa: B027

    @property
    def name(self) -> str:
        """Human-readable name for this agent."""
        return self.__class__.__name__
