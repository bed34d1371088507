"""Single game execution for grid-game agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from gridmcts.protocols import GridForwardModel

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gridmcts.ai.base import Agent

logger = logging.getLogger(__name__)


class MatchState(GridForwardModel, Protocol):
    """Authoritative game state driven by the match loop."""

    def observe(self, agent_id: int) -> GridForwardModel:
        """Independent copy of the state with ``agent_id`` as the acting agent."""
        ...


@dataclass
class GameResult:
    """Result of a single game.

    Attributes:
        steps: Number of joint actions applied.
        terminal: Whether the game reached a terminal state (False if cut by max_steps).
        history: Joint action of every step.
    """

    steps: int
    terminal: bool
    history: list[dict[int, int]] = field(default_factory=list)


def play_game(
    agents: Mapping[int, Agent],
    state: MatchState,
    *,
    max_steps: int = 800,
) -> GameResult:
    """Play one turn-synchronous game.

    Every step, each agent picks an action on its own view of the same
    state, then the joint action is applied to ``state`` (mutated in place).

    Args:
        agents: Agent per agent id. Ids missing here play the no-op.
        state: Game state to play out.
        max_steps: Step cap for games that never terminate.

    Returns:
        GameResult with the step count and action history.

    Raises:
        ValueError: If an agent returns an action outside the legal range.
    """
    for agent in agents.values():
        agent.reset()

    history: list[dict[int, int]] = []
    while not state.is_terminal() and len(history) < max_steps:
        joint: dict[int, int] = {}
        for agent_id, agent in agents.items():
            action = agent.get_move(state.observe(agent_id))
            if not 0 <= action < state.legal_action_count():
                msg = f"{agent.name} (agent {agent_id}) returned illegal action {action}"
                raise ValueError(msg)
            joint[agent_id] = action

        state.advance(joint)
        history.append(joint)

        for agent in agents.values():
            agent.observe_move(joint)

    terminal = state.is_terminal()
    logger.info(f"Game over after {len(history)} steps (terminal={terminal})")
    return GameResult(steps=len(history), terminal=terminal, history=history)
