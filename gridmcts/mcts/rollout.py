"""Safe-random rollout policy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

    from gridmcts.actions import ActionSpace
    from gridmcts.mcts.utils import JointActionRoller
    from gridmcts.protocols import GridForwardModel, StateHeuristic


def safe_random_action(
    state: GridForwardModel,
    action_space: ActionSpace,
    rng: np.random.Generator,
) -> int:
    """Pick a random action whose destination cell is on the board and not a hazard.

    Candidates are tried in random order. If no direction is safe, falls
    back to a uniformly random action over all actions.

    Args:
        state: State to pick for (acting agent's position is used).
        action_space: Action directions.
        rng: Random source.

    Returns:
        Action index in [0, legal_action_count).
    """
    n_actions = min(state.legal_action_count(), action_space.size)
    width, height = state.board_shape()
    x0, y0 = state.agent_position(state.acting_agent_id())

    candidates = list(range(n_actions))
    while candidates:
        action = candidates.pop(int(rng.integers(len(candidates))))
        dx, dy = action_space.direction(action)
        x, y = x0 + dx, y0 + dy
        if 0 <= x < width and 0 <= y < height and not state.is_hazard(x, y):
            return action

    # Nowhere safe to go
    return int(rng.integers(state.legal_action_count()))


def random_rollout(
    state: GridForwardModel,
    start_depth: int,
    max_depth: int,
    action_space: ActionSpace,
    roller: JointActionRoller,
    heuristic: StateHeuristic,
    rng: np.random.Generator,
) -> float:
    """Play safe-random moves until terminal or past ``max_depth``, then score.

    Mutates ``state``.
    """
    depth = start_depth
    while depth <= max_depth and not state.is_terminal():
        roller.roll(state, safe_random_action(state, action_space, rng))
        depth += 1
    return heuristic.evaluate(state)
