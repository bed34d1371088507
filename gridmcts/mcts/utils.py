"""Small numeric helpers shared by both search variants."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

    from gridmcts.actions import ActionSpace
    from gridmcts.protocols import ForwardModel


def noise(value: float, epsilon: float, draw: float) -> float:
    """Perturb ``value`` multiplicatively to break exact ties.

    Args:
        value: Value to perturb.
        epsilon: Noise scale.
        draw: Uniform sample in [0, 1).
    """
    return (value + epsilon) * (1.0 + epsilon * (draw - 0.5))


def normalise(value: float, lo: float, hi: float) -> float:
    """Map ``value`` into [0, 1] using bounds; identity while bounds are invalid."""
    if lo < hi:
        return (value - lo) / (hi - lo)
    return value


def safe_default_action(action_space: ActionSpace) -> int:
    """Action to play when the search produced nothing usable."""
    return action_space.no_op


class JointActionRoller:
    """Advances a state by one step with random opponents.

    The acting agent plays the given action; every other agent plays a
    uniformly random action drawn from the search's generator.
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self._rng = rng

    def roll(self, state: ForwardModel, action: int) -> None:
        me = state.acting_agent_id()
        n_actions = state.legal_action_count()
        joint: dict[int, int] = {}
        for agent_id in state.agent_ids():
            if agent_id == me:
                joint[agent_id] = action
            else:
                joint[agent_id] = int(self._rng.integers(n_actions))
        state.advance(joint)
