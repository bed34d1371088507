"""Shared fixtures: a deterministic grid-game stub and simple heuristics."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

import pytest

from gridmcts.actions import DIRECTIONS, Action, ActionSpace

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class FakeGridGame:
    """Deterministic grid game stub.

    Agents walk on a width x height board; moves off the board are ignored.
    The game ends after ``max_steps`` joint actions. Cells in ``hazards``
    are reported as hazards but have no other effect.
    """

    def __init__(
        self,
        width: int = 5,
        height: int = 5,
        positions: Mapping[int, tuple[int, int]] | None = None,
        hazards: Iterable[tuple[int, int]] = (),
        max_steps: int = 20,
        acting: int = 0,
        num_actions: int = len(Action),
    ) -> None:
        self.width = width
        self.height = height
        self.positions = dict(positions or {0: (0, 0), 1: (width - 1, height - 1)})
        self.hazards = set(hazards)
        self.max_steps = max_steps
        self.acting = acting
        self.num_actions = num_actions
        self.step = 0

    def is_terminal(self) -> bool:
        return self.step >= self.max_steps

    def acting_agent_id(self) -> int:
        return self.acting

    def agent_ids(self) -> list[int]:
        return sorted(self.positions)

    def legal_action_count(self) -> int:
        return self.num_actions

    def advance(self, joint_actions: Mapping[int, int]) -> None:
        for agent_id, (x, y) in list(self.positions.items()):
            dx, dy = DIRECTIONS[Action(joint_actions.get(agent_id, Action.STOP))]
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                self.positions[agent_id] = (nx, ny)
        self.step += 1

    def copy(self) -> FakeGridGame:
        return copy.deepcopy(self)

    def observe(self, agent_id: int) -> FakeGridGame:
        view = self.copy()
        view.acting = agent_id
        return view

    def board_shape(self) -> tuple[int, int]:
        return self.width, self.height

    def is_hazard(self, x: int, y: int) -> bool:
        return (x, y) in self.hazards

    def agent_position(self, agent_id: int) -> tuple[int, int]:
        return self.positions[agent_id]


class ConstantHeuristic:
    """Scores every state the same."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.calls = 0

    def evaluate(self, state: FakeGridGame) -> float:
        self.calls += 1
        return self.value


class DistanceHeuristic:
    """Negative Manhattan distance from the acting agent to a target cell."""

    def __init__(self, target: tuple[int, int]) -> None:
        self.target = target

    def evaluate(self, state: FakeGridGame) -> float:
        x, y = state.agent_position(state.acting_agent_id())
        return -float(abs(x - self.target[0]) + abs(y - self.target[1]))


class StepHeuristic:
    """Scores a state by how many joint actions have been applied to it."""

    def evaluate(self, state: FakeGridGame) -> float:
        return float(state.step)


@pytest.fixture
def game() -> FakeGridGame:
    """Two agents on a 5x5 board, agent 0 acting from the centre."""
    return FakeGridGame(positions={0: (2, 2), 1: (4, 4)})


@pytest.fixture
def action_space() -> ActionSpace:
    return ActionSpace.default()


@pytest.fixture
def make_game() -> type[FakeGridGame]:
    """Factory for custom FakeGridGame setups."""
    return FakeGridGame


@pytest.fixture
def constant_heuristic() -> ConstantHeuristic:
    return ConstantHeuristic(1.0)


@pytest.fixture
def step_heuristic() -> StepHeuristic:
    return StepHeuristic()


@pytest.fixture
def make_distance_heuristic() -> type[DistanceHeuristic]:
    """Factory for target-seeking heuristics."""
    return DistanceHeuristic
