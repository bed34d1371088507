"""Contracts the search consumes from its collaborators.

The game engine and the state heuristic live outside this package. The
search only talks to them through these protocols, so any engine that
provides the methods below can be searched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence


@runtime_checkable
class ForwardModel(Protocol):
    """Turn-synchronous forward model of the game.

    ``advance`` mutates the state in place. Agents missing from the joint
    action mapping perform the no-op action. ``copy`` must return a fully
    independent deep copy: simulated futures never share mutable state.
    """

    def is_terminal(self) -> bool: ...

    def acting_agent_id(self) -> int: ...

    def agent_ids(self) -> Sequence[int]: ...

    def legal_action_count(self) -> int: ...

    def advance(self, joint_actions: Mapping[int, int]) -> None: ...

    def copy(self) -> ForwardModel: ...


@runtime_checkable
class GridView(Protocol):
    """Board accessors needed by the safe-random rollout policy.

    Coordinates are (x, y) with x the column index.
    """

    def board_shape(self) -> tuple[int, int]: ...

    def is_hazard(self, x: int, y: int) -> bool: ...

    def agent_position(self, agent_id: int) -> tuple[int, int]: ...


class GridForwardModel(ForwardModel, GridView, Protocol):
    """Forward model that also exposes the board."""


@runtime_checkable
class StateHeuristic(Protocol):
    """Scores a simulated state from the acting agent's perspective.

    Must be deterministic given the state; tie-break noise is added by
    the search, not here.
    """

    def evaluate(self, state: ForwardModel) -> float: ...


class CallableHeuristic:
    """Adapts a plain function into a StateHeuristic."""

    def __init__(self, fn: Callable[[ForwardModel], float]) -> None:
        self._fn = fn

    def evaluate(self, state: ForwardModel) -> float:
        return float(self._fn(state))
