"""Action domain for the grid game.

Actions are plain integer indices everywhere in the search code. The
ActionSpace maps each index to a movement direction, which is all the
safe-random rollout policy needs to know about the board.
"""

from __future__ import annotations

from enum import IntEnum


class Action(IntEnum):
    """The grid game's actions in stable index order."""

    STOP = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    BOMB = 5


# (dx, dy) per action; y grows downwards (row index)
DIRECTIONS: dict[Action, tuple[int, int]] = {
    Action.STOP: (0, 0),
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.BOMB: (0, 0),
}


class ActionSpace:
    """Finite, ordered set of action indices with a direction per action.

    Attributes:
        directions: Tuple of (dx, dy) vectors, one per action index.
        no_op: Index of the action used as the safe default.
    """

    def __init__(self, directions: tuple[tuple[int, int], ...], no_op: int = 0) -> None:
        if not directions:
            raise ValueError("ActionSpace needs at least one action")
        if not 0 <= no_op < len(directions):
            raise ValueError(f"no_op index {no_op} outside [0, {len(directions)})")
        self.directions = directions
        self.no_op = no_op

    @classmethod
    def default(cls) -> ActionSpace:
        """Action space of the grid game: STOP, UP, DOWN, LEFT, RIGHT, BOMB."""
        return cls(tuple(DIRECTIONS[a] for a in Action), no_op=int(Action.STOP))

    @property
    def size(self) -> int:
        """Number of actions."""
        return len(self.directions)

    def direction(self, action: int) -> tuple[int, int]:
        """Movement vector for an action index."""
        return self.directions[action]

    def __len__(self) -> int:
        return len(self.directions)

    def __repr__(self) -> str:
        return f"ActionSpace(size={self.size}, no_op={self.no_op})"
