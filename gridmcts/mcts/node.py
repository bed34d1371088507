"""Classical MCTS tree stored as an index-addressed arena.

Nodes refer to their parent and children by index into ``SearchTree.nodes``
rather than by object reference. One tree is built per turn and thrown
away once the action is chosen.
"""

from __future__ import annotations

import math

import numpy as np

NO_NODE = -1


class RaveStats:
    """Per-action RAVE accumulators shared by every node of one tree.

    Attributes:
        visits: Number of backups that passed through an edge with each action.
        wins: Sum of the values of those backups.
    """

    def __init__(self, num_actions: int) -> None:
        self.visits = np.zeros(num_actions, dtype=np.float64)
        self.wins = np.zeros(num_actions, dtype=np.float64)

    def update(self, action: int, value: float) -> None:
        self.visits[action] += 1
        self.wins[action] += value

    def estimate(self, action: int, epsilon: float) -> float:
        """Mean value of ``action`` over all backups that used it (0 if unseen)."""
        return float(self.wins[action] / (self.visits[action] + epsilon))


class TreeNode:
    """One decision point reached from the turn-root by joint-action rollouts.

    Attributes:
        index: Position of this node in the arena.
        parent: Arena index of the parent (NO_NODE for the root).
        action: Action index that created this node (NO_NODE for the root).
        depth: Distance from the root.
        visits: Number of backups through this node.
        value_sum: Sum of backed-up values.
        bounds: Running [min, max] of backed-up values; only ever widens.
        children: Arena index per action, NO_NODE where not yet expanded.
    """

    __slots__ = ("index", "parent", "action", "depth", "visits", "value_sum", "bounds", "children")

    def __init__(self, index: int, parent: int, action: int, depth: int, num_actions: int) -> None:
        self.index = index
        self.parent = parent
        self.action = action
        self.depth = depth
        self.visits = 0
        self.value_sum = 0.0
        self.bounds = [math.inf, -math.inf]
        self.children = np.full(num_actions, NO_NODE, dtype=np.int64)

    @property
    def is_root(self) -> bool:
        return self.parent == NO_NODE

    @property
    def is_fully_expanded(self) -> bool:
        """Whether every action slot has a child."""
        return bool(np.all(self.children != NO_NODE))

    def unexpanded_actions(self) -> np.ndarray:
        """Action indices whose child slot is still empty."""
        return np.flatnonzero(self.children == NO_NODE)

    def mean_value(self, epsilon: float) -> float:
        return self.value_sum / (self.visits + epsilon)

    def update(self, value: float) -> None:
        """Record one backup through this node."""
        self.visits += 1
        self.value_sum += value
        if value < self.bounds[0]:
            self.bounds[0] = value
        if value > self.bounds[1]:
            self.bounds[1] = value

    def __repr__(self) -> str:
        return (
            f"TreeNode(index={self.index}, action={self.action}, depth={self.depth}, "
            f"visits={self.visits}, expanded={int(np.sum(self.children != NO_NODE))}"
            f"/{len(self.children)})"
        )


class SearchTree:
    """Arena of TreeNodes rooted at the turn's state.

    Attributes:
        num_actions: Branching factor of every node.
        nodes: All nodes, root first.
        rave: RAVE accumulators shared by the whole tree.
    """

    def __init__(self, num_actions: int) -> None:
        if num_actions <= 0:
            raise ValueError(f"num_actions must be positive, got {num_actions}")
        self.num_actions = num_actions
        self.rave = RaveStats(num_actions)
        self.nodes: list[TreeNode] = [TreeNode(0, NO_NODE, NO_NODE, 0, num_actions)]

    @property
    def root(self) -> TreeNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def child(self, node: TreeNode, action: int) -> TreeNode | None:
        """Child of ``node`` reached by ``action``, or None if unexpanded."""
        idx = int(node.children[action])
        return None if idx == NO_NODE else self.nodes[idx]

    def children_of(self, node: TreeNode) -> list[TreeNode]:
        """Expanded children of ``node`` in action order."""
        return [self.nodes[int(i)] for i in node.children if i != NO_NODE]

    def parent_of(self, node: TreeNode) -> TreeNode | None:
        return None if node.is_root else self.nodes[node.parent]

    def add_child(self, parent: TreeNode, action: int) -> TreeNode:
        """Create the child of ``parent`` for ``action``.

        Raises:
            ValueError: If the slot is already occupied.
        """
        if parent.children[action] != NO_NODE:
            raise ValueError(f"Node {parent.index} already has a child for action {action}")
        child = TreeNode(len(self.nodes), parent.index, action, parent.depth + 1, self.num_actions)
        self.nodes.append(child)
        parent.children[action] = child.index
        return child

    def backpropagate(self, node: TreeNode, value: float) -> None:
        """Push ``value`` from ``node`` up to the root.

        Every ancestor (inclusive) gets a visit, the value and a bounds
        update; every edge on the way also feeds the RAVE accumulators.
        """
        current: TreeNode | None = node
        while current is not None:
            current.update(value)
            if current.action != NO_NODE:
                self.rave.update(current.action, value)
            current = self.parent_of(current)
