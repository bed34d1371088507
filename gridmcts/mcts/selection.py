"""Confidence-bound child selection: UCB1 blended with RAVE.

For each expanded child c of node n:

    q    = normalise(mean(c), n.bounds)
    beta = sqrt(R / (R + 3 * N(c)))
    u    = (1 - beta) * q + beta * rave(a_c) + K * sqrt(ln(N(n) + 1) / (N(c) + eps))

then u is perturbed by tie-break noise and the arg-max child is selected.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from gridmcts.mcts.utils import noise, normalise

if TYPE_CHECKING:
    import numpy as np

    from gridmcts.mcts.node import SearchTree, TreeNode


class SelectionError(RuntimeError):
    """No child could be selected from a node that claims to be fully expanded.

    Attributes:
        bounds: The node's [min, max] value bounds at the time of failure.
        child_count: Number of child slots on the node.
    """

    def __init__(self, bounds: tuple[float, float], child_count: int) -> None:
        self.bounds = bounds
        self.child_count = child_count
        super().__init__(
            f"No child selectable: bounds=({bounds[0]}, {bounds[1]}), child_count={child_count}"
        )


def ucb_rave_score(
    tree: SearchTree,
    node: TreeNode,
    child: TreeNode,
    k: float,
    epsilon: float,
    rave_r: float,
) -> float:
    """Confidence-bound value of ``child`` as seen from ``node``, before noise."""
    lo, hi = node.bounds
    q = normalise(child.mean_value(epsilon), lo, hi)
    beta = math.sqrt(rave_r / (rave_r + 3.0 * child.visits))
    exploration = k * math.sqrt(math.log(node.visits + 1) / (child.visits + epsilon))
    return (1.0 - beta) * q + beta * tree.rave.estimate(child.action, epsilon) + exploration


def select_child(
    tree: SearchTree,
    node: TreeNode,
    k: float,
    epsilon: float,
    rave_r: float,
    rng: np.random.Generator,
) -> TreeNode:
    """Pick the child of ``node`` with the highest noisy UCB1+RAVE value.

    Raises:
        SelectionError: If no child beats -inf (e.g. every slot is empty).
    """
    selected: TreeNode | None = None
    best_value = -math.inf

    for child in tree.children_of(node):
        value = noise(ucb_rave_score(tree, node, child, k, epsilon, rave_r), epsilon, rng.random())
        if value > best_value:
            selected = child
            best_value = value

    if selected is None:
        raise SelectionError((node.bounds[0], node.bounds[1]), len(node.children))

    return selected
