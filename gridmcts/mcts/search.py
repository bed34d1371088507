"""Classical MCTS search driver.

Each iteration copies the attached state, descends the tree (expanding
the first node with an empty child slot), rolls out with the safe-random
policy and backs the heuristic value up to the root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gridmcts.mcts.budget import SearchBudget
from gridmcts.mcts.node import NO_NODE, SearchTree, TreeNode
from gridmcts.mcts.rollout import random_rollout
from gridmcts.mcts.selection import select_child
from gridmcts.mcts.utils import JointActionRoller, safe_default_action

if TYPE_CHECKING:
    from gridmcts.actions import ActionSpace
    from gridmcts.mcts.config import ClassicalMCTSConfig
    from gridmcts.protocols import GridForwardModel, StateHeuristic

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Outcome of one classical search.

    Attributes:
        action: Robust-child action index (most visited root child).
        iterations: Completed iterations.
        visit_counts: Visits per root action (0 for unexpanded actions).
        elapsed_ms: Wall-clock duration of the search.
    """

    action: int
    iterations: int
    visit_counts: np.ndarray
    elapsed_ms: float


class ClassicalSearch:
    """UCB1 + RAVE tree search over one turn.

    Attributes:
        tree: Tree built by the last attach()/search() (None before attach).
    """

    def __init__(
        self,
        config: ClassicalMCTSConfig,
        heuristic: StateHeuristic,
        action_space: ActionSpace,
        rng: np.random.Generator,
    ) -> None:
        self.config = config
        self.heuristic = heuristic
        self.action_space = action_space
        self._rng = rng
        self._roller = JointActionRoller(rng)
        self._state: GridForwardModel | None = None
        self.tree: SearchTree | None = None

    def attach(self, state: GridForwardModel) -> None:
        """Bind the turn's state and start a fresh tree.

        The state is only read (copied) during search, never mutated.
        """
        self._state = state
        self.tree = SearchTree(state.legal_action_count())

    def search(self) -> SearchResult:
        """Run iterations until the budget is exhausted.

        Raises:
            RuntimeError: If no state has been attached.
        """
        if self._state is None or self.tree is None:
            msg = "search() called before attach()"
            raise RuntimeError(msg)

        budget = SearchBudget(self.config.max_iterations, self.config.time_budget_ms)
        budget.start()
        iterations = 0

        while not budget.exhausted(iterations):
            self.iterate(self._state.copy())
            iterations += 1

        action = self.find_best_action()
        logger.debug(
            f"MCTS finished {iterations} iterations in {budget.elapsed_ms:.1f}ms, "
            f"{len(self.tree)} nodes, action={action}"
        )
        return SearchResult(
            action=action,
            iterations=iterations,
            visit_counts=self.root_visit_counts(),
            elapsed_ms=budget.elapsed_ms,
        )

    def iterate(self, state: GridForwardModel) -> float:
        """One select → rollout → backpropagate cycle on a private state copy."""
        assert self.tree is not None
        node = self.select_node(state)
        value = random_rollout(
            state,
            node.depth,
            self.config.max_rollout_depth,
            self.action_space,
            self._roller,
            self.heuristic,
            self._rng,
        )
        self.tree.backpropagate(node, value)
        return value

    def select_node(self, state: GridForwardModel) -> TreeNode:
        """Descend from the root, advancing ``state`` along the way.

        Returns the freshly expanded node, or the node where the state
        became terminal or the depth ceiling was reached.
        """
        assert self.tree is not None
        current = self.tree.root

        while not state.is_terminal() and current.depth < self.config.max_rollout_depth:
            if not current.is_fully_expanded:
                return self.expand(current, state)

            current = select_child(
                self.tree,
                current,
                self.config.k,
                self.config.epsilon,
                self.config.rave_r,
                self._rng,
            )
            self._roller.roll(state, current.action)

        return current

    def expand(self, node: TreeNode, state: GridForwardModel) -> TreeNode:
        """Create a child for a uniformly random unexplored action and step into it."""
        assert self.tree is not None
        action = int(self._rng.choice(node.unexpanded_actions()))
        self._roller.roll(state, action)
        return self.tree.add_child(node, action)

    def find_best_action(self) -> int:
        """Most visited root child; first index wins ties.

        Falls back to the safe default when the root has no children
        (e.g. the attached state was already terminal).
        """
        if self.tree is None:
            return safe_default_action(self.action_space)

        best_action = NO_NODE
        best_visits = -1
        for action, idx in enumerate(self.tree.root.children):
            if idx == NO_NODE:
                continue
            visits = self.tree.nodes[int(idx)].visits
            if visits > best_visits:
                best_action = action
                best_visits = visits

        if best_action == NO_NODE:
            return safe_default_action(self.action_space)
        return best_action

    def root_visit_counts(self) -> np.ndarray:
        """Visit count per root action."""
        counts = np.zeros(self.tree.num_actions if self.tree else 0, dtype=np.int64)
        if self.tree is not None:
            for child in self.tree.children_of(self.tree.root):
                counts[child.action] = child.visits
        return counts
