"""Evolutionary MCTS: tree search over mutated action genomes.

Every node holds a genome (a fixed-length action plan). A child differs
from its parent by one mutated gene. Each iteration grows a complete tree
of depth ``max_rollout_depth`` below the root, ``branching_factor`` children
per node, and evaluates the leaves by playing their genomes out on copies
of the turn's state. Improving leaves are recorded on a scoreboard shared
by the whole tree; the best genome found is the decision.

Internal expansion never advances the state: only leaf evaluation does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gridmcts.mcts.budget import SearchBudget
from gridmcts.mcts.genome import Genome, mutate, random_genome
from gridmcts.mcts.scoreboard import Scoreboard
from gridmcts.mcts.utils import JointActionRoller, noise

if TYPE_CHECKING:
    from gridmcts.actions import ActionSpace
    from gridmcts.mcts.config import EvolutionaryMCTSConfig
    from gridmcts.protocols import ForwardModel, StateHeuristic

logger = logging.getLogger(__name__)

NO_NODE = -1


class GenomeNode:
    """One genome in the mutation tree.

    Attributes:
        index: Position in the arena.
        parent: Arena index of the parent (NO_NODE for the root).
        depth: Distance from the root.
        genome: The node's action plan; never modified after construction.
        children: Arena indices of the mutated children, in creation order.
    """

    __slots__ = ("index", "parent", "depth", "genome", "children")

    def __init__(self, index: int, parent: int, depth: int, genome: Genome) -> None:
        self.index = index
        self.parent = parent
        self.depth = depth
        self.genome = genome
        self.children: list[int] = []

    def __repr__(self) -> str:
        return f"GenomeNode(index={self.index}, depth={self.depth}, genome={self.genome})"


class GenomeTree:
    """Arena of GenomeNodes plus the scoreboard they share."""

    def __init__(self, root_genome: Genome) -> None:
        self.nodes: list[GenomeNode] = [GenomeNode(0, NO_NODE, 0, root_genome)]
        self.scoreboard = Scoreboard()

    @property
    def root(self) -> GenomeNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def add_child(self, parent: GenomeNode, genome: Genome) -> GenomeNode:
        child = GenomeNode(len(self.nodes), parent.index, parent.depth + 1, genome)
        self.nodes.append(child)
        parent.children.append(child.index)
        return child

    def children_of(self, node: GenomeNode) -> list[GenomeNode]:
        return [self.nodes[i] for i in node.children]


@dataclass
class EvolutionaryResult:
    """Outcome of one evolutionary search.

    Attributes:
        genome: Best genome found, or None if no leaf improved on -inf.
        score: Score of that genome (-inf if none).
        iterations: Completed iterations.
        leaves_evaluated: Number of leaf genomes played out.
        elapsed_ms: Wall-clock duration of the search.
    """

    genome: Genome | None
    score: float
    iterations: int
    leaves_evaluated: int
    elapsed_ms: float


class EvolutionarySearch:
    """Genome-mutation tree search over one turn."""

    def __init__(
        self,
        config: EvolutionaryMCTSConfig,
        heuristic: StateHeuristic,
        action_space: ActionSpace,
        rng: np.random.Generator,
    ) -> None:
        self.config = config
        self.heuristic = heuristic
        self.action_space = action_space
        self._rng = rng
        self._roller = JointActionRoller(rng)
        self._state: ForwardModel | None = None
        self._leaves_evaluated = 0
        self.tree: GenomeTree | None = None

    def attach(self, state: ForwardModel, genome: Genome | None = None) -> None:
        """Bind the turn's state and root genome.

        Args:
            state: The turn's state; only copied, never mutated.
            genome: Root genome carried over from the previous turn. A random
                genome is drawn when None.

        Raises:
            ValueError: If ``genome`` has the wrong length or an out-of-range gene.
        """
        num_actions = state.legal_action_count()
        if genome is None:
            genome = random_genome(self.config.genome_length, num_actions, self._rng)
        elif len(genome) != self.config.genome_length:
            raise ValueError(
                f"Root genome has length {len(genome)}, expected {self.config.genome_length}"
            )
        elif any(not 0 <= g < num_actions for g in genome):
            raise ValueError(f"Root genome {genome} has genes outside [0, {num_actions})")

        self._state = state
        self.tree = GenomeTree(tuple(int(g) for g in genome))

    @property
    def scoreboard(self) -> Scoreboard:
        if self.tree is None:
            msg = "No tree: call attach() first"
            raise RuntimeError(msg)
        return self.tree.scoreboard

    def search(self) -> EvolutionaryResult:
        """Run iterations until the budget is exhausted.

        The turn's current best is reset to -inf before the first iteration.

        Raises:
            RuntimeError: If no state has been attached.
        """
        if self._state is None or self.tree is None:
            msg = "search() called before attach()"
            raise RuntimeError(msg)

        self.tree.scoreboard = Scoreboard()
        self._leaves_evaluated = 0

        budget = SearchBudget(self.config.max_iterations, self.config.time_budget_ms)
        budget.start()
        iterations = 0

        while not budget.exhausted(iterations):
            self.grow(self._state.copy())
            iterations += 1

        board = self.tree.scoreboard
        logger.debug(
            f"EMCTS finished {iterations} iterations in {budget.elapsed_ms:.1f}ms, "
            f"{self._leaves_evaluated} leaves, {len(board)} improvements, "
            f"best={board.best_score:.4f}"
        )
        return EvolutionaryResult(
            genome=board.best_genome,
            score=board.best_score,
            iterations=iterations,
            leaves_evaluated=self._leaves_evaluated,
            elapsed_ms=budget.elapsed_ms,
        )

    def grow(self, state: ForwardModel) -> None:
        """One iteration: depth-first construction of a full tree below the root.

        Uses an explicit work-list of ``[node, expansions_left]`` frames so the
        order matches a recursive depth-first walk: a child's whole subtree is
        built before its next sibling is created.
        """
        assert self.tree is not None
        terminal = state.is_terminal()
        stack: list[list] = []
        self._enter(self.tree.root, state, terminal, stack)

        while stack:
            frame = stack[-1]
            if frame[1] == 0:
                stack.pop()
                continue
            frame[1] -= 1
            child = self.expand(frame[0], state)
            self._enter(child, state, terminal, stack)

    def _enter(
        self,
        node: GenomeNode,
        state: ForwardModel,
        terminal: bool,
        stack: list[list],
    ) -> None:
        leaf_parent_depth = self.config.max_rollout_depth - 1
        if not terminal and node.depth < leaf_parent_depth:
            stack.append([node, self.config.branching_factor])
        elif node.depth == leaf_parent_depth:
            leaves = [self.expand(node, state) for _ in range(self.config.branching_factor)]
            self.evaluate(leaves, state)

    def expand(self, node: GenomeNode, state: ForwardModel) -> GenomeNode:
        """Add a child whose genome differs from ``node``'s at one random position."""
        assert self.tree is not None
        position = int(self._rng.integers(len(node.genome)))
        if self.config.use_fpu:
            gene = self.select_gene(node.genome, state)
        else:
            gene = int(self._rng.integers(state.legal_action_count()))
        return self.tree.add_child(node, mutate(node.genome, position, gene))

    def select_gene(self, genome: Genome, state: ForwardModel) -> int:
        """First-play-urgency gene choice.

        Actions already in ``genome`` get the fixed default urgency. Any other
        action is scored by a one-step lookahead where only the acting agent
        moves. Highest urgency wins; ties go to the lowest index.
        """
        me = state.acting_agent_id()
        present = set(genome)
        urgencies = np.empty(state.legal_action_count(), dtype=np.float64)

        for action in range(len(urgencies)):
            if action in present:
                urgencies[action] = self.config.fpu_default_urgency
                continue
            lookahead = state.copy()
            lookahead.advance({me: action})
            urgencies[action] = noise(
                self.heuristic.evaluate(lookahead), self.config.epsilon, self._rng.random()
            )

        return int(np.argmax(urgencies))

    def evaluate(self, leaves: list[GenomeNode], state: ForwardModel) -> None:
        """Play each leaf genome out on its own copy and record improvements.

        Genes are applied in order as the acting agent's move with random
        opponents, stopping early on a terminal state. The rolled-out copy
        is what gets scored.
        """
        assert self.tree is not None
        for leaf in leaves:
            rollout = state.copy()
            for gene in leaf.genome:
                self._roller.roll(rollout, gene)
                if rollout.is_terminal():
                    break

            score = noise(self.heuristic.evaluate(rollout), self.config.epsilon, self._rng.random())
            self._leaves_evaluated += 1
            self.tree.scoreboard.record(leaf.genome, score)

    def find_best_action(self) -> Genome | None:
        """Best genome cached on the scoreboard (None if nothing improved)."""
        if self.tree is None:
            return None
        return self.tree.scoreboard.best_genome
