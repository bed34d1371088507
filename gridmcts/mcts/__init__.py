"""Tree search for turn-synchronous multi-agent grid games."""

from gridmcts.mcts.config import ClassicalMCTSConfig, EvolutionaryMCTSConfig, SearchConfig
from gridmcts.mcts.evolutionary import (
    EvolutionaryResult,
    EvolutionarySearch,
    GenomeNode,
    GenomeTree,
)
from gridmcts.mcts.genome import Genome, mutate, random_genome, shift_genome
from gridmcts.mcts.node import RaveStats, SearchTree, TreeNode
from gridmcts.mcts.scoreboard import Scoreboard, ScoreboardEntry
from gridmcts.mcts.search import ClassicalSearch, SearchResult
from gridmcts.mcts.selection import SelectionError, select_child

__all__ = [
    "ClassicalMCTSConfig",
    "ClassicalSearch",
    "EvolutionaryMCTSConfig",
    "EvolutionaryResult",
    "EvolutionarySearch",
    "Genome",
    "GenomeNode",
    "GenomeTree",
    "RaveStats",
    "Scoreboard",
    "ScoreboardEntry",
    "SearchConfig",
    "SearchResult",
    "SearchTree",
    "SelectionError",
    "TreeNode",
    "mutate",
    "random_genome",
    "select_child",
    "shift_genome",
]
