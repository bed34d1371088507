"""Append-only record of improving leaf evaluations for one turn."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from gridmcts.mcts.genome import Genome  # noqa: TC001


@dataclass(frozen=True)
class ScoreboardEntry:
    genome: Genome
    score: float


@dataclass
class Scoreboard:
    """Improvement trace shared by every node of one genome tree.

    Only strictly improving scores are appended, so entry scores are
    strictly increasing. ``best_genome``/``best_score`` cache the last
    entry and are the source of truth for the decision.
    """

    entries: list[ScoreboardEntry] = field(default_factory=list)
    best_score: float = -math.inf
    best_genome: Genome | None = None

    def record(self, genome: Genome, score: float) -> bool:
        """Append ``(genome, score)`` if it beats the current best.

        Returns:
            True if the entry was recorded.
        """
        if not score > self.best_score:
            return False
        self.entries.append(ScoreboardEntry(genome, score))
        self.best_score = score
        self.best_genome = genome
        return True

    def __len__(self) -> int:
        return len(self.entries)
