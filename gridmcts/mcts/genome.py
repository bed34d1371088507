"""Genome helpers: fixed-length action sequences used by evolutionary MCTS."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

Genome = tuple[int, ...]


def random_genome(length: int, num_actions: int, rng: np.random.Generator) -> Genome:
    """Uniformly random genome of ``length`` action indices."""
    return tuple(int(a) for a in rng.integers(num_actions, size=length))


def mutate(genome: Genome, position: int, action: int) -> Genome:
    """Copy of ``genome`` with the gene at ``position`` replaced by ``action``."""
    genes = list(genome)
    genes[position] = action
    return tuple(genes)


def shift_genome(genome: Genome, num_actions: int, rng: np.random.Generator) -> Genome:
    """Seed for the next turn: drop the played gene, append a random one.

    ``[a0, a1, a2, a3, a4]`` becomes ``[a1, a2, a3, a4, r]``.
    """
    return (*genome[1:], int(rng.integers(num_actions)))
