"""Real-time tree search for turn-synchronous multi-agent grid games.

Two search strategies share one forward-model contract:
- Classical MCTS with UCB1 + RAVE selection (``gridmcts.mcts.search``)
- Evolutionary MCTS over fixed-length action genomes (``gridmcts.mcts.evolutionary``)
"""

__version__ = "0.1.0"
