"""Match execution for grid-game agents."""

from gridmcts.eval.game import GameResult, play_game

__all__ = ["GameResult", "play_game"]
