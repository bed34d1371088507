"""Tests for the match loop."""

import pytest

from gridmcts.ai import EMCTSAgent, MCTSAgent, SafeRandomAgent
from gridmcts.ai.base import Agent
from gridmcts.eval.game import GameResult, play_game
from gridmcts.mcts.config import ClassicalMCTSConfig, EvolutionaryMCTSConfig


class IllegalAgent(Agent):
    def get_move(self, state) -> int:
        return 99


class RecordingAgent(Agent):
    """Always stays; remembers what it was told."""

    def __init__(self) -> None:
        self.observed: list[dict[int, int]] = []
        self.resets = 0
        self.acting_ids: list[int] = []

    def get_move(self, state) -> int:
        self.acting_ids.append(state.acting_agent_id())
        return 0

    def reset(self) -> None:
        self.resets += 1

    def observe_move(self, joint_actions) -> None:
        self.observed.append(dict(joint_actions))


class TestPlayGame:
    """play_game."""

    def test_runs_to_terminal(self, make_game, make_distance_heuristic) -> None:
        game = make_game(max_steps=6)
        agents = {
            0: MCTSAgent(
                make_distance_heuristic((4, 4)), ClassicalMCTSConfig(max_iterations=20), seed=0
            ),
            1: EMCTSAgent(
                make_distance_heuristic((0, 0)),
                EvolutionaryMCTSConfig(max_iterations=2, max_rollout_depth=2),
                seed=1,
            ),
        }

        result = play_game(agents, game)

        assert isinstance(result, GameResult)
        assert result.terminal
        assert result.steps == 6
        assert len(result.history) == 6
        assert all(set(joint) == {0, 1} for joint in result.history)

    def test_step_cap(self, make_game) -> None:
        game = make_game(max_steps=100)
        result = play_game({0: SafeRandomAgent(seed=0)}, game, max_steps=5)

        assert result.steps == 5
        assert not result.terminal

    def test_agents_see_their_own_view(self, make_game) -> None:
        game = make_game(max_steps=3)
        first, second = RecordingAgent(), RecordingAgent()

        play_game({0: first, 1: second}, game)

        assert first.acting_ids == [0, 0, 0]
        assert second.acting_ids == [1, 1, 1]
        assert first.resets == second.resets == 1
        assert first.observed == [{0: 0, 1: 0}] * 3

    def test_illegal_action_raises(self, make_game) -> None:
        with pytest.raises(ValueError, match="illegal action"):
            play_game({0: IllegalAgent()}, make_game())
