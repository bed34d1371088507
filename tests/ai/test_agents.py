"""Tests for grid-game agents."""

import logging

import pytest
from pydantic import TypeAdapter

from gridmcts.actions import Action
from gridmcts.ai import (
    AgentConfig,
    EMCTSAgent,
    EMCTSAgentConfig,
    MCTSAgent,
    MCTSAgentConfig,
    RandomAgent,
    SafeRandomAgent,
)
from gridmcts.mcts.config import ClassicalMCTSConfig, EvolutionaryMCTSConfig


class TestMCTSAgent:
    """Classical agent."""

    def test_returns_legal_action(self, game, constant_heuristic) -> None:
        agent = MCTSAgent(constant_heuristic, ClassicalMCTSConfig(max_iterations=30), seed=0)
        action = agent.get_move(game)
        assert 0 <= action < game.legal_action_count()

    def test_does_not_modify_state(self, game, constant_heuristic) -> None:
        before = (dict(game.positions), game.step)
        agent = MCTSAgent(constant_heuristic, ClassicalMCTSConfig(max_iterations=30), seed=0)
        agent.get_move(game)
        assert (game.positions, game.step) == before

    def test_records_durations(self, game, constant_heuristic) -> None:
        agent = MCTSAgent(constant_heuristic, ClassicalMCTSConfig(max_iterations=10), seed=0)
        agent.get_move(game)
        agent.get_move(game)
        assert len(agent.durations) == 2

        agent.reset()
        assert agent.durations == []

    def test_seeded_agents_agree(self, game, make_distance_heuristic) -> None:
        moves = [
            MCTSAgent(make_distance_heuristic((4, 4)), ClassicalMCTSConfig(max_iterations=40), seed=9)
            .get_move(game)
            for _ in range(2)
        ]
        assert moves[0] == moves[1]


class TestEMCTSAgent:
    """Evolutionary agent and genome carry-over."""

    @pytest.fixture
    def config(self) -> EvolutionaryMCTSConfig:
        return EvolutionaryMCTSConfig(max_iterations=4, max_rollout_depth=3)

    def test_plays_first_gene(self, game, make_distance_heuristic, config) -> None:
        agent = EMCTSAgent(make_distance_heuristic((4, 2)), config, seed=0)
        action = agent.get_move(game)

        assert agent.last_result is not None
        assert agent.last_result.genome is not None
        assert action == agent.last_result.genome[0]

    def test_genome_carry_over(self, game, make_distance_heuristic, config) -> None:
        """Next turn's root genome is the accepted genome shifted left plus a random gene."""
        agent = EMCTSAgent(make_distance_heuristic((4, 2)), config, seed=0)
        assert agent.genome is None

        agent.get_move(game)

        accepted = agent.last_result.genome
        assert agent.genome is not None
        assert agent.genome[:4] == accepted[1:]
        assert 0 <= agent.genome[4] < game.legal_action_count()

    def test_carried_genome_seeds_next_search(self, game, constant_heuristic, config) -> None:
        """Genomes found on turn two descend from the carried genome."""
        agent = EMCTSAgent(constant_heuristic, config, seed=1)
        agent.get_move(game)
        carried = agent.genome

        agent.get_move(game)
        best = agent.last_result.genome
        diffs = sum(a != b for a, b in zip(carried, best, strict=True))
        # at most one mutation per tree level
        assert diffs <= config.max_rollout_depth

    def test_terminal_state_falls_back_to_stop(
        self, make_game, constant_heuristic, config, caplog
    ) -> None:
        """No improving leaf: play the no-op and keep a shifted root genome."""
        game = make_game(max_steps=0)
        agent = EMCTSAgent(constant_heuristic, config, seed=0)

        with caplog.at_level(logging.WARNING, logger="gridmcts.ai.emcts_agent"):
            action = agent.get_move(game)

        assert action == Action.STOP
        assert agent.genome is not None
        assert len(agent.genome) == config.genome_length
        assert "no improving genome" in caplog.text

    def test_reset_clears_genome(self, game, constant_heuristic, config) -> None:
        agent = EMCTSAgent(constant_heuristic, config, seed=0)
        agent.get_move(game)
        agent.reset()

        assert agent.genome is None
        assert agent.last_result is None
        assert agent.durations == []

    def test_name_mentions_fpu(self, constant_heuristic) -> None:
        agent = EMCTSAgent(constant_heuristic, EvolutionaryMCTSConfig(use_fpu=True))
        assert "FPU" in agent.name


class TestRandomAgents:
    """Baseline agents."""

    def test_random_agent_range(self, game) -> None:
        agent = RandomAgent(seed=0)
        assert all(0 <= agent.get_move(game) < 6 for _ in range(50))

    def test_safe_random_avoids_hazard(self, make_game) -> None:
        game = make_game(width=3, height=1, positions={0: (1, 0)}, hazards=[(2, 0)])
        agent = SafeRandomAgent(seed=0)
        moves = {agent.get_move(game) for _ in range(100)}
        assert Action.RIGHT not in moves
        assert Action.LEFT in moves


class TestAgentConfig:
    """Agent config union."""

    def test_dispatch_and_build(self, constant_heuristic) -> None:
        adapter = TypeAdapter(AgentConfig)

        mcts = adapter.validate_python({"variant": "mcts", "search": {"max_iterations": 5}})
        assert isinstance(mcts, MCTSAgentConfig)
        assert isinstance(mcts.build(constant_heuristic), MCTSAgent)

        emcts = adapter.validate_python({"variant": "emcts", "seed": 3})
        assert isinstance(emcts, EMCTSAgentConfig)
        agent = emcts.build(constant_heuristic)
        assert isinstance(agent, EMCTSAgent)

        random_agent = adapter.validate_python({"variant": "random"}).build(constant_heuristic)
        assert isinstance(random_agent, RandomAgent)

        safe = adapter.validate_python({"variant": "safe_random"}).build(constant_heuristic)
        assert isinstance(safe, SafeRandomAgent)
