"""Agents for the grid game."""

from gridmcts.ai.base import Agent
from gridmcts.ai.config import (
    AgentConfig,
    AgentConfigBase,
    EMCTSAgentConfig,
    MCTSAgentConfig,
    RandomAgentConfig,
    SafeRandomAgentConfig,
)
from gridmcts.ai.emcts_agent import EMCTSAgent
from gridmcts.ai.mcts_agent import MCTSAgent
from gridmcts.ai.random_agent import RandomAgent, SafeRandomAgent

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentConfigBase",
    "EMCTSAgent",
    "EMCTSAgentConfig",
    "MCTSAgent",
    "MCTSAgentConfig",
    "RandomAgent",
    "RandomAgentConfig",
    "SafeRandomAgent",
    "SafeRandomAgentConfig",
]
