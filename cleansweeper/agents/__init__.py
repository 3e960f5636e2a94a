"""
Cleansweeper automated players.

Provides agents for playing Cleansweeper:
- RandomAgent: Baseline that opens random hidden cells
- LogicAgent: Constraint-based deduction with flagging
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import LogicAgent, Constraint

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
    "Constraint",
]
