"""
Evaluation module for Cleansweeper agents.

Plays agents through many games and compares their results.
"""
from .evaluator import Evaluator

__all__ = [
    "Evaluator",
]
