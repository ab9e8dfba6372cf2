"""Persistence for SKYFLAP."""

from .best_score import BestScoreStore

__all__ = ["BestScoreStore"]
