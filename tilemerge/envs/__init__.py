# -*- coding: utf-8 -*-
"""
Game session for the sliding-tile merge puzzle.

This module provides the `TileMergeGame` class, which keeps the current grid and applies the win and stuck policy,
and its `GameConfig`.
"""

from .config import GameConfig
from .game import TileMergeGame

__all__ = ["GameConfig", "TileMergeGame"]
