# -*- coding: utf-8 -*-
"""
Python implementation of the sliding-tile merge puzzle rules.
"""

from .core import (
    Direction,
    InvalidGridError,
    MoveResult,
    create_empty_grid,
    has_any_legal_move,
    has_reached_threshold,
    move,
    spawn_random_tile,
)
from .envs import GameConfig, TileMergeGame

__all__ = [
    "Direction",
    "InvalidGridError",
    "MoveResult",
    "create_empty_grid",
    "move",
    "spawn_random_tile",
    "has_any_legal_move",
    "has_reached_threshold",
    "GameConfig",
    "TileMergeGame",
]
