# -*- coding: utf-8 -*-
"""
Rule engine of the sliding-tile merge puzzle.

It includes the grid model, the slide-and-merge transform, random tile spawning,
and the win and stuck predicates. Every function is pure: grids are never mutated.
"""

from .gameboard import (
    MAX_TILE,
    TILE_SPAWN_PROBS,
    InvalidGridError,
    copy_grid,
    count_tiles,
    create_empty_grid,
    dump_grid,
    empty_cells,
    fill_cells,
    load_grid,
    spawn_random_tile,
)
from .gamemove import Direction, MoveResult, as_direction, merge_line, move, slide_and_merge
from .gamestate import (
    DEFAULT_THRESHOLD,
    has_any_legal_move,
    has_reached_threshold,
    illegal_actions,
    is_done,
    legal_actions,
    max_tile,
)

__all__ = [
    "MAX_TILE",
    "TILE_SPAWN_PROBS",
    "DEFAULT_THRESHOLD",
    "InvalidGridError",
    "Direction",
    "MoveResult",
    "as_direction",
    "create_empty_grid",
    "copy_grid",
    "empty_cells",
    "count_tiles",
    "load_grid",
    "dump_grid",
    "merge_line",
    "slide_and_merge",
    "move",
    "spawn_random_tile",
    "fill_cells",
    "has_reached_threshold",
    "has_any_legal_move",
    "legal_actions",
    "illegal_actions",
    "is_done",
    "max_tile",
]
