# -*- coding: utf-8 -*-
"""
Session configuration.
"""
from dataclasses import dataclass

from tilemerge.core.gamestate import DEFAULT_THRESHOLD


@dataclass(frozen=True)
class GameConfig:
    """Dimensions and policy values of a game session."""

    rows: int = 4
    cols: int = 4
    threshold: int = DEFAULT_THRESHOLD
    start_tiles: int = 2

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f'grid dimensions must be positive, got {self.rows}x{self.cols}')
        if self.threshold <= 0:
            raise ValueError(f'threshold must be positive, got {self.threshold}')
        if not 0 <= self.start_tiles <= self.rows * self.cols:
            raise ValueError(f'start_tiles must be between 0 and {self.rows * self.cols}, got {self.start_tiles}')
