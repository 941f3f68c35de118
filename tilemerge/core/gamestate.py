"""
Win and stuck predicates for the sliding-tile merge puzzle.

Legality is decided by running the full move transform in each direction, so edge cases are handled
exactly as the move engine handles them.
"""

from numpy import ndarray

from tilemerge.core.gamemove import Direction, move

# ##>: Default win tile; callers may pass any other value.
DEFAULT_THRESHOLD = 128


def has_reached_threshold(grid: ndarray, threshold: int = DEFAULT_THRESHOLD) -> bool:
    """
    Check whether any tile is at least the threshold.

    Parameters
    ----------
    grid : ndarray
        The game grid.
    threshold : int, optional
        Tile value that wins the game (default is 128).

    Returns
    -------
    bool
        True if some cell holds a value greater than or equal to the threshold.

    Raises
    ------
    ValueError
        If the threshold is not positive.
    """
    if threshold <= 0:
        raise ValueError(f'threshold must be positive, got {threshold}')
    return bool((grid >= threshold).any())


def legal_actions(grid: ndarray) -> list[Direction]:
    """
    Directions whose move changes the grid, in ``Direction`` order.
    """
    return [direction for direction in Direction if move(grid, direction).moved]


def illegal_actions(grid: ndarray) -> list[Direction]:
    """
    Directions whose move leaves the grid unchanged, in ``Direction`` order.
    """
    return [direction for direction in Direction if not move(grid, direction).moved]


def has_any_legal_move(grid: ndarray) -> bool:
    """
    Check whether at least one direction changes the grid.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    bool
        False when the grid is stuck, i.e. every direction yields ``moved = False``.
    """
    return any(move(grid, direction).moved for direction in Direction)


def is_done(grid: ndarray) -> bool:
    """True when no direction produces a move."""
    return not has_any_legal_move(grid)


def max_tile(grid: ndarray) -> int:
    """Largest tile on the grid, 0 when the grid is empty."""
    return int(grid.max()) if grid.size else 0
