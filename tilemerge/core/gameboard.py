"""
Grid model and tile spawning for the sliding-tile merge puzzle.

A grid is a 2D integer NumPy array where ``0`` marks an empty cell and every other cell holds a
positive power of two. Nothing in this module mutates a grid it receives.
"""

from typing import Sequence

from numpy import argwhere, count_nonzero, iinfo, int64, integer, ndarray, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Largest power of two an int64 grid can hold.
MAX_TILE = (iinfo(int64).max >> 1) + 1

# ##>: Module-level generator used when the caller does not inject one.
_GENERATOR = default_rng(PCG64DXSM())


class InvalidGridError(ValueError):
    """Raised when externally sourced cells do not describe a valid grid."""


def create_empty_grid(rows: int, cols: int, dtype=int64) -> ndarray:
    """
    Create a grid where every cell is empty.

    Parameters
    ----------
    rows : int
        Number of rows.
    cols : int
        Number of columns.
    dtype : data-type, optional
        Integer dtype of the grid (default is int64).

    Returns
    -------
    ndarray
        A zero-filled array of shape (rows, cols).

    Raises
    ------
    ValueError
        If either dimension is not positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f'grid dimensions must be positive, got {rows}x{cols}')
    return zeros((rows, cols), dtype=dtype)


def copy_grid(grid: ndarray) -> ndarray:
    """Return a copy of the grid backed by independent storage."""
    return grid.copy()


def empty_cells(grid: ndarray) -> list[tuple[int, int]]:
    """
    List the coordinates of the empty cells.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    list[tuple[int, int]]
        (row, col) pairs in row-major order.
    """
    return [(int(cell[0]), int(cell[1])) for cell in argwhere(grid == 0)]


def count_tiles(grid: ndarray) -> int:
    """Number of non-empty cells."""
    return int(count_nonzero(grid))


def _is_empty_value(value) -> bool:
    return isinstance(value, (int, integer)) and not isinstance(value, bool) and value == 0


def _is_tile_value(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, integer)):
        return False
    value = int(value)
    return 2 <= value <= MAX_TILE and value & (value - 1) == 0


def load_grid(cells: Sequence[Sequence[int | None]]) -> ndarray:
    """
    Build a grid from nested sequences, such as state restored from storage.

    Parameters
    ----------
    cells : Sequence[Sequence[int | None]]
        Rows of cell values. ``None`` and ``0`` both denote an empty cell.

    Returns
    -------
    ndarray
        A new int64 grid holding the same values.

    Raises
    ------
    InvalidGridError
        If the rows are missing or ragged, or a cell is neither empty nor a power of two between 2 and ``MAX_TILE``.
    """
    try:
        rows = [list(row) for row in cells]
    except TypeError as error:
        raise InvalidGridError(f'grid rows must be sequences: {error}') from error

    if not rows or not rows[0]:
        raise InvalidGridError('grid must have at least one row and one column')

    width = len(rows[0])
    grid = zeros((len(rows), width), dtype=int64)
    for i, row in enumerate(rows):
        if len(row) != width:
            raise InvalidGridError(f'row {i} has {len(row)} cells, expected {width}')
        for j, value in enumerate(row):
            if value is None or _is_empty_value(value):
                continue
            if not _is_tile_value(value):
                raise InvalidGridError(
                    f'cell ({i}, {j}) holds {value!r}, expected a power of two between 2 and {MAX_TILE}'
                )
            grid[i, j] = value
    return grid


def dump_grid(grid: ndarray) -> list[list[int | None]]:
    """Convert a grid to nested lists, with ``None`` for empty cells."""
    return [[int(value) if value else None for value in row] for row in grid.tolist()]


def spawn_random_tile(grid: ndarray, rng: Generator | None = None) -> ndarray:
    """
    Place one new tile on a uniformly chosen empty cell.

    Parameters
    ----------
    grid : ndarray
        The game grid. Left untouched.
    rng : Generator, optional
        Source of randomness. Anything exposing ``integers(n)`` and ``random()`` like a NumPy
        ``Generator`` works; the module generator is used when omitted.

    Returns
    -------
    ndarray
        A new grid with exactly one more tile, or the input itself when the grid is full.

    Notes
    -----
    - The cell is drawn first, then the value: 4 with probability 0.1, otherwise 2.
    """
    rng = rng if rng is not None else _GENERATOR

    cells = empty_cells(grid)
    if not cells:
        return grid

    row, col = cells[int(rng.integers(len(cells)))]
    value = 4 if rng.random() < TILE_SPAWN_PROBS[4] else 2

    new_grid = grid.copy()
    new_grid[row, col] = value
    return new_grid


def fill_cells(grid: ndarray, number_tile: int, rng: Generator | None = None) -> ndarray:
    """
    Spawn several tiles one after another.

    Parameters
    ----------
    grid : ndarray
        The game grid. Left untouched.
    number_tile : int
        Number of tiles to add.
    rng : Generator, optional
        Source of randomness, see ``spawn_random_tile``.

    Returns
    -------
    ndarray
        A new grid, or the input itself when no tile was added. Stops early once the grid is full.
    """
    for _ in range(number_tile):
        if count_tiles(grid) == grid.size:
            break
        grid = spawn_random_tile(grid, rng=rng)
    return grid
