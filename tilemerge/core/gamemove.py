"""
Slide-and-merge transform for the sliding-tile merge puzzle.

Every direction is handled the same way: the grid is rotated so the requested direction becomes
"left", each row is merged and packed against column 0, and the result is rotated back.
"""

from enum import IntEnum
from typing import NamedTuple

from numpy import array, array_equal, ascontiguousarray, iinfo, ndarray, rot90, zeros_like


class Direction(IntEnum):
    """
    The four slide directions.

    The value is the number of counter-clockwise quarter turns that bring the direction to ``LEFT``.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        """
        Look up a direction by name, ignoring case.

        Raises
        ------
        ValueError
            If the name is not one of up, down, left or right.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError as error:
            raise ValueError(f'unknown direction name {name!r}') from error


class MoveResult(NamedTuple):
    """Outcome of a move: the new grid and whether any cell changed."""

    grid: ndarray
    moved: bool


def as_direction(direction: Direction | int | str) -> Direction:
    """
    Coerce a direction, an integer code or a direction name to ``Direction``.

    Raises
    ------
    ValueError
        If the value does not denote one of the four directions.
    """
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        return Direction.from_name(direction)
    if isinstance(direction, bool):
        raise ValueError(f'unknown direction {direction!r}')
    try:
        return Direction(direction)
    except (ValueError, TypeError) as error:
        raise ValueError(f'unknown direction {direction!r}') from error


def merge_line(line: ndarray) -> ndarray:
    """
    Merge adjacent equal tiles of a line, front to back.

    Parameters
    ----------
    line : ndarray
        A 1D array, ordered in the direction of motion (index 0 is the edge tiles slide towards).

    Returns
    -------
    ndarray
        The packed sequence of tiles after merging, without padding.

    Notes
    -----
    - Empty cells (zeros) are removed before merging.
    - Each tile takes part in at most one merge: ``[2, 2, 2, 2]`` gives ``[4, 4]``, never ``[8]``.

    Raises
    ------
    ValueError
        If a merged tile would not fit in the dtype of the line.
    """
    # ##: Handle lines with nothing to merge.
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return non_zero

    # ##: Walk the line and merge pairs.
    limit = iinfo(line.dtype).max // 2
    result = []
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            if non_zero[i] > limit:
                raise ValueError(f'merging two {non_zero[i]} tiles overflows {line.dtype}')
            result.append(non_zero[i] * 2)
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return array(result, dtype=line.dtype)


def slide_and_merge(grid: ndarray) -> ndarray:
    """
    Slide every row of the grid to the left and merge.

    Parameters
    ----------
    grid : ndarray
        The game grid.

    Returns
    -------
    ndarray
        A new grid where each row is merged and packed against column 0.

    Notes
    -----
    - For other directions, rotate the grid before calling this function.
    """
    result = zeros_like(grid)
    for i, row in enumerate(grid):
        merged_row = merge_line(row)
        result[i, : len(merged_row)] = merged_row
    return result


def move(grid: ndarray, direction: Direction | int | str) -> MoveResult:
    """
    Slide all tiles of the grid in one direction.

    Parameters
    ----------
    grid : ndarray
        The game grid. Never modified.
    direction : Direction
        Direction of the slide. Integer codes and direction names are accepted too.

    Returns
    -------
    MoveResult
        A freshly allocated grid and a flag telling whether any cell differs from the input.

    Raises
    ------
    ValueError
        If the direction is unknown, the grid is not two-dimensional or a merge would overflow its dtype.
    """
    direction = as_direction(direction)
    if grid.ndim != 2:
        raise ValueError(f'grid must be two-dimensional, got shape {grid.shape}')

    rotated = rot90(grid, k=direction.value)
    updated = rot90(slide_and_merge(rotated), k=-direction.value)
    result = ascontiguousarray(updated)
    return MoveResult(result, not array_equal(result, grid))
