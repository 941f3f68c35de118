"""Game session composing the rule engine under the host policy."""

import logging
from typing import Any, Sequence

from numpy import ndarray
from numpy.random import Generator, default_rng

from tilemerge.core.gameboard import (
    InvalidGridError,
    create_empty_grid,
    dump_grid,
    fill_cells,
    load_grid,
    spawn_random_tile,
)
from tilemerge.core.gamemove import Direction, as_direction, move
from tilemerge.core.gamestate import has_any_legal_move, has_reached_threshold, legal_actions

from .config import GameConfig

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TileMergeGame:
    """
    A single game session.

    This class keeps the current grid and the terminal flags, and applies the session policy: after
    every successful move a tile is spawned, the win condition is checked first and the stuck
    condition only when the game is not won. Once won or stuck, the session ignores moves until reset.
    """

    # ##: All Actions.
    ACTIONS = {direction.name.lower(): direction for direction in Direction}

    def __init__(self, config: GameConfig | None = None, rng: Generator | None = None):
        """
        Initialize the session and start a new game.

        Parameters
        ----------
        config : GameConfig, optional
            Grid dimensions, win threshold and number of starting tiles (default is a 4x4 grid, 128).
        rng : Generator, optional
            Source of randomness for tile spawns (default is a fresh NumPy generator).
        """
        self.config = config if config is not None else GameConfig()
        self._rng = rng if rng is not None else default_rng()
        self._grid: ndarray = create_empty_grid(self.config.rows, self.config.cols)
        self._won = False
        self._finished = False

        self.reset()

    @property
    def grid(self) -> ndarray:
        """The current grid. Replaced, never mutated, by the session."""
        return self._grid

    @property
    def won(self) -> bool:
        """True once a tile reached the configured threshold."""
        return self._won

    @property
    def finished(self) -> bool:
        """True once the game is won or no direction produces a move."""
        return self._finished

    @property
    def legal_actions(self) -> list[Direction]:
        """Directions that would change the current grid."""
        return legal_actions(self._grid)

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Start a new game on an empty grid with the configured number of random tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the session generator for a reproducible game.

        Returns
        -------
        ndarray
            The new grid.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        grid = create_empty_grid(self.config.rows, self.config.cols)
        self._grid = fill_cells(grid, number_tile=self.config.start_tiles, rng=self._rng)
        self._won = False
        self._finished = False
        _logger.debug('New %dx%d game started', self.config.rows, self.config.cols)
        return self._grid

    def step(self, direction: Direction | int | str) -> tuple[ndarray, bool, bool]:
        """
        Apply a move to the current grid.

        Parameters
        ----------
        direction : Direction
            Direction of the slide. Integer codes and direction names are accepted too.

        Returns
        -------
        tuple[ndarray, bool, bool]
            A tuple containing:
            - The current grid after the move and spawn (ndarray)
            - Whether the move changed the grid (bool)
            - Whether the game is finished (bool)

        Notes
        -----
        - A move that changes nothing, or any move once the game is finished, leaves the session as is.

        Raises
        ------
        ValueError
            If the direction is unknown, whether or not the game is finished.
        """
        direction = as_direction(direction)
        if self._finished:
            return self._grid, False, True

        result, moved = move(self._grid, direction)
        if not moved:
            return self._grid, False, False

        self._grid = spawn_random_tile(result, rng=self._rng)
        _logger.debug('Applied move %s', direction)

        if has_reached_threshold(self._grid, self.config.threshold):
            self._won = True
            self._finished = True
            _logger.info('Threshold %d reached', self.config.threshold)
        elif not has_any_legal_move(self._grid):
            self._finished = True
            _logger.info('No legal move left, game over')

        return self._grid, True, self._finished

    def restore(self, cells: Sequence[Sequence[int | None]], won: bool = False, finished: bool = False) -> bool:
        """
        Restore a previously saved session.

        Parameters
        ----------
        cells : Sequence[Sequence[int | None]]
            Saved grid rows, ``None`` or ``0`` for empty cells.
        won : bool, optional
            Saved win flag.
        finished : bool, optional
            Saved terminal flag.

        Returns
        -------
        bool
            True if the state was restored. On invalid state a new game is started instead.
        """
        try:
            grid = load_grid(cells)
            if grid.shape != (self.config.rows, self.config.cols):
                raise InvalidGridError(
                    f'saved grid is {grid.shape[0]}x{grid.shape[1]}, expected {self.config.rows}x{self.config.cols}'
                )
        except InvalidGridError as error:
            _logger.warning('Discarding saved state: %s', error)
            self.reset()
            return False

        self._grid = grid
        self._won = bool(won)
        self._finished = bool(finished) or self._won
        return True

    def snapshot(self) -> dict[str, Any]:
        """
        Plain-data view of the session, for the host to persist.

        Returns
        -------
        dict[str, Any]
            ``grid`` as nested lists with ``None`` for empty cells, plus the ``won`` and ``finished`` flags.
        """
        return {'grid': dump_grid(self._grid), 'won': self._won, 'finished': self._finished}

    def render(self) -> None:
        """
        Render the game grid. This method prints the current grid to the console.
        """
        for row in self._grid.tolist():
            print(' \t'.join(map(str, row)))
